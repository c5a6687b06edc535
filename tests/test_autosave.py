import json

from form_engine.autosave import STORAGE_VERSION, AutoSaveStore, deep_merge, parse_payload


def test_save_then_load(tmp_path):
    store = AutoSaveStore(str(tmp_path / 'session.json'))
    saved = store.save('{"id": "f"}', {'a': {'b': 'x'}})

    loaded = store.load()
    assert loaded == saved
    assert loaded.schema_text == '{"id": "f"}'
    assert loaded.values == {'a': {'b': 'x'}}
    assert not (tmp_path / 'session.json.tmp').exists()


def test_stored_layout(tmp_path):
    path = tmp_path / 'session.json'
    AutoSaveStore(str(path)).save('text', {})
    data = json.loads(path.read_text(encoding='utf-8'))
    assert data['version'] == STORAGE_VERSION
    assert isinstance(data['savedAt'], int)
    assert data['schemaText'] == 'text'
    assert data['values'] == {}


def test_load_missing_file(tmp_path):
    assert AutoSaveStore(str(tmp_path / 'nothing.json')).load() is None


def test_load_ignores_corrupt_file(tmp_path, caplog):
    path = tmp_path / 'session.json'
    path.write_text('{not json', encoding='utf-8')
    assert AutoSaveStore(str(path)).load() is None
    assert 'unreadable' in caplog.text


def test_clear(tmp_path):
    store = AutoSaveStore(str(tmp_path / 'session.json'))
    store.save('x', {})
    store.clear()
    assert store.load() is None
    store.clear()


def test_parse_payload_rejects_bad_shapes():
    good = {'version': STORAGE_VERSION, 'savedAt': 1, 'schemaText': '', 'values': {}}
    assert parse_payload(json.dumps(good)) is not None

    assert parse_payload('[]') is None
    assert parse_payload(json.dumps({**good, 'version': 2})) is None
    assert parse_payload(json.dumps({**good, 'savedAt': True})) is None
    assert parse_payload(json.dumps({**good, 'savedAt': '1'})) is None
    assert parse_payload(json.dumps({**good, 'schemaText': None})) is None
    assert parse_payload(json.dumps({**good, 'values': []})) is None


def test_deep_merge():
    base = {'a': {'x': 1, 'y': 2}, 'tags': ['one'], 'keep': True}
    merged = deep_merge(base, {'a': {'y': 3, 'z': 4}, 'tags': ['two']})
    assert merged == {'a': {'x': 1, 'y': 3, 'z': 4}, 'tags': ['two'], 'keep': True}
    assert base['a'] == {'x': 1, 'y': 2}


def test_deep_merge_replaces_mismatched_types():
    assert deep_merge({'a': {'b': 1}}, {'a': 'flat'}) == {'a': 'flat'}
    assert deep_merge({'a': 'flat'}, {'a': {'b': 1}}) == {'a': {'b': 1}}
