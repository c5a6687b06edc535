from copy import deepcopy

from form_engine.active_output import build_active_output, coerce_field_value, iter_visible_fields
from form_engine.models import FormSchema

from conftest import make_field


def schema_of(*groups):
    return FormSchema.model_validate({'id': 's', 'title': 'S', 'groups': list(groups)})


class TestRegistrationScenario:
    def test_individual_has_no_business_key(self, registration_schema):
        out = build_active_output(registration_schema, {'account': {'type': 'INDIVIDUAL'}})
        assert out == {'account': {'type': 'INDIVIDUAL'}}
        assert 'business' not in out

    def test_business(self, registration_schema):
        values = {'account': {'type': 'BUSINESS'}, 'business': {'companyName': 'Acme'}}
        assert build_active_output(registration_schema, values) == values

    def test_stale_values_of_hidden_groups_are_dropped(self, registration_schema):
        values = {
            'account': {'type': 'INDIVIDUAL'},
            'individual': {'firstName': 'Ada'},
            'business': {'companyName': 'Stale Corp'},
        }
        out = build_active_output(registration_schema, values)
        assert out == {'account': {'type': 'INDIVIDUAL'}, 'individual': {'firstName': 'Ada'}}


def test_hidden_group_hides_unconditional_descendants():
    schema = schema_of({
        'id': 'g',
        'visibility': {'dependsOn': 'show', 'operator': 'equals', 'value': True},
        'fields': [{'id': 'a', 'type': 'text', 'label': 'A'}],
        'groups': [{'id': 'child', 'fields': [{'id': 'b', 'type': 'text', 'label': 'B'}]}],
    })
    values = {'show': False, 'a': 'x', 'b': 'y'}
    assert build_active_output(schema, values) == {}
    assert build_active_output(schema, {**values, 'show': True}) == {'a': 'x', 'b': 'y'}


def test_hidden_field_is_skipped():
    schema = schema_of({
        'id': 'g',
        'fields': [
            {'id': 'kind', 'type': 'text', 'label': 'Kind'},
            {'id': 'extra', 'type': 'text', 'label': 'Extra',
             'visibility': {'dependsOn': 'kind', 'operator': 'isNotEmpty'}},
        ],
    })
    assert build_active_output(schema, {'kind': '', 'extra': 'x'}) == {}
    assert build_active_output(schema, {'kind': 'k', 'extra': 'x'}) == {'kind': 'k', 'extra': 'x'}


class TestOmitEmpty:
    SCHEMA = {
        'id': 'g',
        'fields': [
            {'id': 'a', 'type': 'text', 'label': 'A'},
            {'id': 'b', 'type': 'text', 'label': 'B'},
            {'id': 'c', 'type': 'text', 'label': 'C'},
            {'id': 'd', 'type': 'text', 'label': 'D'},
            {'id': 'e', 'type': 'checkbox', 'label': 'E'},
        ],
    }
    VALUES = {'a': '', 'b': None, 'd': [], 'e': False}

    def test_default_drops_empty_values(self):
        assert build_active_output(schema_of(self.SCHEMA), self.VALUES) == {'e': False}

    def test_keep_empty_values(self):
        out = build_active_output(schema_of(self.SCHEMA), self.VALUES, omit_empty=False)
        assert out == {'a': '', 'b': None, 'c': None, 'd': [], 'e': False}


class TestNumberCoercion:
    def test_digits_become_int(self):
        field = make_field(id='n', type='number')
        assert coerce_field_value(field, '42') == 42
        assert coerce_field_value(field, ' 7 ') == 7

    def test_other_values_pass_through(self):
        field = make_field(id='n', type='number')
        assert coerce_field_value(field, '4a') == '4a'
        assert coerce_field_value(field, '1.5') == '1.5'
        assert coerce_field_value(field, '') == ''
        assert coerce_field_value(make_field(id='t', type='text'), '42') == '42'

    def test_too_many_digits_stay_text(self):
        field = make_field(id='n', type='number')
        huge = '1' * 5000
        assert coerce_field_value(field, huge) == huge
        schema = schema_of({'id': 'g', 'fields': [{'id': 'n', 'type': 'number', 'label': 'N'}]})
        assert build_active_output(schema, {'n': huge}) == {'n': huge}

    def test_in_output(self, loan_schema):
        out = build_active_output(loan_schema, {'loan': {'amount': '5000', 'income': ''}})
        assert out == {'loan': {'amount': 5000}}


def test_does_not_mutate_or_alias_input(showcase_schema):
    values = {'account': {'type': 'BUSINESS'}, 'profile': {'fullName': ['a', 'b']}}
    snapshot = deepcopy(values)
    out = build_active_output(showcase_schema, values)
    assert values == snapshot
    out['profile']['fullName'].append('c')
    assert values['profile']['fullName'] == ['a', 'b']


def test_iter_visible_fields_order(showcase_schema):
    values = {'controls': {'enableAdvanced': True}, 'account': {'type': 'INDIVIDUAL'}}
    ids = [f.id for f in iter_visible_fields(showcase_schema.groups, values)]
    assert ids[:4] == ['account.type', 'controls.enableAdvanced', 'advanced.note', 'advanced.flag']
    assert 'company.registrationNumber' not in ids
    assert ids[-1] == 'address.state'
