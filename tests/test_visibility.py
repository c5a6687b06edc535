from form_engine.models import ConditionOperator, VisibilityCondition
from form_engine.visibility import as_text, evaluate_visibility, is_empty_value, is_truthy


def cond(operator, value=None, depends_on='x'):
    data = {'dependsOn': depends_on, 'operator': operator}
    if value is not None:
        data['value'] = value
    return VisibilityCondition.model_validate(data)


def test_no_condition_is_visible():
    assert evaluate_visibility(None, {}) is True


class TestEquals:
    def test_string_comparison(self):
        c = cond('equals', 'Y')
        assert evaluate_visibility(c, {'x': 'Y'}) is True
        assert evaluate_visibility(c, {'x': 'Z'}) is False
        assert evaluate_visibility(c, {}) is False

    def test_nested_dependency(self):
        c = cond('equals', 'BUSINESS', depends_on='account.type')
        assert evaluate_visibility(c, {'account': {'type': 'BUSINESS'}}) is True
        assert evaluate_visibility(c, {'account': 'BUSINESS'}) is False

    def test_missing_value_equals_empty_string(self):
        c = cond('equals', '')
        assert evaluate_visibility(c, {}) is True
        assert evaluate_visibility(c, {'x': None}) is True

    def test_boolean_comparison_uses_truthiness(self):
        c = cond('equals', True)
        assert evaluate_visibility(c, {'x': True}) is True
        assert evaluate_visibility(c, {'x': 'yes'}) is True
        assert evaluate_visibility(c, {'x': False}) is False
        assert evaluate_visibility(c, {'x': ''}) is False
        assert evaluate_visibility(c, {}) is False

    def test_boolean_false_matches_missing(self):
        assert evaluate_visibility(cond('equals', False), {}) is True

    def test_string_target_against_boolean_value(self):
        assert evaluate_visibility(cond('equals', 'true'), {'x': True}) is True
        assert evaluate_visibility(cond('equals', 'True'), {'x': True}) is False

    def test_numbers_compare_by_text(self):
        assert evaluate_visibility(cond('equals', '18'), {'x': 18}) is True


def test_not_equals_negates_equals():
    c = cond('notEquals', 'Y')
    assert evaluate_visibility(c, {'x': 'Y'}) is False
    assert evaluate_visibility(c, {'x': 'Z'}) is True
    assert evaluate_visibility(c, {}) is True
    assert evaluate_visibility(cond('notEquals', True), {'x': False}) is True


class TestContains:
    def test_substring(self):
        c = cond('contains', 'ell')
        assert evaluate_visibility(c, {'x': 'hello'}) is True
        assert evaluate_visibility(c, {'x': 'world'}) is False

    def test_list_membership(self):
        c = cond('contains', 'b')
        assert evaluate_visibility(c, {'x': ['a', 'b']}) is True
        assert evaluate_visibility(c, {'x': ['a']}) is False

    def test_list_membership_does_not_mix_types(self):
        assert evaluate_visibility(cond('contains', True), {'x': [1]}) is False
        assert evaluate_visibility(cond('contains', True), {'x': [True]}) is True
        assert evaluate_visibility(cond('contains', '1'), {'x': [1]}) is False

    def test_other_values_never_contain(self):
        c = cond('contains', 'a')
        assert evaluate_visibility(c, {'x': {'a': 1}}) is False
        assert evaluate_visibility(c, {'x': True}) is False
        assert evaluate_visibility(c, {}) is False


class TestEmptiness:
    def test_is_empty(self):
        c = cond('isEmpty')
        assert evaluate_visibility(c, {}) is True
        assert evaluate_visibility(c, {'x': ''}) is True
        assert evaluate_visibility(c, {'x': []}) is True
        assert evaluate_visibility(c, {'x': 'a'}) is False
        assert evaluate_visibility(c, {'x': False}) is False

    def test_is_not_empty_ignores_value(self):
        c = cond('isNotEmpty', 'ignored')
        assert c.operator == ConditionOperator.IS_NOT_EMPTY
        assert evaluate_visibility(c, {'x': 'a'}) is True
        assert evaluate_visibility(c, {'x': ''}) is False


def test_is_empty_value():
    assert is_empty_value(None)
    assert is_empty_value('')
    assert is_empty_value([])
    assert not is_empty_value(0)
    assert not is_empty_value(False)
    assert not is_empty_value(' ')
    assert not is_empty_value({})


def test_as_text_matches_browser_strings():
    assert as_text(None) == ''
    assert as_text(True) == 'true'
    assert as_text(3.0) == '3'
    assert as_text(2.5) == '2.5'
    assert as_text(['a', 1]) == 'a,1'


def test_is_truthy():
    assert is_truthy([]) is True
    assert is_truthy({}) is True
    assert is_truthy('0') is True
    assert is_truthy(0) is False
    assert is_truthy('') is False
    assert is_truthy(None) is False
