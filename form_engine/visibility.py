from __future__ import annotations

import math
from typing import Any, Optional

from .accessors import get_by_path
from .models import ConditionOperator, VisibilityCondition


def is_empty_value(value: Any) -> bool:
    """None, '' and an empty list count as empty; False and 0 do not."""
    return value is None or value == '' or (isinstance(value, list) and len(value) == 0)


def as_text(value: Any) -> str:
    """String form of a form value, matching what the browser produced.

    None becomes '', booleans are lowercase and integral floats drop '.0',
    so a schema written against the web editor compares the same way here.
    """
    if value is None:
        return ''
    if isinstance(value, bool):
        return 'true' if value else 'false'
    if isinstance(value, float):
        if math.isnan(value):
            return 'NaN'
        if math.isinf(value):
            return 'Infinity' if value > 0 else '-Infinity'
        if value.is_integer():
            return str(int(value))
        return repr(value)
    if isinstance(value, list):
        return ','.join(as_text(v) for v in value)
    if isinstance(value, dict):
        return '[object Object]'
    return str(value)


def is_truthy(value: Any) -> bool:
    """Browser truthiness: empty containers are still truthy."""
    if value is None:
        return False
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return not (value == 0 or (isinstance(value, float) and math.isnan(value)))
    if isinstance(value, str):
        return value != ''
    return True


def _equals(current: Any, compare: Any) -> bool:
    if isinstance(compare, bool):
        return is_truthy(current) == compare
    return as_text(current) == as_text(compare)


def evaluate_visibility(condition: Optional[VisibilityCondition], values: Any) -> bool:
    """Decide whether a field or group is shown for the given value tree."""
    if condition is None:
        return True

    current = get_by_path(values, condition.depends_on)
    compare = condition.value
    operator = condition.operator

    if operator == ConditionOperator.EQUALS:
        return _equals(current, compare)
    if operator == ConditionOperator.NOT_EQUALS:
        return not _equals(current, compare)
    if operator == ConditionOperator.CONTAINS:
        if isinstance(current, str) and isinstance(compare, str):
            return compare in current
        if isinstance(current, list):
            # membership without cross-type equality (True is not 1)
            return any(type(item) is type(compare) and item == compare for item in current)
        return False
    if operator == ConditionOperator.IS_EMPTY:
        return is_empty_value(current)
    if operator == ConditionOperator.IS_NOT_EMPTY:
        return not is_empty_value(current)
    raise ValueError(f"Unsupported visibility operator: {operator!r}")
