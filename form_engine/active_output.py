from __future__ import annotations

from copy import deepcopy
from typing import Any, Dict, List, Optional, Sequence

from .accessors import get_by_path, set_path
from .models import FieldType, FormField, FormGroup, FormSchema
from .visibility import evaluate_visibility, is_empty_value

_DIGITS = frozenset('0123456789')


def coerce_field_value(field: FormField, value: Any) -> Any:
    """Number fields are edited as text; turn digit-only strings into ints."""
    if field.kind == FieldType.NUMBER and isinstance(value, str):
        trimmed = value.strip()
        if trimmed and set(trimmed) <= _DIGITS:
            try:
                return int(trimmed)
            except ValueError:
                # too many digits to convert; submitted as typed
                return value
    return value


def iter_visible_fields(
    groups: Optional[Sequence[FormGroup]],
    values: Dict[str, Any],
) -> List[FormField]:
    """Fields currently shown, in form order.

    A hidden group hides everything nested inside it, whatever the
    descendants' own conditions say.
    """
    visible: List[FormField] = []
    for group in groups or []:
        if not evaluate_visibility(group.visibility, values):
            continue
        for field in group.fields or []:
            if evaluate_visibility(field.visibility, values):
                visible.append(field)
        visible.extend(iter_visible_fields(group.groups, values))
    return visible


def build_active_output(
    schema: FormSchema,
    values: Dict[str, Any],
    omit_empty: bool = True,
) -> Dict[str, Any]:
    """Build the submittable object: visible fields only, coerced.

    Empty values ('', None, []) are dropped unless `omit_empty` is False.
    Values are copied, so the result never shares structure with `values`.
    """
    out: Dict[str, Any] = {}
    for field in iter_visible_fields(schema.groups, values):
        coerced = coerce_field_value(field, get_by_path(values, field.id))
        if omit_empty and is_empty_value(coerced):
            continue
        set_path(out, field.id, deepcopy(coerced))
    return out
