from __future__ import annotations

from typing import Any, Dict

from .accessors import set_path
from .models import FieldType, FormField, FormSchema
from .schema_utils import iter_fields


def field_default_value(field: FormField) -> Any:
    if field.default_value is not None:
        return field.default_value
    if field.kind == FieldType.CHECKBOX:
        return False
    # text, textarea, dropdown, radio, number (kept as text) and unknown types
    return ''


def build_default_values(schema: FormSchema) -> Dict[str, Any]:
    """Build the initial value tree, one entry per field.

    Visibility is ignored: a hidden field still needs a well-defined value for
    the moment it becomes visible.
    """
    defaults: Dict[str, Any] = {}
    for field in iter_fields(schema.groups):
        set_path(defaults, field.id, field_default_value(field))
    return defaults
