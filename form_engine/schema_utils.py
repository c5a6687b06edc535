from __future__ import annotations

from typing import Iterator, List, Optional, Sequence, Set, Tuple

from .models import FieldType, FormField, FormGroup, FormSchema


def iter_groups(groups: Optional[Sequence[FormGroup]]) -> Iterator[FormGroup]:
    """Yield every group, each one before its nested groups (pre-order)."""
    for group in groups or []:
        yield group
        yield from iter_groups(group.groups)


def collect_fields(group: FormGroup) -> List[FormField]:
    """A group's own fields first, then those of its nested groups."""
    fields: List[FormField] = list(group.fields or [])
    for child in group.groups or []:
        fields.extend(collect_fields(child))
    return fields


def iter_fields(groups: Optional[Sequence[FormGroup]]) -> Iterator[FormField]:
    for group in groups or []:
        yield from collect_fields(group)


def collect_field_ids(schema: FormSchema) -> Set[str]:
    return {field.id for field in iter_fields(schema.groups)}


def collect_references(schema: FormSchema) -> List[Tuple[str, str]]:
    """Find every dot-path the schema reads or writes outside a field id.

    Returns (where, path) pairs, where `where` names the referencing node.
    """
    refs: List[Tuple[str, str]] = []

    for group in iter_groups(schema.groups):
        if group.visibility is not None:
            refs.append((f"group {group.id} visibility", group.visibility.depends_on))
        for field in group.fields or []:
            if field.visibility is not None:
                refs.append((f"field {field.id} visibility", field.visibility.depends_on))
            for block in field.validation or []:
                if block.when is not None:
                    refs.append((f"field {field.id} validation", block.when.field))

    for integration in schema.api_integrations or []:
        for path in integration.trigger_fields:
            refs.append((f"integration {integration.id} trigger", path))
        for path in integration.target_fields:
            refs.append((f"integration {integration.id} target", path))

    return refs


def lint_schema(schema: FormSchema) -> List[str]:
    """Report suspicious but legal schema content.

    Dangling references evaluate as empty values and unknown field types fall
    back to text behaviour, so nothing here blocks the form from working.
    """
    warnings: List[str] = []
    field_ids = collect_field_ids(schema)
    integration_ids = {i.id for i in schema.api_integrations or []}

    for where, path in collect_references(schema):
        if path not in field_ids:
            warnings.append(f"{where} references unknown field '{path}'")

    for field in iter_fields(schema.groups):
        if field.kind == FieldType.UNKNOWN:
            warnings.append(f"field {field.id} has unsupported type '{field.type}'")
        if field.auto_fill_from and field.auto_fill_from not in integration_ids:
            warnings.append(
                f"field {field.id} autoFillFrom '{field.auto_fill_from}' names no integration"
            )

    return warnings
