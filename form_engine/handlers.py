from __future__ import annotations

import json
import logging
from copy import deepcopy
from typing import Any, Dict, List, Optional, Tuple

import gradio as gr

from .accessors import set_path
from .active_output import build_active_output, iter_visible_fields
from .autosave import AutoSaveStore, deep_merge
from .defaults import build_default_values
from .example_schemas import get_example
from .integrations import find_integration, run_integration
from .io_utils import read_text_content
from .mock_api import ApiClient, MockApiError
from .models import FieldType, FormSchema
from .schema_parser import parse_form_schema
from .schema_utils import iter_fields
from .validation import validate_fields

logger = logging.getLogger(__name__)


def visible_field_ids(schema: Optional[FormSchema], values: Dict[str, Any]) -> List[str]:
    if schema is None:
        return []
    return [f.id for f in iter_visible_fields(schema.groups, values)]


def compute_field_errors(schema: Optional[FormSchema], values: Dict[str, Any]) -> Dict[str, str]:
    """Errors for the fields currently shown; hidden fields never block a submit."""
    if schema is None:
        return {}
    return validate_fields(iter_visible_fields(schema.groups, values), values)


def compute_active_output(schema: Optional[FormSchema], values: Dict[str, Any]) -> Dict[str, Any]:
    if schema is None:
        return {}
    return build_active_output(schema, values)


def load_example_handler(example_id: str):
    example = get_example(example_id)
    if example is None:
        return gr.update()
    return example.json_text


def load_schema_file_handler(file_obj):
    if file_obj is None:
        return gr.update(), "No file uploaded."
    try:
        text = read_text_content(file_obj)
    except (OSError, UnicodeDecodeError) as e:
        return gr.update(), f"Error reading file: {str(e)}"
    return text, "Loaded schema file."


def format_json_handler(schema_text: str):
    try:
        parsed = json.loads(schema_text)
    except ValueError:
        # Leave invalid JSON as typed; the parse status already reports it.
        return gr.update()
    return json.dumps(parsed, indent=2, ensure_ascii=False)


def apply_schema_handler(schema_text: str, restored_values: Optional[Dict[str, Any]], render_seed: int):
    """Parse new schema text and reset the form to its defaults.

    Values restored from auto-save are merged over the defaults once, then
    the pending restore is cleared.
    """
    result = parse_form_schema(schema_text or '')
    if not result.ok:
        status = f"Schema error ({result.error_kind.value}):\n{result.message}"
        return None, {}, [], status, {}, {}, render_seed + 1, restored_values

    schema = result.schema
    values = build_default_values(schema)
    if restored_values:
        values = deep_merge(values, restored_values)

    status = f"Schema OK: {schema.title} ({sum(1 for _ in iter_fields(schema.groups))} fields)"
    return (
        schema,
        values,
        visible_field_ids(schema, values),
        status,
        compute_field_errors(schema, values),
        compute_active_output(schema, values),
        render_seed + 1,
        None,
    )


def normalize_widget_value(kind: FieldType, value: Any) -> Any:
    """Map a widget's raw value onto the value-tree representation."""
    if kind == FieldType.CHECKBOX:
        return bool(value)
    if value is None:
        return ''
    return value


def field_change_handler(field_id: str, kind: FieldType, value: Any, schema: Optional[FormSchema], values):
    new_values = deepcopy(values or {})
    set_path(new_values, field_id, normalize_widget_value(kind, value))
    return (
        new_values,
        visible_field_ids(schema, new_values),
        compute_field_errors(schema, new_values),
        compute_active_output(schema, new_values),
    )


async def fetch_integration_handler(
    integration_id: str,
    client: ApiClient,
    schema: Optional[FormSchema],
    values: Dict[str, Any],
    render_seed: int,
):
    if schema is None:
        return gr.update(), render_seed, "No schema loaded."

    integration = find_integration(schema, integration_id)
    if integration is None:
        return gr.update(), render_seed, f"Unknown integration '{integration_id}'."

    try:
        new_values = await run_integration(integration, values or {}, client)
    except MockApiError as e:
        logger.info("Integration %s failed: %s", integration_id, e.code)
        return gr.update(), render_seed, f"Fetch failed: {e.code}"

    filled = ', '.join(integration.target_fields)
    return new_values, render_seed + 1, f"Fetched {integration.endpoint}: filled {filled}"


def submit_handler(schema: Optional[FormSchema], values: Dict[str, Any]) -> Tuple[str, Any, Dict[str, str]]:
    if schema is None:
        return "Cannot submit: the schema is invalid.", None, {}

    errors = compute_field_errors(schema, values or {})
    if errors:
        return f"Fix {len(errors)} field error(s) before submitting.", None, errors

    output = build_active_output(schema, values or {})
    logger.info("Submitted form %s with %d top-level keys", schema.id, len(output))
    return "Submitted successfully.", output, errors


def restore_session_handler(store: Optional[AutoSaveStore]):
    """On page load, bring back the last saved schema text and values."""
    if store is None:
        return gr.update(), None, ""
    payload = store.load()
    if payload is None:
        return gr.update(), None, ""
    logger.info("Restored auto-saved session from %s", store.path)
    return payload.schema_text, payload.values, "Restored saved session."


def save_session_handler(store: Optional[AutoSaveStore], schema_text: str, values: Dict[str, Any]):
    if store is None:
        return
    try:
        store.save(schema_text or '', values or {})
    except OSError as e:
        logger.warning("Auto-save failed: %s", e)


def clear_session_handler(store: Optional[AutoSaveStore]):
    if store is not None:
        store.clear()
    return "Saved session cleared."
