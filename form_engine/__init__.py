"""Core logic for the schema-driven form engine.

The Gradio UI lives in `app.py`. This package contains pure functions that:
- parse and structurally validate form schemas
- read/write dot-path field ids in nested value trees
- evaluate visibility and validation rules
- build default values and the active (submittable) output
"""
from .active_output import build_active_output
from .defaults import build_default_values
from .schema_parser import ErrorKind, SchemaParseResult, parse_form_schema
from .validation import pick_rule_block, validate_field_value
from .visibility import evaluate_visibility, is_empty_value

__all__ = [
    "ErrorKind",
    "SchemaParseResult",
    "build_active_output",
    "build_default_values",
    "evaluate_visibility",
    "is_empty_value",
    "parse_form_schema",
    "pick_rule_block",
    "validate_field_value",
]
