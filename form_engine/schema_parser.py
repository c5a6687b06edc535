"""Parse and structurally validate schema text.

This is the only gate in front of the evaluators: nothing downstream checks
structure again, so a schema that reaches them is assumed well-formed.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, List, Optional

from pydantic import ValidationError

from .models import FormSchema
from .schema_utils import lint_schema

logger = logging.getLogger(__name__)

# pydantic's recursion guard rejects group trees much deeper than this.
MAX_GROUP_DEPTH = 200


class ErrorKind(str, Enum):
    INVALID_JSON = "invalid_json"
    SCHEMA_MISMATCH = "schema_mismatch"


@dataclass(frozen=True)
class SchemaParseResult:
    ok: bool
    schema: Optional[FormSchema] = None
    error_kind: Optional[ErrorKind] = None
    message: str = ''


def format_validation_error(error: ValidationError) -> str:
    """One line per issue, each prefixed with the dot-path of the bad node."""
    lines = []
    for issue in error.errors():
        loc = '.'.join(str(part) for part in issue.get('loc', ())) or '(root)'
        lines.append(f"{loc}: {issue.get('msg', 'Invalid value')}")
    return '\n'.join(lines)


def _child_groups(node: Any) -> List[Any]:
    groups = node.get('groups') if isinstance(node, dict) else None
    if not isinstance(groups, list):
        return []
    return [g for g in groups if isinstance(g, dict)]


def group_nesting_depth(data: Any) -> int:
    """Deepest chain of nested groups in raw schema data; top-level groups count as 1."""
    deepest = 0
    stack = [(group, 1) for group in _child_groups(data)]
    while stack:
        group, depth = stack.pop()
        deepest = max(deepest, depth)
        stack.extend((child, depth + 1) for child in _child_groups(group))
    return deepest


def parse_form_schema(json_text: str) -> SchemaParseResult:
    """Parse schema text into a `FormSchema`, never raising."""
    try:
        data = json.loads(json_text)
    except (TypeError, ValueError) as e:
        return SchemaParseResult(ok=False, error_kind=ErrorKind.INVALID_JSON, message=str(e))
    except RecursionError:
        return SchemaParseResult(
            ok=False,
            error_kind=ErrorKind.INVALID_JSON,
            message="JSON is nested too deeply to parse",
        )

    depth = group_nesting_depth(data)
    if depth > MAX_GROUP_DEPTH:
        message = f"groups: nested {depth} levels deep, at most {MAX_GROUP_DEPTH} are supported"
        logger.debug("Schema rejected: %s", message)
        return SchemaParseResult(ok=False, error_kind=ErrorKind.SCHEMA_MISMATCH, message=message)

    try:
        schema = FormSchema.model_validate(data)
    except ValidationError as e:
        message = format_validation_error(e)
        logger.debug("Schema rejected: %s", message)
        return SchemaParseResult(ok=False, error_kind=ErrorKind.SCHEMA_MISMATCH, message=message)

    for warning in lint_schema(schema):
        logger.warning("Schema %s: %s", schema.id, warning)
    logger.debug("Parsed schema %s with %d top-level groups", schema.id, len(schema.groups))
    return SchemaParseResult(ok=True, schema=schema)
