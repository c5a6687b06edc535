"""Field-level validation.

A field carries an ordered list of rule blocks. Exactly one block is chosen
for the current value tree (see `pick_rule_block`), and the value is checked
against it. Each block has a single message: whichever of its constraints
fails first, that message is what the user sees.
"""

from __future__ import annotations

import logging
import math
import re
from typing import Any, Dict, Iterable, List, Optional

from .accessors import get_by_path
from .models import DynamicValidation, FieldType, FormField, ValidationRule
from .visibility import as_text, is_empty_value

logger = logging.getLogger(__name__)

NUMBER_FALLBACK_RULE = ValidationRule(message="Must be a valid number")

_DIGITS_ONLY = re.compile(r"[0-9]+")


def pick_rule_block(
    validations: Optional[List[DynamicValidation]],
    all_values: Dict[str, Any],
) -> Optional[ValidationRule]:
    """Select the active rule block.

    1. the first block whose `when` matches the watched field's current value
    2. otherwise the first block without `when`
    3. otherwise the first block, whatever its condition
    """
    if not validations:
        return None

    for block in validations:
        if block.when is None:
            continue
        current = get_by_path(all_values, block.when.field)
        if as_text(current) == block.when.equals:
            logger.debug("Rule block matched when %s == %r", block.when.field, block.when.equals)
            return block.rules

    for block in validations:
        if block.when is None:
            return block.rules

    return validations[0].rules


def _check_checkbox(value: Any, rules: ValidationRule) -> Optional[str]:
    if rules.required and value is not True:
        return rules.message
    return None


def _check_number(value: Any, rules: ValidationRule) -> Optional[str]:
    raw = value.strip() if isinstance(value, str) else value

    if raw is None or raw == '':
        return rules.message if rules.required else None

    text = as_text(raw)
    if not _DIGITS_ONLY.fullmatch(text):
        return rules.message

    num = float(text)
    if not math.isfinite(num):
        return rules.message
    if rules.min is not None and num < rules.min:
        return rules.message
    if rules.max is not None and num > rules.max:
        return rules.message
    return None


def _js_pattern(pattern: str) -> str:
    """Rewrite `$` outside character classes to match only at the very end.

    Browser patterns (no flags) never let `$` match before a trailing newline.
    """
    out: List[str] = []
    in_class = False
    i = 0
    while i < len(pattern):
        ch = pattern[i]
        if ch == "\\":
            out.append(pattern[i:i + 2])
            i += 2
            continue
        if in_class:
            if ch == "]":
                in_class = False
        elif ch == "[":
            in_class = True
        elif ch == "$":
            ch = r"\Z"
        out.append(ch)
        i += 1
    return "".join(out)


def _pattern_matches(pattern: str, value: str) -> bool:
    try:
        return re.search(_js_pattern(pattern), value, re.ASCII) is not None
    except re.error as e:
        logger.warning("Invalid validation pattern %r: %s", pattern, e)
        return False


def _check_text(value: Any, rules: ValidationRule) -> Optional[str]:
    if not isinstance(value, str):
        return rules.message
    if rules.required and len(value) < 1:
        return rules.message
    if rules.min_length is not None and len(value) < rules.min_length:
        return rules.message
    if rules.max_length is not None and len(value) > rules.max_length:
        return rules.message
    if rules.pattern and not _pattern_matches(rules.pattern, value):
        return rules.message
    return None


def validate_field_value(
    field: FormField,
    value: Any,
    all_values: Dict[str, Any],
) -> Optional[str]:
    """Return the error message for `value`, or None when it is valid."""
    rules = pick_rule_block(field.validation, all_values)
    if rules is None and field.kind == FieldType.NUMBER:
        rules = NUMBER_FALLBACK_RULE
    if rules is None:
        return None

    # Optional fields are never validated while empty.
    if not rules.required and is_empty_value(value):
        return None

    kind = field.kind
    if kind == FieldType.CHECKBOX:
        return _check_checkbox(value, rules)
    if kind == FieldType.NUMBER:
        return _check_number(value, rules)
    if kind in (
        FieldType.TEXT,
        FieldType.TEXTAREA,
        FieldType.DROPDOWN,
        FieldType.RADIO,
        FieldType.UNKNOWN,
    ):
        return _check_text(value, rules)
    raise ValueError(f"Unhandled field type: {kind!r}")


def validate_fields(fields: Iterable[FormField], values: Dict[str, Any]) -> Dict[str, str]:
    """Validate each field against its own value; returns {field id: message}."""
    errors: Dict[str, str] = {}
    for field in fields:
        message = validate_field_value(field, get_by_path(values, field.id), values)
        if message is not None:
            errors[field.id] = message
    return errors
