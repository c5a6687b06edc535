"""Persist the editor session (schema text + values) between runs."""

from __future__ import annotations

import json
import logging
import os
import time
from dataclasses import dataclass
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)

STORAGE_VERSION = 1


@dataclass(frozen=True)
class AutoSavePayload:
    saved_at: int
    schema_text: str
    values: Dict[str, Any]

    def to_dict(self) -> Dict[str, Any]:
        return {
            'version': STORAGE_VERSION,
            'savedAt': self.saved_at,
            'schemaText': self.schema_text,
            'values': self.values,
        }


def parse_payload(raw: str) -> Optional[AutoSavePayload]:
    """Decode a stored payload; None for anything malformed or from another version."""
    try:
        data = json.loads(raw)
    except ValueError:
        return None
    if not isinstance(data, dict):
        return None
    if data.get('version') != STORAGE_VERSION:
        return None
    saved_at = data.get('savedAt')
    if isinstance(saved_at, bool) or not isinstance(saved_at, (int, float)):
        return None
    if not isinstance(data.get('schemaText'), str):
        return None
    if not isinstance(data.get('values'), dict):
        return None
    return AutoSavePayload(
        saved_at=int(saved_at),
        schema_text=data['schemaText'],
        values=data['values'],
    )


def deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Merge dicts recursively; lists and scalars from `override` replace."""
    out = dict(base)
    for key, value in override.items():
        existing = out.get(key)
        if isinstance(existing, dict) and isinstance(value, dict):
            out[key] = deep_merge(existing, value)
        else:
            out[key] = value
    return out


class AutoSaveStore:
    """A single-slot JSON file holding the last editor session."""

    def __init__(self, path: str):
        self.path = path

    def save(self, schema_text: str, values: Dict[str, Any]) -> AutoSavePayload:
        payload = AutoSavePayload(
            saved_at=int(time.time() * 1000),
            schema_text=schema_text,
            values=values,
        )
        tmp_path = f"{self.path}.tmp"
        with open(tmp_path, 'w', encoding='utf-8') as f:
            json.dump(payload.to_dict(), f, ensure_ascii=False)
        os.replace(tmp_path, self.path)
        logger.debug("Auto-saved session to %s", self.path)
        return payload

    def load(self) -> Optional[AutoSavePayload]:
        if not os.path.exists(self.path):
            return None
        with open(self.path, 'r', encoding='utf-8') as f:
            payload = parse_payload(f.read())
        if payload is None:
            logger.warning("Ignoring unreadable auto-save file %s", self.path)
        return payload

    def clear(self) -> None:
        if os.path.exists(self.path):
            os.remove(self.path)
