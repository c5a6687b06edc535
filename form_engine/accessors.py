from __future__ import annotations

from typing import Any, Dict

from .paths import split_path


def get_by_path(tree: Any, path: str) -> Any:
    """Retrieve a value from a nested value tree using a dot-path field id.

    Only dict nodes are traversed. A missing key, a list or a scalar met
    along the way ends the lookup with None; this never raises.
    """
    keys = split_path(path)
    if not keys:
        return None

    val = tree
    for key in keys:
        if not isinstance(val, dict) or key not in val:
            return None
        val = val[key]
    return val


def set_path(tree: Dict[str, Any], path: str, value: Any) -> Dict[str, Any]:
    """Set a value in a nested dict by dot-path (dict-only traversal).

    Intermediate nodes that are missing or not dicts are replaced by fresh
    dicts. Mutates `tree` in place and returns it.
    """
    parts = split_path(path)
    if not parts:
        return tree

    current = tree
    for part in parts[:-1]:
        nxt = current.get(part)
        if not isinstance(nxt, dict):
            nxt = {}
            current[part] = nxt
        current = nxt
    current[parts[-1]] = value
    return tree
