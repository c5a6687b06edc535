from __future__ import annotations

from typing import List


def split_path(path: str) -> List[str]:
    """Split a dot-path field id into its key segments.

    Empty segments are dropped, so 'a..b' and '.a.b' both address ['a', 'b'].
    """
    if path is None:
        return []
    if not isinstance(path, str):
        path = str(path)
    return [p for p in path.split('.') if p != '']


def last_segment(path: str) -> str:
    """Return the final key of a dot-path ('' when the path has no segments)."""
    parts = split_path(path)
    return parts[-1] if parts else ''
