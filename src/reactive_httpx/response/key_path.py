"""
Key path lookup into parsed JSON.

A key path is a separator-joined list of segments (``"data.items.0.name"``).
Segments index objects by key and arrays by decimal position.
"""

from __future__ import annotations

from typing import Any, Final


class _Missing:
    """Sentinel type for a key path that does not resolve."""

    _instance: _Missing | None = None

    def __new__(cls) -> _Missing:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


MISSING: Final = _Missing()


def value_at_key_path(obj: Any, key_path: str, separator: str = ".") -> Any:
    """Get the value at a key path.

    Args:
        obj: Parsed JSON (top level must be an object)
        key_path: Key path such as ``"user.address.city"``
        separator: Segment separator

    Returns:
        The value found, which may be ``None`` for a JSON null, or
        ``MISSING`` when the path is malformed or any segment does not resolve.
    """
    parts = key_path.split(separator)
    if not isinstance(obj, dict) or "" in parts:
        return MISSING

    current = obj
    for part in parts:
        if isinstance(current, dict):
            if part not in current:
                return MISSING
            current = current[part]
        elif isinstance(current, list) and part.isascii() and part.isdigit():
            idx = int(part)
            if idx >= len(current):
                return MISSING
            current = current[idx]
        else:
            return MISSING

    return current
