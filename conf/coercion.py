"""
CHASSIS - Primitive Coercion

The small subset of value casting the configuration tree needs to read
application settings.
"""

from __future__ import annotations

from typing import Any, Optional

# Strings (compared case-insensitively after trimming) that read as True
TRUISMS = frozenset(["true", "t", "yes", "1", "ok"])


def as_bool(value: Any) -> bool:
    """
    Coerce a primitive into a bool.

    Yields True only on ``True``, ``1``, or one of :data:`TRUISMS`.
    Everything else, including ``None`` and empty strings, is False.
    """
    if value is True:
        return True
    if not value:
        return False
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return value == 1
    if isinstance(value, str):
        return value.strip().lower() in TRUISMS
    return False


def as_string(value: Any) -> Optional[str]:
    """
    Coerce a scalar into a string.

    Returns None for None and for containers (dicts, lists), which have no
    meaningful scalar string form in a configuration tree.
    """
    if value is None:
        return None
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return str(value)
    return None
