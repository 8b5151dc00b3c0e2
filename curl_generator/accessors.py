from __future__ import annotations

from typing import Any, Dict, Optional, Sequence


def get_value_by_path(data: Any, path: Sequence[str]) -> Any:
    """Retrieve a value from nested dicts by a sequence of keys.

    Returns None as soon as a segment is missing or the current value is not
    a dict. Lists are never traversed; a capture nests requests in objects only.
    """
    val = data
    for key in path:
        if not isinstance(val, dict):
            return None
        val = val.get(key)
        if val is None:
            return None
    return val


def get_str(data: Any, path: Sequence[str]) -> Optional[str]:
    """Return the string at `path`, or None when absent, empty or not a string."""
    val = get_value_by_path(data, path)
    if isinstance(val, str) and val != '':
        return val
    return None


def get_mapping(data: Any, path: Sequence[str]) -> Dict[str, Any]:
    val = get_value_by_path(data, path)
    if isinstance(val, dict):
        return val
    return {}


def describe_type(value: Any) -> str:
    """Name a value's JSON type for validation messages."""
    if value is None:
        return 'null'
    if isinstance(value, bool):
        return 'boolean'
    if isinstance(value, (int, float)):
        return 'number'
    if isinstance(value, str):
        return 'string'
    if isinstance(value, (list, tuple)):
        return 'array'
    if isinstance(value, dict):
        return 'object'
    return type(value).__name__


def format_path(path: Sequence[str]) -> str:
    if not path:
        return '(root)'
    return '.'.join(str(p) for p in path)
