from __future__ import annotations

import json
import math
import os
import tempfile
from typing import Any


def _reject_constant(name: str):
    raise ValueError(f"Invalid JSON: {name} is not a JSON value")


def _parse_finite_float(text: str) -> float:
    value = float(text)
    if math.isinf(value):
        raise ValueError(f"Invalid JSON: {text} is out of range")
    return value


def loads_strict(text) -> Any:
    """json.loads that rejects NaN, Infinity and numbers overflowing a float.

    Raises json.JSONDecodeError for malformed text and ValueError for those values.
    """
    return json.loads(text, parse_constant=_reject_constant, parse_float=_parse_finite_float)


def parse_json_text(text: str) -> Any:
    """Parse pasted JSON text.

    Raises ValueError for empty input or non-standard values, and
    json.JSONDecodeError for bad JSON.
    """
    if text is None or not text.strip():
        raise ValueError("No JSON provided.")
    return loads_strict(text)


def read_json_content(file_obj):
    """Read JSON content from an uploaded file or file path."""
    if file_obj is None:
        raise ValueError("No file uploaded.")

    if hasattr(file_obj, 'read'):
        if hasattr(file_obj, 'seek'):
            file_obj.seek(0)
        content = file_obj.read()
        if isinstance(content, bytes):
            content = content.decode('utf-8')
        return loads_strict(content)

    path = file_obj.name if hasattr(file_obj, 'name') else file_obj
    with open(path, 'r', encoding='utf-8') as f:
        return loads_strict(f.read())


def write_temp_text(file_name: str, content: str) -> str:
    """Write `content` to the temp dir and return the path.

    Only the final component of `file_name` is used, so the file always lands
    directly in the temp dir.
    """
    base_name = os.path.basename(file_name)
    if base_name in ('', '.', '..'):
        raise ValueError(f"Invalid file name: {file_name!r}")
    path = os.path.join(tempfile.gettempdir(), base_name)
    with open(path, 'w', encoding='utf-8') as f:
        f.write(content)
    return path
