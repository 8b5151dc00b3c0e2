from __future__ import annotations

import json
import logging
import os
from typing import Optional

from .errors import ValidationError
from .io_utils import loads_strict, parse_json_text, read_json_content, write_temp_text
from .renderer import generate_curl
from .settings import CurlSettings, get_settings

logger = logging.getLogger(__name__)

VALID_JSON_BADGE = "✓ Valid JSON"
INVALID_JSON_BADGE = "✗ Invalid JSON"
DEFAULT_COMMAND_FILENAME = "curl_command.sh"
PRETTY_FORMAT = "Pretty"
SINGLE_LINE_FORMAT = "Single line"


def build_settings(method_fallback: Optional[str] = None, strict_escaping: Optional[bool] = None) -> CurlSettings:
    """Overlay the per-request UI choices on the configured settings."""
    update = {}
    if method_fallback:
        update['method_fallback'] = method_fallback
    if strict_escaping is not None:
        update['strict_escaping'] = bool(strict_escaping)
    settings = get_settings()
    return settings.model_copy(update=update) if update else settings


def check_json_handler(json_text: str) -> str:
    if not json_text or not json_text.strip():
        return VALID_JSON_BADGE
    try:
        loads_strict(json_text)
    except ValueError:
        return INVALID_JSON_BADGE
    return VALID_JSON_BADGE


def line_count_text(json_text: str) -> str:
    return f"{len((json_text or '').splitlines()) or 1} lines"


def generate_curl_handler(json_text, method_fallback=None, strict_escaping=None):
    try:
        raw = parse_json_text(json_text)
    except json.JSONDecodeError as e:
        return "", "", f"Invalid JSON: {str(e)}"
    except ValueError as e:
        return "", "", str(e)

    try:
        command = generate_curl(raw, build_settings(method_fallback, strict_escaping))
    except ValidationError as e:
        logger.warning("Rejected request capture: %s", "; ".join(e.messages))
        return "", "", str(e)

    return command.pretty, command.single_line, "cURL generated successfully. Copy the command in your preferred format."


def load_capture_file_handler(file_obj):
    if file_obj is None:
        return "", "No file uploaded."

    try:
        data = read_json_content(file_obj)
    except Exception as e:
        return "", f"Error parsing JSON: {str(e)}"

    return json.dumps(data, indent=2, ensure_ascii=False), "Capture loaded."


def export_command_handler(output_format, pretty, single_line, file_name=None):
    command = pretty if output_format == PRETTY_FORMAT else single_line
    if not command:
        return None, "Generate a command first."

    file_name = os.path.basename((file_name or "").strip())
    if file_name in ("", ".", ".."):
        file_name = DEFAULT_COMMAND_FILENAME

    try:
        path = write_temp_text(file_name, command + "\n")
    except OSError as e:
        logger.error("Failed to write %s: %s", file_name, e)
        return None, f"Error during export: {str(e)}"

    return path, f"Export successful! Saved to {path}"
