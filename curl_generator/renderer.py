from __future__ import annotations

import json
from typing import Any, Optional

from .extractor import extract_request
from .models import ExtractedRequest, RenderedCommand
from .settings import CurlSettings, get_settings

CONTINUATION = ' \\\n'


def quote(value: str, strict: bool = False) -> str:
    """Wrap `value` in single quotes.

    Embedded single quotes are left untouched unless `strict`, in which case
    each one is closed, escaped and reopened ('\\'').
    """
    if strict:
        value = value.replace("'", "'\\''")
    return f"'{value}'"


def serialize_body(body: Any, pretty: bool) -> str:
    if pretty:
        return json.dumps(body, indent=2, ensure_ascii=False)
    return json.dumps(body, separators=(',', ':'), ensure_ascii=False)


def build_command(request: ExtractedRequest, pretty: bool, strict_escaping: bool = False) -> str:
    separator = CONTINUATION if pretty else ' '
    parts = [f"curl --silent --location --request {request.method} {quote(request.url, strict_escaping)}"]
    for key, value in request.headers.items():
        parts.append(f"--header {quote(f'{key}: {value}', strict_escaping)}")
    if request.has_body:
        parts.append(f"--data {quote(serialize_body(request.body, pretty), strict_escaping)}")
    return separator.join(parts)


def render_command(request: ExtractedRequest, strict_escaping: bool = False) -> RenderedCommand:
    return RenderedCommand(
        pretty=build_command(request, pretty=True, strict_escaping=strict_escaping),
        single_line=build_command(request, pretty=False, strict_escaping=strict_escaping),
    )


def generate_curl(raw: Any, settings: Optional[CurlSettings] = None) -> RenderedCommand:
    """Extract a request from `raw` and render it.

    Raises ValidationError when `raw` is not a usable capture.
    """
    settings = settings or get_settings()
    request = extract_request(raw, settings)
    return render_command(request, strict_escaping=settings.strict_escaping)
