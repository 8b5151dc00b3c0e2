"""Core logic for the JSON to cURL generator.

The Gradio UI lives in `app.py`. This package contains pure functions that:
- validate captured requests (`_source` and `fields` shapes)
- extract method, URL, headers and body
- render pretty and single-line cURL commands
- build and store versioned release files
"""
from .errors import ReleaseFileError, ValidationError
from .extractor import extract_request, safe_extract_request
from .models import ExtractedRequest, ExtractionResult, RenderedCommand
from .renderer import generate_curl, render_command
from .settings import CurlSettings

__all__ = [
    "CurlSettings",
    "ExtractedRequest",
    "ExtractionResult",
    "ReleaseFileError",
    "RenderedCommand",
    "ValidationError",
    "extract_request",
    "generate_curl",
    "render_command",
    "safe_extract_request",
]
