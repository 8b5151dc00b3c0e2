"""Turn a request capture into an ExtractedRequest.

Two capture shapes are recognized, each keyed by its root field:

- `_source`: an Elasticsearch document (`_source.request.uri`, ...)
- `fields`: a Kibana "fields" hit (`fields.request.url`, ...), where the
  body may be wrapped as `[{"data": ...}]`

Enabled shapes are tried in the configured order and the first root that
holds an object wins.
"""
from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Iterable, Optional, Tuple

from .accessors import get_mapping, get_str
from .errors import ValidationError
from .models import ExtractedRequest, ExtractionResult
from .schema import FIELDS_VARIANT, KNOWN_HEADERS, SOURCE_VARIANT, validate_capture
from .settings import CurlSettings, get_settings

logger = logging.getLogger(__name__)

JSON_CONTENT_TYPE = 'application/json'


def match_variant(raw: Any, variants: Iterable[str]) -> Optional[str]:
    if not isinstance(raw, dict):
        return None
    for variant in variants:
        if isinstance(raw.get(variant), dict):
            return variant
    return None


def resolve_url(request: Dict[str, Any], base_url: str) -> str:
    url = get_str(request, ['url'])
    if url is not None:
        return url
    uri = get_str(request, ['uri'])
    if uri is not None:
        return base_url + uri
    return base_url


def resolve_method(request: Dict[str, Any], fallback: str) -> str:
    method = get_str(request, ['http_method']) or get_str(request, ['method'])
    if method is None:
        return fallback
    return method.upper()


def clean_headers(headers: Dict[str, Any], keep_unknown: bool = True) -> Dict[str, str]:
    """Drop null and empty values, and unknown names unless `keep_unknown`."""
    cleaned: Dict[str, str] = {}
    for name, value in headers.items():
        if value is None or value == '':
            continue
        if not keep_unknown and name.lower() not in KNOWN_HEADERS:
            continue
        cleaned[name] = value
    return cleaned


def merge_headers(
    context_headers: Dict[str, str],
    request_headers: Dict[str, str],
    has_body: bool,
) -> Dict[str, str]:
    """Layer request headers over context headers.

    Names collide case-insensitively. A colliding header keeps its position
    from the context map and takes the request's name and value. When a body
    is sent without any content-type header, a JSON one is appended.
    """
    merged: Dict[str, Tuple[str, str]] = {}
    for headers in (context_headers, request_headers):
        for name, value in headers.items():
            merged[name.lower()] = (name, value)
    if has_body and 'content-type' not in merged:
        merged['content-type'] = ('Content-Type', JSON_CONTENT_TYPE)
    return dict(merged.values())


def unwrap_data_body(body: Any) -> Any:
    if isinstance(body, list) and body and isinstance(body[0], dict) and 'data' in body[0]:
        return body[0]['data']
    return body


def _extract_section(section: Dict[str, Any], settings: CurlSettings, unwrap_body: bool) -> ExtractedRequest:
    request = get_mapping(section, ['request'])

    body = request.get('body')
    if unwrap_body:
        body = unwrap_data_body(body)

    keep_unknown = settings.keep_unknown_headers
    headers = merge_headers(
        clean_headers(get_mapping(section, ['context', 'headers']), keep_unknown),
        clean_headers(get_mapping(request, ['headers']), keep_unknown),
        has_body=body is not None,
    )

    return ExtractedRequest(
        method=resolve_method(request, settings.method_fallback),
        url=resolve_url(request, settings.base_url),
        headers=headers,
        body=body,
    )


def extract_source_variant(raw: Dict[str, Any], settings: CurlSettings) -> ExtractedRequest:
    return _extract_section(get_mapping(raw, [SOURCE_VARIANT]), settings, unwrap_body=False)


def extract_fields_variant(raw: Dict[str, Any], settings: CurlSettings) -> ExtractedRequest:
    return _extract_section(get_mapping(raw, [FIELDS_VARIANT]), settings, unwrap_body=True)


VARIANT_EXTRACTORS: Dict[str, Callable[[Dict[str, Any], CurlSettings], ExtractedRequest]] = {
    SOURCE_VARIANT: extract_source_variant,
    FIELDS_VARIANT: extract_fields_variant,
}


def extract_request(raw: Any, settings: Optional[CurlSettings] = None) -> ExtractedRequest:
    """Validate `raw` and build the request it describes.

    Raises ValidationError listing every structural problem found.
    """
    settings = settings or get_settings()

    errors = validate_capture(raw, settings.variants)
    if errors:
        raise ValidationError(errors)

    variant = match_variant(raw, settings.variants)
    if variant is None:
        # Nothing recognizable; every field falls back to its default.
        logger.debug("No capture variant matched; using fallbacks")
        return _extract_section({}, settings, unwrap_body=False)

    logger.debug("Extracting request using the %s variant", variant)
    return VARIANT_EXTRACTORS[variant](raw, settings)


def safe_extract_request(raw: Any, settings: Optional[CurlSettings] = None) -> ExtractionResult:
    try:
        return ExtractionResult.ok(extract_request(raw, settings))
    except ValidationError as exc:
        return ExtractionResult.failed(exc)
