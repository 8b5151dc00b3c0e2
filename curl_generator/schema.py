"""Structural checks for request captures.

Every field is optional. A check only complains about fields that are
present with the wrong JSON type; `null` counts as absent for scalars.
"""
from __future__ import annotations

from typing import Any, Iterable, List, Sequence, Tuple

from .accessors import describe_type, format_path

SOURCE_VARIANT = '_source'
FIELDS_VARIANT = 'fields'
KNOWN_VARIANTS: Tuple[str, ...] = (SOURCE_VARIANT, FIELDS_VARIANT)

KNOWN_HEADERS: Tuple[str, ...] = (
    'customer-id',
    'client-version',
    'screen-id',
    'scope',
    'enc-session-key',
    'client-platform',
    'authorization',
    'user-agent',
    'signature',
    'mav-api-key',
    'device-id',
    'mav-authorization',
    'content-type',
    'request-id',
    'user-id',
    'channel-id',
    'cc-customer-id',
)

REQUEST_STRING_FIELDS: Tuple[str, ...] = ('url', 'uri', 'http_method', 'method')


def _type_error(path: Sequence[str], expected: str, value: Any) -> str:
    return f"{format_path(path)}: Expected {expected}, received {describe_type(value)}"


def check_object(value: Any, path: Sequence[str], errors: List[str]) -> bool:
    """Append a complaint unless `value` is absent or an object.

    Returns True only when `value` is an object worth descending into.
    """
    if value is None:
        return False
    if not isinstance(value, dict):
        errors.append(_type_error(path, 'object', value))
        return False
    return True


def check_string(value: Any, path: Sequence[str], errors: List[str]) -> None:
    if value is None or isinstance(value, str):
        return
    errors.append(_type_error(path, 'string', value))


def check_headers(value: Any, path: Sequence[str], errors: List[str]) -> None:
    if not check_object(value, path, errors):
        return
    for name, header_value in value.items():
        check_string(header_value, [*path, name], errors)


def check_section(section: Any, path: Sequence[str], errors: List[str]) -> None:
    if not check_object(section, path, errors):
        return

    request = section.get('request')
    request_path = [*path, 'request']
    if check_object(request, request_path, errors):
        for name in REQUEST_STRING_FIELDS:
            check_string(request.get(name), [*request_path, name], errors)
        check_headers(request.get('headers'), [*request_path, 'headers'], errors)

    context = section.get('context')
    context_path = [*path, 'context']
    if check_object(context, context_path, errors):
        check_headers(context.get('headers'), [*context_path, 'headers'], errors)


def validate_capture(raw: Any, variants: Iterable[str] = KNOWN_VARIANTS) -> List[str]:
    """Check `raw` against the capture schema of every enabled variant.

    Returns one message per violation; an empty list means `raw` is valid.
    """
    errors: List[str] = []
    if not isinstance(raw, dict):
        errors.append(_type_error([], 'object', raw))
        return errors

    for variant in variants:
        check_section(raw.get(variant), [variant], errors)
    return errors
