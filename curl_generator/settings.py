"""Runtime configuration.

Values come from keyword arguments first, then `CURL_GENERATOR_*`
environment variables, then the defaults below. Lists are read from the
environment as JSON, e.g. `CURL_GENERATOR_VARIANTS='["fields", "_source"]'`.
"""
from __future__ import annotations

from pathlib import Path
from typing import List, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .schema import KNOWN_VARIANTS

METHOD_FALLBACK_UNKNOWN = 'unknown method'
METHOD_FALLBACK_POST = 'POST'
DEFAULT_BASE_URL = 'http://localhost:8080'


class CurlSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix='CURL_GENERATOR_',
        case_sensitive=False,
        extra='ignore',
        frozen=True,
    )

    # Origin joined with `request.uri` when a capture has no full URL
    base_url: str = DEFAULT_BASE_URL

    # Method used when a capture has none
    method_fallback: str = METHOD_FALLBACK_UNKNOWN

    # Capture shapes to recognize, in priority order
    variants: List[str] = Field(default_factory=lambda: list(KNOWN_VARIANTS))

    # Escape embedded single quotes as '\'' when rendering
    strict_escaping: bool = False

    # Keep header names outside KNOWN_HEADERS
    keep_unknown_headers: bool = True

    # Directory release files are written to; None means browser download
    release_directory: Optional[Path] = None

    @field_validator('method_fallback')
    @classmethod
    def _method_fallback_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError('method_fallback must not be blank')
        return value

    @field_validator('variants')
    @classmethod
    def _known_variants(cls, value: List[str]) -> List[str]:
        if not value:
            raise ValueError('at least one capture variant must be enabled')
        unknown = [v for v in value if v not in KNOWN_VARIANTS]
        if unknown:
            raise ValueError(f"unknown capture variants: {', '.join(unknown)}")
        if len(set(value)) != len(value):
            raise ValueError('capture variants must not repeat')
        return value


_settings: Optional[CurlSettings] = None


def get_settings() -> CurlSettings:
    global _settings
    if _settings is None:
        _settings = CurlSettings()
    return _settings


def clear_settings() -> None:
    global _settings
    _settings = None
