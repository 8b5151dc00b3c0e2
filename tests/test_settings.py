from pathlib import Path

import pytest
from pydantic import ValidationError as SettingsValidationError

from curl_generator.settings import (
    DEFAULT_BASE_URL,
    METHOD_FALLBACK_POST,
    METHOD_FALLBACK_UNKNOWN,
    CurlSettings,
    clear_settings,
    get_settings,
)


def test_defaults():
    settings = CurlSettings()

    assert settings.base_url == DEFAULT_BASE_URL == "http://localhost:8080"
    assert settings.method_fallback == METHOD_FALLBACK_UNKNOWN
    assert settings.variants == ["_source", "fields"]
    assert settings.strict_escaping is False
    assert settings.keep_unknown_headers is True
    assert settings.release_directory is None


def test_environment_overrides(monkeypatch, tmp_path):
    monkeypatch.setenv("CURL_GENERATOR_METHOD_FALLBACK", METHOD_FALLBACK_POST)
    monkeypatch.setenv("CURL_GENERATOR_BASE_URL", "https://api.internal")
    monkeypatch.setenv("CURL_GENERATOR_VARIANTS", '["fields"]')
    monkeypatch.setenv("CURL_GENERATOR_STRICT_ESCAPING", "true")
    monkeypatch.setenv("CURL_GENERATOR_RELEASE_DIRECTORY", str(tmp_path))

    settings = CurlSettings()

    assert settings.method_fallback == "POST"
    assert settings.base_url == "https://api.internal"
    assert settings.variants == ["fields"]
    assert settings.strict_escaping is True
    assert settings.release_directory == Path(tmp_path)


@pytest.mark.parametrize(
    "variants",
    [
        [],
        ["bogus"],
        ["_source", "_source"],
    ],
)
def test_invalid_variants_rejected(variants):
    with pytest.raises(SettingsValidationError):
        CurlSettings(variants=variants)


def test_blank_method_fallback_rejected():
    with pytest.raises(SettingsValidationError):
        CurlSettings(method_fallback="  ")


def test_settings_are_read_only():
    settings = CurlSettings()

    with pytest.raises(SettingsValidationError):
        settings.base_url = "http://other"


def test_get_settings_is_cached_until_cleared(monkeypatch):
    first = get_settings()

    assert get_settings() is first

    monkeypatch.setenv("CURL_GENERATOR_METHOD_FALLBACK", "POST")
    clear_settings()

    assert get_settings() is not first
    assert get_settings().method_fallback == "POST"
