from __future__ import annotations

import os

import pytest

from curl_generator.settings import clear_settings


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch):
    for key in list(os.environ):
        if key.upper().startswith("CURL_GENERATOR_"):
            monkeypatch.delenv(key, raising=False)
    clear_settings()
    yield
    clear_settings()
