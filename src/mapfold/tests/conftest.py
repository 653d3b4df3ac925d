"""Shared fixtures: isolate settings and logging between tests."""

import os

import pytest

from mapfold.foundation.config import clear_settings_cache
from mapfold.runtime.observability import reset_logging


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch: pytest.MonkeyPatch) -> object:
    """Drop MAPFOLD_* variables and cached settings/logging before each test."""
    for key in list(os.environ):
        if key.startswith("MAPFOLD_"):
            monkeypatch.delenv(key)
    monkeypatch.chdir(os.path.dirname(__file__))  # keep stray .env files out
    clear_settings_cache()
    reset_logging()
    yield
    clear_settings_cache()
    reset_logging()
