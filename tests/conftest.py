"""Shared pytest fixtures."""

import os

import pytest

from sql_helpers.config import get_settings


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch):
    """Run every test with default settings and a fresh settings cache."""
    for key in list(os.environ):
        if key.upper().startswith("SQL_HELPERS_"):
            monkeypatch.delenv(key, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
