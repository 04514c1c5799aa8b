"""Shared fixtures for console tests."""

from __future__ import annotations

from datetime import timezone

import pytest

from gemini_pool_console.i18n import LocalizationRuntime
from gemini_pool_console.navigation import Navigator
from gemini_pool_console.storage import TOKEN_KEY, MemoryStore
from tests.fakes import TOKEN


@pytest.fixture
def store():
    """Empty persisted state."""
    return MemoryStore()


@pytest.fixture
def authed_store():
    """Persisted state holding a session token."""
    return MemoryStore({TOKEN_KEY: TOKEN})


@pytest.fixture
def navigator():
    return Navigator()


@pytest.fixture
def i18n(store):
    """Localization runtime pinned to UTC, default language zh."""
    return LocalizationRuntime(store, tz=timezone.utc)
