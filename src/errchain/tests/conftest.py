"""Shared fixtures for errchain tests."""

import pytest

from errchain.config import clear_settings_cache


@pytest.fixture(autouse=True)
def clean_settings() -> object:
    """Reset cached settings around each test so env overrides take effect."""
    clear_settings_cache()
    yield
    clear_settings_cache()
