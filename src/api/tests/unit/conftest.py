"""Unit test fixtures."""

import pytest


@pytest.fixture(autouse=True)
def clear_settings_cache():
    """Reload settings from the environment for every test."""
    from infrastructure.settings import (
        get_cache_settings,
        get_database_settings,
        get_identity_settings,
        get_settings,
    )

    for getter in (
        get_settings,
        get_database_settings,
        get_cache_settings,
        get_identity_settings,
    ):
        getter.cache_clear()
    yield
