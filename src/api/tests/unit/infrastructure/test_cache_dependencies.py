"""Unit tests for the shared cache provider dependency."""

import pytest
from unittest.mock import patch

from infrastructure import dependencies
from infrastructure.dependencies import (
    close_cache_provider,
    create_cache_provider,
    get_cache_provider,
)
from infrastructure.settings import CacheSettings
from shared_kernel.caching import InMemoryCache
from shared_kernel.caching.redis_cache import RedisCache


@pytest.fixture(autouse=True)
def reset_cache_provider():
    """Start and end every test without a shared provider."""
    dependencies._cache_provider = None
    yield
    dependencies._cache_provider = None


class TestCreateCacheProvider:
    """Tests for backend selection."""

    def test_memory_backend(self):
        provider = create_cache_provider(CacheSettings(backend="memory"))

        assert isinstance(provider, InMemoryCache)

    def test_redis_backend(self):
        provider = create_cache_provider(
            CacheSettings(backend="redis", redis_url="redis://cache:6379/1")
        )

        assert isinstance(provider, RedisCache)


class TestCacheProviderLifecycle:
    """Tests for the application-scoped singleton."""

    def test_provider_is_singleton(self):
        with patch(
            "infrastructure.dependencies.get_cache_settings",
            return_value=CacheSettings(backend="memory"),
        ):
            assert get_cache_provider() is get_cache_provider()

    @pytest.mark.asyncio
    async def test_close_resets_singleton(self):
        with patch(
            "infrastructure.dependencies.get_cache_settings",
            return_value=CacheSettings(backend="memory"),
        ):
            first = get_cache_provider()
            await close_cache_provider()
            second = get_cache_provider()

        assert first is not second

    @pytest.mark.asyncio
    async def test_close_without_provider_is_noop(self):
        await close_cache_provider()

        assert dependencies._cache_provider is None
