"""Unit tests for InMemoryCache."""

import pytest
from unittest.mock import create_autospec

from shared_kernel.caching import CacheProvider, InMemoryCache
from shared_kernel.caching.observability import CacheProbe


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self):
        self.now = 1000.0

    def __call__(self) -> float:
        return self.now


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def mock_probe():
    return create_autospec(CacheProbe, instance=True)


@pytest.fixture
def cache(clock, mock_probe):
    return InMemoryCache(max_entries=2, clock=clock, probe=mock_probe)


class TestInMemoryCache:
    """Tests for get/set/delete semantics."""

    def test_implements_protocol(self, cache):
        assert isinstance(cache, CacheProvider)

    @pytest.mark.asyncio
    async def test_set_then_get(self, cache):
        assert await cache.set("k", "v", 10) is True

        assert await cache.get("k") == "v"

    @pytest.mark.asyncio
    async def test_entry_expires_after_ttl(self, cache, clock, mock_probe):
        await cache.set("k", "v", 10)
        clock.now += 10

        assert await cache.get("k") is None
        mock_probe.entry_expired.assert_called_once_with(key="k")
        assert len(cache) == 0

    @pytest.mark.asyncio
    async def test_non_positive_ttl_is_not_stored(self, cache):
        assert await cache.set("k", "v", 0) is False
        assert await cache.get("k") is None

    @pytest.mark.asyncio
    async def test_oldest_entry_dropped_at_capacity(self, cache, mock_probe):
        await cache.set("a", "1", 10)
        await cache.set("b", "2", 10)
        await cache.set("c", "3", 10)

        assert await cache.get("a") is None
        assert await cache.get("c") == "3"
        mock_probe.entry_evicted.assert_called_once_with(key="a")

    @pytest.mark.asyncio
    async def test_overwrite_at_capacity_keeps_other_entries(self, cache):
        await cache.set("a", "1", 10)
        await cache.set("b", "2", 10)
        await cache.set("a", "updated", 10)

        assert await cache.get("a") == "updated"
        assert await cache.get("b") == "2"

    @pytest.mark.asyncio
    async def test_delete_missing_key_succeeds(self, cache):
        assert await cache.delete("missing") is True

    @pytest.mark.asyncio
    async def test_close_clears_entries(self, cache):
        await cache.set("k", "v", 10)

        await cache.close()

        assert len(cache) == 0
