"""Shared infrastructure dependencies.

Provides ONLY raw infrastructure resources (the shared cache provider).
Does NOT import from bounded contexts to maintain DDD boundaries.
"""

from __future__ import annotations

import threading

from infrastructure.observability import DefaultLifecycleProbe
from infrastructure.settings import CacheSettings, get_cache_settings
from shared_kernel.caching import CacheProvider, InMemoryCache
from shared_kernel.caching.redis_cache import RedisCache

_probe = DefaultLifecycleProbe()

# Application-scoped cache provider (created at startup, closed at shutdown)
_cache_provider: CacheProvider | None = None
_cache_lock = threading.Lock()


def create_cache_provider(settings: CacheSettings) -> CacheProvider:
    """Build the cache backend selected by configuration.

    Args:
        settings: Cache configuration

    Returns:
        InMemoryCache or RedisCache
    """
    if settings.backend == "redis":
        return RedisCache.from_url(
            settings.redis_url,
            key_prefix=settings.key_prefix,
            socket_timeout=settings.socket_timeout,
        )
    return InMemoryCache(max_entries=settings.max_entries)


def get_cache_provider() -> CacheProvider:
    """Get the application-scoped cache provider (singleton).

    Uses double-check locking for thread-safe initialization.

    Returns:
        The shared CacheProvider
    """
    global _cache_provider
    if _cache_provider is None:
        with _cache_lock:
            if _cache_provider is None:
                settings = get_cache_settings()
                _cache_provider = create_cache_provider(settings)
                _probe.cache_provider_created(backend=settings.backend)
    return _cache_provider


async def close_cache_provider() -> None:
    """Close the cache provider on application shutdown.

    Also resets the singleton to allow reinitialization.
    """
    global _cache_provider

    if _cache_provider is not None:
        await _cache_provider.close()
        _probe.cache_provider_closed(backend=get_cache_settings().backend)
        _cache_provider = None
