"""Observability for cache operations."""

from shared_kernel.caching.observability.cache_probe import (
    CacheProbe,
    DefaultCacheProbe,
)

__all__ = [
    "CacheProbe",
    "DefaultCacheProbe",
]
