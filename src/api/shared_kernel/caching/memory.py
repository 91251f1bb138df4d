"""In-process TTL cache.

Suitable for single-process deployments, development and tests. Entries are
expired lazily on read.
"""

from __future__ import annotations

import time
from typing import Callable

from shared_kernel.caching.observability import CacheProbe, DefaultCacheProbe


class InMemoryCache:
    """Dictionary-backed implementation of the CacheProvider protocol.

    Runs entirely on the event loop thread, so no locking is needed between
    coroutines.
    """

    def __init__(
        self,
        max_entries: int = 10_000,
        clock: Callable[[], float] | None = None,
        probe: CacheProbe | None = None,
    ) -> None:
        """Initialize the cache.

        Args:
            max_entries: Upper bound on stored entries; the oldest entry is
                dropped when a new key would exceed it
            clock: Monotonic clock, injectable for tests
            probe: Optional domain probe for observability
        """
        self._entries: dict[str, tuple[str, float]] = {}
        self._max_entries = max_entries
        self._clock = clock or time.monotonic
        self._probe = probe or DefaultCacheProbe(backend="memory")

    async def get(self, key: str) -> str | None:
        entry = self._entries.get(key)
        if entry is None:
            return None

        value, expires_at = entry
        if expires_at <= self._clock():
            del self._entries[key]
            self._probe.entry_expired(key=key)
            return None

        return value

    async def set(self, key: str, value: str, ttl_seconds: int) -> bool:
        if ttl_seconds <= 0:
            return False

        if key not in self._entries and len(self._entries) >= self._max_entries:
            # dicts keep insertion order, so the first key is the oldest write
            oldest = next(iter(self._entries))
            del self._entries[oldest]
            self._probe.entry_evicted(key=oldest)

        self._entries[key] = (value, self._clock() + ttl_seconds)
        return True

    async def delete(self, key: str) -> bool:
        self._entries.pop(key, None)
        return True

    async def close(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)
