"""Cache provider protocol.

Defines the interface for key-value caches with per-entry TTL, allowing for
swappable implementations (in-process, Redis, mock).
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class CacheProvider(Protocol):
    """Protocol for key-value caches with TTL.

    Values are opaque strings; encoding is the caller's concern. There are no
    ordering or atomicity guarantees across keys. A ``False`` result from
    ``set`` or ``delete`` is advisory and must never be treated as fatal.
    """

    async def get(self, key: str) -> str | None:
        """Read a value.

        Args:
            key: Cache key

        Returns:
            The stored value, or None if the key is absent or expired
        """
        ...

    async def set(self, key: str, value: str, ttl_seconds: int) -> bool:
        """Store a value with a time-to-live.

        Args:
            key: Cache key
            value: Encoded value
            ttl_seconds: Lifetime of the entry in seconds

        Returns:
            True if the value was stored
        """
        ...

    async def delete(self, key: str) -> bool:
        """Remove a value.

        Args:
            key: Cache key

        Returns:
            True if the cache acknowledged the delete
        """
        ...

    async def close(self) -> None:
        """Release any resources held by the cache."""
        ...
