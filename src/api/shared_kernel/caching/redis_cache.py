"""Redis implementation of the CacheProvider protocol.

Wraps ``redis.asyncio`` and converts backend errors into advisory results
(a miss for reads, False for writes) so that an unavailable Redis degrades
to cache-less operation instead of failing requests.
"""

from __future__ import annotations

from redis.asyncio import Redis
from redis.exceptions import RedisError

from shared_kernel.caching.observability import CacheProbe, DefaultCacheProbe


class RedisCache:
    """Redis-backed cache with per-entry TTL."""

    def __init__(
        self,
        client: Redis,
        key_prefix: str = "",
        probe: CacheProbe | None = None,
    ) -> None:
        """Initialize the cache.

        Args:
            client: Async Redis client (owns its connection pool)
            key_prefix: Namespace prepended to every key
            probe: Optional domain probe for observability
        """
        self._client = client
        self._prefix = key_prefix
        self._probe = probe or DefaultCacheProbe(backend="redis")

    @classmethod
    def from_url(
        cls,
        url: str,
        key_prefix: str = "",
        socket_timeout: float = 5.0,
        probe: CacheProbe | None = None,
    ) -> RedisCache:
        """Create a cache with a pooled client for the given Redis URL."""
        client = Redis.from_url(
            url,
            encoding="utf-8",
            decode_responses=True,
            socket_timeout=socket_timeout,
            socket_connect_timeout=socket_timeout,
        )
        return cls(client=client, key_prefix=key_prefix, probe=probe)

    def _key(self, key: str) -> str:
        return f"{self._prefix}{key}"

    async def get(self, key: str) -> str | None:
        try:
            value = await self._client.get(self._key(key))
        except RedisError as e:
            self._probe.backend_error(operation="get", key=key, error=e)
            return None

        if isinstance(value, bytes):
            return value.decode("utf-8")
        return value

    async def set(self, key: str, value: str, ttl_seconds: int) -> bool:
        try:
            result = await self._client.set(self._key(key), value, ex=ttl_seconds)
        except RedisError as e:
            self._probe.backend_error(operation="set", key=key, error=e)
            return False
        return bool(result)

    async def delete(self, key: str) -> bool:
        try:
            await self._client.delete(self._key(key))
        except RedisError as e:
            self._probe.backend_error(operation="delete", key=key, error=e)
            return False
        # A missing key is still a successful eviction
        return True

    async def close(self) -> None:
        await self._client.aclose()
        self._probe.connection_closed()
