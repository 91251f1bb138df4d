"""Protocol for aggregate cache observability.

Defines the interface for domain probes that capture cache reads, writes
and evictions performed on behalf of the identity services.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class AggregateCacheProbe(Protocol):
    """Domain probe for aggregate cache operations."""

    def cache_hit(self, kind: str, key: str) -> None:
        """Record that an aggregate was served from the cache."""
        ...

    def cache_miss(self, kind: str, key: str) -> None:
        """Record that an aggregate was not in the cache."""
        ...

    def cache_entry_invalid(self, kind: str, key: str, error: str) -> None:
        """Record that a cached entry failed validation and was ignored."""
        ...

    def cache_populated(self, kind: str, key: str, ttl_seconds: int) -> None:
        """Record that an aggregate was written to the cache."""
        ...

    def cache_write_failed(self, kind: str, key: str) -> None:
        """Record that writing an aggregate to the cache failed."""
        ...

    def cache_evicted(self, kind: str, key: str) -> None:
        """Record that a cache entry was evicted."""
        ...

    def cache_eviction_failed(self, kind: str, key: str) -> None:
        """Record that evicting a cache entry failed."""
        ...

    def with_context(self, context: ObservationContext) -> AggregateCacheProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultAggregateCacheProbe:
    """Default implementation of AggregateCacheProbe using structlog."""

    def __init__(
        self,
        logger: structlog.stdlib.BoundLogger | None = None,
        context: ObservationContext | None = None,
    ):
        self._logger = logger or structlog.get_logger()
        self._context = context

    def _get_context_kwargs(self) -> dict[str, Any]:
        """Get context metadata as kwargs for logging."""
        if self._context is None:
            return {}
        return self._context.as_dict()

    def with_context(self, context: ObservationContext) -> DefaultAggregateCacheProbe:
        """Create a new probe with observation context bound."""
        return DefaultAggregateCacheProbe(logger=self._logger, context=context)

    def cache_hit(self, kind: str, key: str) -> None:
        self._logger.debug(
            "aggregate_cache_hit", kind=kind, key=key, **self._get_context_kwargs()
        )

    def cache_miss(self, kind: str, key: str) -> None:
        self._logger.debug(
            "aggregate_cache_miss", kind=kind, key=key, **self._get_context_kwargs()
        )

    def cache_entry_invalid(self, kind: str, key: str, error: str) -> None:
        self._logger.warning(
            "aggregate_cache_entry_invalid",
            kind=kind,
            key=key,
            error=error,
            **self._get_context_kwargs(),
        )

    def cache_populated(self, kind: str, key: str, ttl_seconds: int) -> None:
        self._logger.debug(
            "aggregate_cache_populated",
            kind=kind,
            key=key,
            ttl_seconds=ttl_seconds,
            **self._get_context_kwargs(),
        )

    def cache_write_failed(self, kind: str, key: str) -> None:
        self._logger.warning(
            "aggregate_cache_write_failed",
            kind=kind,
            key=key,
            **self._get_context_kwargs(),
        )

    def cache_evicted(self, kind: str, key: str) -> None:
        self._logger.debug(
            "aggregate_cache_evicted", kind=kind, key=key, **self._get_context_kwargs()
        )

    def cache_eviction_failed(self, kind: str, key: str) -> None:
        self._logger.warning(
            "aggregate_cache_eviction_failed",
            kind=kind,
            key=key,
            **self._get_context_kwargs(),
        )
