"""Domain probe for cache backend operations.

Following Domain-Oriented Observability patterns, this probe captures
backend-level cache events (connection problems, expiry, eviction).
Application-level hit/miss events are recorded by the callers' own probes.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class CacheProbe(Protocol):
    """Domain probe for cache backend operations."""

    def backend_error(self, operation: str, key: str, error: Exception) -> None:
        """Record that the cache backend rejected an operation."""
        ...

    def entry_expired(self, key: str) -> None:
        """Record that an entry was dropped because its TTL elapsed."""
        ...

    def entry_evicted(self, key: str) -> None:
        """Record that an entry was dropped to respect the size bound."""
        ...

    def connection_closed(self) -> None:
        """Record that the cache connection was closed."""
        ...

    def with_context(self, context: ObservationContext) -> CacheProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultCacheProbe:
    """Default implementation of CacheProbe using structlog."""

    def __init__(
        self,
        backend: str,
        logger: structlog.stdlib.BoundLogger | None = None,
        context: ObservationContext | None = None,
    ):
        self._backend = backend
        self._logger = logger or structlog.get_logger()
        self._context = context

    def _get_context_kwargs(self) -> dict[str, Any]:
        """Get context metadata as kwargs for logging."""
        if self._context is None:
            return {}
        return self._context.as_dict()

    def with_context(self, context: ObservationContext) -> DefaultCacheProbe:
        """Create a new probe with observation context bound."""
        return DefaultCacheProbe(
            backend=self._backend, logger=self._logger, context=context
        )

    def backend_error(self, operation: str, key: str, error: Exception) -> None:
        self._logger.warning(
            "cache_backend_error",
            backend=self._backend,
            operation=operation,
            key=key,
            error=str(error),
            error_type=type(error).__name__,
            **self._get_context_kwargs(),
        )

    def entry_expired(self, key: str) -> None:
        self._logger.debug(
            "cache_entry_expired",
            backend=self._backend,
            key=key,
            **self._get_context_kwargs(),
        )

    def entry_evicted(self, key: str) -> None:
        self._logger.debug(
            "cache_entry_evicted",
            backend=self._backend,
            key=key,
            **self._get_context_kwargs(),
        )

    def connection_closed(self) -> None:
        self._logger.info(
            "cache_connection_closed",
            backend=self._backend,
            **self._get_context_kwargs(),
        )
