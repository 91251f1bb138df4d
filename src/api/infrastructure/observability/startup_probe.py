"""Domain probe for application startup and lifecycle events.

Following Domain-Oriented Observability patterns, this probe captures
domain-significant events during application initialization and shutdown.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class LifecycleProbe(Protocol):
    """Domain probe for application lifecycle operations."""

    def application_started(self, version: str, caching_enabled: bool) -> None:
        """Record that the application finished starting up."""
        ...

    def cache_provider_created(self, backend: str) -> None:
        """Record that the shared cache provider was created."""
        ...

    def cache_provider_closed(self, backend: str) -> None:
        """Record that the shared cache provider was closed."""
        ...

    def application_stopped(self) -> None:
        """Record that the application shut down."""
        ...

    def with_context(self, context: ObservationContext) -> LifecycleProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultLifecycleProbe:
    """Default implementation of LifecycleProbe using structlog."""

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

    def with_context(self, context: ObservationContext) -> DefaultLifecycleProbe:
        """Create a new probe with observation context bound."""
        return DefaultLifecycleProbe(logger=self._logger, context=context)

    def application_started(self, version: str, caching_enabled: bool) -> None:
        self._logger.info(
            "application_started",
            version=version,
            caching_enabled=caching_enabled,
            **self._get_context_kwargs(),
        )

    def cache_provider_created(self, backend: str) -> None:
        self._logger.info(
            "cache_provider_created",
            backend=backend,
            **self._get_context_kwargs(),
        )

    def cache_provider_closed(self, backend: str) -> None:
        self._logger.info(
            "cache_provider_closed",
            backend=backend,
            **self._get_context_kwargs(),
        )

    def application_stopped(self) -> None:
        self._logger.info("application_stopped", **self._get_context_kwargs())
