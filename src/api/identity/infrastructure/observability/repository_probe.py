"""Domain probe for identity repository operations.

Following Domain-Oriented Observability patterns, this probe captures
persistence events for every identity store. Events carry the kind of
record (``user``, ``project``...) so one probe serves all repositories.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class RepositoryProbe(Protocol):
    """Domain probe for identity repository operations."""

    def record_created(self, kind: str, record_id: str) -> None:
        """Record that a row was inserted."""
        ...

    def record_deleted(self, kind: str, record_id: str) -> None:
        """Record that a row was deleted."""
        ...

    def duplicate_record(self, kind: str, key: str) -> None:
        """Record that an insert violated a uniqueness constraint."""
        ...

    def relationship_changed(
        self, relation: str, owner_id: str, count: int, action: str
    ) -> None:
        """Record that association rows were added or removed."""
        ...

    def with_context(self, context: ObservationContext) -> RepositoryProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultRepositoryProbe:
    """Default implementation of RepositoryProbe using structlog."""

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

    def with_context(self, context: ObservationContext) -> DefaultRepositoryProbe:
        """Create a new probe with observation context bound."""
        return DefaultRepositoryProbe(logger=self._logger, context=context)

    def record_created(self, kind: str, record_id: str) -> None:
        self._logger.debug(
            "record_created",
            kind=kind,
            record_id=record_id,
            **self._get_context_kwargs(),
        )

    def record_deleted(self, kind: str, record_id: str) -> None:
        self._logger.debug(
            "record_deleted",
            kind=kind,
            record_id=record_id,
            **self._get_context_kwargs(),
        )

    def duplicate_record(self, kind: str, key: str) -> None:
        self._logger.warning(
            "duplicate_record", kind=kind, key=key, **self._get_context_kwargs()
        )

    def relationship_changed(
        self, relation: str, owner_id: str, count: int, action: str
    ) -> None:
        self._logger.debug(
            "relationship_changed",
            relation=relation,
            owner_id=owner_id,
            count=count,
            action=action,
            **self._get_context_kwargs(),
        )
