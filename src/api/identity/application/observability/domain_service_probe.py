"""Protocol for domain (tenant) application service observability."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class DomainServiceProbe(Protocol):
    """Domain probe for tenant lifecycle operations."""

    def domain_created(
        self, domain_id: str, name: str, default_department_id: str
    ) -> None:
        """Record that a domain and its default department were created."""
        ...

    def duplicate_domain_name(self, name: str) -> None:
        """Record that a domain name is already taken."""
        ...

    def default_department_bootstrap_failed(self, domain_id: str, error: str) -> None:
        """Record that the default department could not be created."""
        ...

    def domain_not_found(self, domain_id: str) -> None:
        """Record that a requested domain does not exist."""
        ...

    def domains_listed(self, count: int) -> None:
        """Record that domains were listed."""
        ...

    def domain_deleted(self, domain_id: str) -> None:
        """Record that a domain was deleted."""
        ...

    def domain_delete_refused(self, domain_id: str, user_count: int) -> None:
        """Record that deleting a domain with users was refused."""
        ...

    def with_context(self, context: ObservationContext) -> DomainServiceProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultDomainServiceProbe:
    """Default implementation of DomainServiceProbe using structlog."""

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

    def with_context(self, context: ObservationContext) -> DefaultDomainServiceProbe:
        """Create a new probe with observation context bound."""
        return DefaultDomainServiceProbe(logger=self._logger, context=context)

    def domain_created(
        self, domain_id: str, name: str, default_department_id: str
    ) -> None:
        self._logger.info(
            "domain_created",
            domain_id=domain_id,
            name=name,
            default_department_id=default_department_id,
            **self._get_context_kwargs(),
        )

    def duplicate_domain_name(self, name: str) -> None:
        self._logger.warning(
            "duplicate_domain_name", name=name, **self._get_context_kwargs()
        )

    def default_department_bootstrap_failed(self, domain_id: str, error: str) -> None:
        self._logger.error(
            "default_department_bootstrap_failed",
            domain_id=domain_id,
            error=error,
            **self._get_context_kwargs(),
        )

    def domain_not_found(self, domain_id: str) -> None:
        self._logger.debug(
            "domain_not_found", domain_id=domain_id, **self._get_context_kwargs()
        )

    def domains_listed(self, count: int) -> None:
        self._logger.debug("domains_listed", count=count, **self._get_context_kwargs())

    def domain_deleted(self, domain_id: str) -> None:
        self._logger.info(
            "domain_deleted", domain_id=domain_id, **self._get_context_kwargs()
        )

    def domain_delete_refused(self, domain_id: str, user_count: int) -> None:
        self._logger.warning(
            "domain_delete_refused",
            domain_id=domain_id,
            user_count=user_count,
            **self._get_context_kwargs(),
        )
