"""Protocol for department application service observability."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class DepartmentServiceProbe(Protocol):
    """Domain probe for department application service operations."""

    def department_created(
        self, department_id: str, domain_id: str, name: str
    ) -> None:
        """Record that a department was created."""
        ...

    def duplicate_department_name(self, domain_id: str, name: str) -> None:
        """Record that a department name is already taken in the domain."""
        ...

    def department_not_found(self, department_id: str) -> None:
        """Record that a requested department does not exist."""
        ...

    def departments_listed(self, domain_id: str, count: int) -> None:
        """Record that the departments of a domain were listed."""
        ...

    def department_deleted(self, domain_id: str, department_id: str) -> None:
        """Record that a department was deleted."""
        ...

    def department_delete_refused(self, department_id: str, reason: str) -> None:
        """Record that deleting a department was refused."""
        ...

    def projects_declared(self, department_id: str, count: int) -> None:
        """Record that projects were declared for future members."""
        ...

    def roles_declared(self, department_id: str, count: int) -> None:
        """Record that roles were declared for future members."""
        ...

    def with_context(self, context: ObservationContext) -> DepartmentServiceProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultDepartmentServiceProbe:
    """Default implementation of DepartmentServiceProbe using structlog."""

    def __init__(
        self,
        logger: structlog.stdlib.BoundLogger | None = None,
        context: ObservationContext | None = None,
    ):
        self._logger = logger or structlog.get_logger()
        self._context = context

    def _get_context_kwargs(self) -> dict[str, Any]:
        if self._context is None:
            return {}
        return self._context.as_dict()

    def with_context(
        self, context: ObservationContext
    ) -> DefaultDepartmentServiceProbe:
        return DefaultDepartmentServiceProbe(logger=self._logger, context=context)

    def department_created(
        self, department_id: str, domain_id: str, name: str
    ) -> None:
        self._logger.info(
            "department_created",
            department_id=department_id,
            domain_id=domain_id,
            name=name,
            **self._get_context_kwargs(),
        )

    def duplicate_department_name(self, domain_id: str, name: str) -> None:
        self._logger.warning(
            "duplicate_department_name",
            domain_id=domain_id,
            name=name,
            **self._get_context_kwargs(),
        )

    def department_not_found(self, department_id: str) -> None:
        self._logger.debug(
            "department_not_found",
            department_id=department_id,
            **self._get_context_kwargs(),
        )

    def departments_listed(self, domain_id: str, count: int) -> None:
        self._logger.debug(
            "departments_listed",
            domain_id=domain_id,
            count=count,
            **self._get_context_kwargs(),
        )

    def department_deleted(self, domain_id: str, department_id: str) -> None:
        self._logger.info(
            "department_deleted",
            domain_id=domain_id,
            department_id=department_id,
            **self._get_context_kwargs(),
        )

    def department_delete_refused(self, department_id: str, reason: str) -> None:
        self._logger.warning(
            "department_delete_refused",
            department_id=department_id,
            reason=reason,
            **self._get_context_kwargs(),
        )

    def projects_declared(self, department_id: str, count: int) -> None:
        self._logger.info(
            "department_projects_declared",
            department_id=department_id,
            count=count,
            **self._get_context_kwargs(),
        )

    def roles_declared(self, department_id: str, count: int) -> None:
        self._logger.info(
            "department_roles_declared",
            department_id=department_id,
            count=count,
            **self._get_context_kwargs(),
        )
