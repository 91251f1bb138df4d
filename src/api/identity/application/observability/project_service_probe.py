"""Protocol for project application service observability."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class ProjectServiceProbe(Protocol):
    """Domain probe for project application service operations."""

    def project_created(self, project_id: str, domain_id: str, name: str) -> None:
        """Record that a project was created."""
        ...

    def duplicate_project_name(self, domain_id: str, name: str) -> None:
        """Record that a project name is already taken in the domain."""
        ...

    def project_retrieved(self, project_id: str, from_cache: bool) -> None:
        """Record that a project was returned."""
        ...

    def project_not_found(self, project_id: str) -> None:
        """Record that a requested project does not exist."""
        ...

    def projects_listed(self, domain_id: str, count: int) -> None:
        """Record that the projects of a domain were listed."""
        ...

    def project_deleted(self, project_id: str, evicted_users: int) -> None:
        """Record that a project was deleted and its members evicted."""
        ...

    def users_added_to_project(self, project_id: str, count: int) -> None:
        """Record that users joined a project."""
        ...

    def users_removed_from_project(self, project_id: str, count: int) -> None:
        """Record that users left a project."""
        ...

    def with_context(self, context: ObservationContext) -> ProjectServiceProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultProjectServiceProbe:
    """Default implementation of ProjectServiceProbe using structlog."""

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

    def with_context(self, context: ObservationContext) -> DefaultProjectServiceProbe:
        """Create a new probe with observation context bound."""
        return DefaultProjectServiceProbe(logger=self._logger, context=context)

    def project_created(self, project_id: str, domain_id: str, name: str) -> None:
        self._logger.info(
            "project_created",
            project_id=project_id,
            domain_id=domain_id,
            name=name,
            **self._get_context_kwargs(),
        )

    def duplicate_project_name(self, domain_id: str, name: str) -> None:
        self._logger.warning(
            "duplicate_project_name",
            domain_id=domain_id,
            name=name,
            **self._get_context_kwargs(),
        )

    def project_retrieved(self, project_id: str, from_cache: bool) -> None:
        self._logger.debug(
            "project_retrieved",
            project_id=project_id,
            from_cache=from_cache,
            **self._get_context_kwargs(),
        )

    def project_not_found(self, project_id: str) -> None:
        self._logger.debug(
            "project_not_found", project_id=project_id, **self._get_context_kwargs()
        )

    def projects_listed(self, domain_id: str, count: int) -> None:
        self._logger.debug(
            "projects_listed",
            domain_id=domain_id,
            count=count,
            **self._get_context_kwargs(),
        )

    def project_deleted(self, project_id: str, evicted_users: int) -> None:
        self._logger.info(
            "project_deleted",
            project_id=project_id,
            evicted_users=evicted_users,
            **self._get_context_kwargs(),
        )

    def users_added_to_project(self, project_id: str, count: int) -> None:
        self._logger.info(
            "users_added_to_project",
            project_id=project_id,
            count=count,
            **self._get_context_kwargs(),
        )

    def users_removed_from_project(self, project_id: str, count: int) -> None:
        self._logger.info(
            "users_removed_from_project",
            project_id=project_id,
            count=count,
            **self._get_context_kwargs(),
        )
