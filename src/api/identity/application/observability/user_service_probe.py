"""Protocol for user application service observability.

Defines the interface for domain probes that capture application-level
domain events for user service operations, including each step of the
member creation saga.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class UserServiceProbe(Protocol):
    """Domain probe for user application service operations."""

    def user_created(
        self, user_id: str, domain_id: str, account: str, department_id: str
    ) -> None:
        """Record that a member user was persisted."""
        ...

    def duplicate_account(self, domain_id: str, account: str) -> None:
        """Record that creation was refused because the account exists."""
        ...

    def default_department_missing(self, domain_id: str, department_name: str) -> None:
        """Record that the domain has no default department."""
        ...

    def project_cascade_applied(
        self, user_id: str, department_id: str, project_count: int
    ) -> None:
        """Record that department projects were granted to a new member."""
        ...

    def role_cascade_applied(
        self, user_id: str, department_id: str, role_count: int
    ) -> None:
        """Record that department roles were bound to a new member."""
        ...

    def role_cascade_failed(
        self, user_id: str, role_id: str, bound_count: int, error: str
    ) -> None:
        """Record that the role cascade stopped part-way (no rollback)."""
        ...

    def user_retrieved(self, user_id: str, from_cache: bool) -> None:
        """Record that a user aggregate was returned."""
        ...

    def user_not_found(self, user_id: str) -> None:
        """Record that a requested user does not exist."""
        ...

    def users_listed(self, scope: str, scope_id: str, count: int) -> None:
        """Record that user aggregates were listed."""
        ...

    def user_deleted(self, domain_id: str, user_id: str) -> None:
        """Record that a user was deleted."""
        ...

    def role_not_found(self, role_name: str) -> None:
        """Record that a bind/unbind named a role that does not exist."""
        ...

    def role_bound(self, user_id: str, role_name: str) -> None:
        """Record that a role was bound to a user."""
        ...

    def role_unbound(self, user_id: str, role_name: str) -> None:
        """Record that a role was unbound from a user."""
        ...

    def default_project_set(self, user_id: str, project_id: str) -> None:
        """Record that a user's default project changed."""
        ...

    def with_context(self, context: ObservationContext) -> UserServiceProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultUserServiceProbe:
    """Default implementation of UserServiceProbe using structlog."""

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

    def with_context(self, context: ObservationContext) -> DefaultUserServiceProbe:
        """Create a new probe with observation context bound."""
        return DefaultUserServiceProbe(logger=self._logger, context=context)

    def user_created(
        self, user_id: str, domain_id: str, account: str, department_id: str
    ) -> None:
        """Record that a member user was persisted."""
        self._logger.info(
            "user_created",
            user_id=user_id,
            domain_id=domain_id,
            account=account,
            department_id=department_id,
            **self._get_context_kwargs(),
        )

    def duplicate_account(self, domain_id: str, account: str) -> None:
        """Record that creation was refused because the account exists."""
        self._logger.warning(
            "duplicate_account",
            domain_id=domain_id,
            account=account,
            **self._get_context_kwargs(),
        )

    def default_department_missing(self, domain_id: str, department_name: str) -> None:
        """Record that the domain has no default department."""
        self._logger.error(
            "default_department_missing",
            domain_id=domain_id,
            department_name=department_name,
            **self._get_context_kwargs(),
        )

    def project_cascade_applied(
        self, user_id: str, department_id: str, project_count: int
    ) -> None:
        """Record that department projects were granted to a new member."""
        self._logger.info(
            "project_cascade_applied",
            user_id=user_id,
            department_id=department_id,
            project_count=project_count,
            **self._get_context_kwargs(),
        )

    def role_cascade_applied(
        self, user_id: str, department_id: str, role_count: int
    ) -> None:
        """Record that department roles were bound to a new member."""
        self._logger.info(
            "role_cascade_applied",
            user_id=user_id,
            department_id=department_id,
            role_count=role_count,
            **self._get_context_kwargs(),
        )

    def role_cascade_failed(
        self, user_id: str, role_id: str, bound_count: int, error: str
    ) -> None:
        """Record that the role cascade stopped part-way."""
        self._logger.error(
            "role_cascade_failed",
            user_id=user_id,
            role_id=role_id,
            bound_count=bound_count,
            error=error,
            **self._get_context_kwargs(),
        )

    def user_retrieved(self, user_id: str, from_cache: bool) -> None:
        """Record that a user aggregate was returned."""
        self._logger.debug(
            "user_retrieved",
            user_id=user_id,
            from_cache=from_cache,
            **self._get_context_kwargs(),
        )

    def user_not_found(self, user_id: str) -> None:
        """Record that a requested user does not exist."""
        self._logger.debug(
            "user_not_found",
            user_id=user_id,
            **self._get_context_kwargs(),
        )

    def users_listed(self, scope: str, scope_id: str, count: int) -> None:
        """Record that user aggregates were listed."""
        self._logger.debug(
            "users_listed",
            scope=scope,
            scope_id=scope_id,
            count=count,
            **self._get_context_kwargs(),
        )

    def user_deleted(self, domain_id: str, user_id: str) -> None:
        """Record that a user was deleted."""
        self._logger.info(
            "user_deleted",
            domain_id=domain_id,
            user_id=user_id,
            **self._get_context_kwargs(),
        )

    def role_not_found(self, role_name: str) -> None:
        """Record that a bind/unbind named a role that does not exist."""
        self._logger.warning(
            "role_not_found",
            role_name=role_name,
            **self._get_context_kwargs(),
        )

    def role_bound(self, user_id: str, role_name: str) -> None:
        """Record that a role was bound to a user."""
        self._logger.info(
            "role_bound",
            user_id=user_id,
            role_name=role_name,
            **self._get_context_kwargs(),
        )

    def role_unbound(self, user_id: str, role_name: str) -> None:
        """Record that a role was unbound from a user."""
        self._logger.info(
            "role_unbound",
            user_id=user_id,
            role_name=role_name,
            **self._get_context_kwargs(),
        )

    def default_project_set(self, user_id: str, project_id: str) -> None:
        """Record that a user's default project changed."""
        self._logger.info(
            "default_project_set",
            user_id=user_id,
            project_id=project_id,
            **self._get_context_kwargs(),
        )
