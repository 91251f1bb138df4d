"""Protocol for role application service observability."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class RoleServiceProbe(Protocol):
    """Domain probe for role catalogue operations."""

    def role_created(self, role_id: str, name: str) -> None: ...

    def duplicate_role_name(self, name: str) -> None: ...

    def role_not_found(self, role_id: str) -> None: ...

    def roles_listed(self, count: int) -> None: ...

    def role_deleted(self, role_id: str, evicted_users: int) -> None: ...

    def with_context(self, context: ObservationContext) -> RoleServiceProbe: ...


class DefaultRoleServiceProbe:
    """Default implementation of RoleServiceProbe using structlog."""

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

    def with_context(self, context: ObservationContext) -> DefaultRoleServiceProbe:
        return DefaultRoleServiceProbe(logger=self._logger, context=context)

    def role_created(self, role_id: str, name: str) -> None:
        self._logger.info(
            "role_created", role_id=role_id, name=name, **self._get_context_kwargs()
        )

    def duplicate_role_name(self, name: str) -> None:
        self._logger.warning(
            "duplicate_role_name", name=name, **self._get_context_kwargs()
        )

    def role_not_found(self, role_id: str) -> None:
        self._logger.debug(
            "role_not_found", role_id=role_id, **self._get_context_kwargs()
        )

    def roles_listed(self, count: int) -> None:
        self._logger.debug("roles_listed", count=count, **self._get_context_kwargs())

    def role_deleted(self, role_id: str, evicted_users: int) -> None:
        self._logger.info(
            "role_deleted",
            role_id=role_id,
            evicted_users=evicted_users,
            **self._get_context_kwargs(),
        )
