"""Protocol for client application registry observability."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class ApplicationServiceProbe(Protocol):
    """Domain probe for client application operations.

    Client secrets are never passed to the probe.
    """

    def application_registered(
        self, application_id: str, user_id: str, name: str, client_id: str
    ) -> None: ...

    def duplicate_application_name(self, user_id: str, name: str) -> None: ...

    def application_not_found(self, application_id: str) -> None: ...

    def applications_listed(self, user_id: str, count: int) -> None: ...

    def application_deleted(self, application_id: str) -> None: ...

    def with_context(self, context: ObservationContext) -> ApplicationServiceProbe: ...


class DefaultApplicationServiceProbe:
    """Default implementation of ApplicationServiceProbe using structlog."""

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
    ) -> DefaultApplicationServiceProbe:
        return DefaultApplicationServiceProbe(logger=self._logger, context=context)

    def application_registered(
        self, application_id: str, user_id: str, name: str, client_id: str
    ) -> None:
        self._logger.info(
            "application_registered",
            application_id=application_id,
            user_id=user_id,
            name=name,
            client_id=client_id,
            **self._get_context_kwargs(),
        )

    def duplicate_application_name(self, user_id: str, name: str) -> None:
        self._logger.warning(
            "duplicate_application_name",
            user_id=user_id,
            name=name,
            **self._get_context_kwargs(),
        )

    def application_not_found(self, application_id: str) -> None:
        self._logger.debug(
            "application_not_found",
            application_id=application_id,
            **self._get_context_kwargs(),
        )

    def applications_listed(self, user_id: str, count: int) -> None:
        self._logger.debug(
            "applications_listed",
            user_id=user_id,
            count=count,
            **self._get_context_kwargs(),
        )

    def application_deleted(self, application_id: str) -> None:
        self._logger.info(
            "application_deleted",
            application_id=application_id,
            **self._get_context_kwargs(),
        )
