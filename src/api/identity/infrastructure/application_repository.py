"""PostgreSQL implementation of IApplicationRepository."""

from __future__ import annotations

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from identity.domain.aggregates import Application
from identity.domain.value_objects import ApplicationId, UserId
from identity.infrastructure.models import ApplicationModel
from identity.infrastructure.observability import (
    DefaultRepositoryProbe,
    RepositoryProbe,
)
from identity.ports.exceptions import ConflictError
from identity.ports.repositories import IApplicationRepository


def _to_application(model: ApplicationModel) -> Application:
    return Application(
        id=ApplicationId(value=model.id),
        user_id=UserId(value=model.user_id),
        name=model.name,
        client_id=model.client_id,
        client_secret=model.client_secret,
        redirect_uri=model.redirect_uri,
        website=model.website,
        logo_image=model.logo_image,
        description=model.description,
        locked=model.locked,
        token_expire_seconds=model.token_expire_seconds,
        last_login_at=model.last_login_at,
        last_login_ip=model.last_login_ip,
        login_failed_times=model.login_failed_times,
        login_success_times=model.login_success_times,
        created_at=model.created_at,
    )


class ApplicationRepository(IApplicationRepository):
    """Repository managing PostgreSQL storage for client Applications."""

    def __init__(
        self, session: AsyncSession, probe: RepositoryProbe | None = None
    ) -> None:
        """Initialize repository with database session and probe.

        Args:
            session: AsyncSession from FastAPI dependency injection
            probe: Optional domain probe for observability
        """
        self._session = session
        self._probe = probe or DefaultRepositoryProbe()

    async def create(self, application: Application) -> None:
        """Insert an application.

        Raises:
            ConflictError: If the owner already has an application with that name
        """
        self._session.add(
            ApplicationModel(
                id=application.id.value,
                user_id=application.user_id.value,
                name=application.name,
                client_id=application.client_id,
                client_secret=application.client_secret,
                redirect_uri=application.redirect_uri,
                website=application.website,
                logo_image=application.logo_image,
                description=application.description,
                locked=application.locked,
                token_expire_seconds=application.token_expire_seconds,
                last_login_at=application.last_login_at,
                last_login_ip=application.last_login_ip,
                login_failed_times=application.login_failed_times,
                login_success_times=application.login_success_times,
                created_at=application.created_at,
            )
        )
        try:
            await self._session.commit()
        except IntegrityError as e:
            await self._session.rollback()
            if "uq_applications_user_id_name" in str(e):
                self._probe.duplicate_record(kind="application", key=application.name)
                raise ConflictError(
                    f"application {application.name} already exists"
                ) from e
            raise

        self._probe.record_created(
            kind="application", record_id=application.id.value
        )

    async def get_by_id(self, application_id: ApplicationId) -> Application | None:
        stmt = select(ApplicationModel).where(
            ApplicationModel.id == application_id.value
        )
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return _to_application(model) if model is not None else None

    async def get_by_name(self, user_id: UserId, name: str) -> Application | None:
        stmt = select(ApplicationModel).where(
            ApplicationModel.user_id == user_id.value,
            ApplicationModel.name == name,
        )
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return _to_application(model) if model is not None else None

    async def list_by_user(self, user_id: UserId) -> list[Application]:
        stmt = (
            select(ApplicationModel)
            .where(ApplicationModel.user_id == user_id.value)
            .order_by(ApplicationModel.created_at.desc())
        )
        result = await self._session.execute(stmt)
        return [_to_application(model) for model in result.scalars().all()]

    async def delete(self, application_id: ApplicationId) -> bool:
        stmt = delete(ApplicationModel).where(
            ApplicationModel.id == application_id.value
        )
        result = await self._session.execute(stmt)
        await self._session.commit()

        if result.rowcount == 0:
            return False

        self._probe.record_deleted(
            kind="application", record_id=application_id.value
        )
        return True
