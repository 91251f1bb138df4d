"""Client application registry for the identity bounded context.

Only the registry lives here. Verifying client credentials and issuing
tokens are handled by the token service.
"""

from __future__ import annotations

from identity.application.observability import (
    ApplicationServiceProbe,
    DefaultApplicationServiceProbe,
)
from identity.application.value_objects import lookup
from identity.domain.aggregates import Application
from identity.domain.aggregates.application import DEFAULT_TOKEN_EXPIRE_SECONDS
from identity.domain.value_objects import ApplicationId, DomainId, UserId
from identity.ports.exceptions import ConflictError, NotFoundError
from identity.ports.repositories import IApplicationRepository, IUserRepository


class ApplicationService:
    """Application service for client applications owned by users.

    Applications are scoped to their owner's domain: an application whose
    owner belongs to another domain is reported as not found.
    """

    def __init__(
        self,
        application_repository: IApplicationRepository,
        user_repository: IUserRepository,
        secret_bytes: int = 32,
        probe: ApplicationServiceProbe | None = None,
    ):
        self._application_repository = application_repository
        self._user_repository = user_repository
        self._secret_bytes = secret_bytes
        self._probe = probe or DefaultApplicationServiceProbe()

    async def register_application(
        self,
        domain_id: DomainId,
        user_id: UserId,
        name: str,
        redirect_uri: str = "",
        website: str = "",
        logo_image: str = "",
        description: str = "",
        token_expire_seconds: int = DEFAULT_TOKEN_EXPIRE_SECONDS,
    ) -> Application:
        """Register a client application with freshly generated credentials.

        Raises:
            NotFoundError: If the owner does not exist in the domain
            ConflictError: If the owner already has an application with that name
            ValueError: If the name is empty or the token lifetime invalid
        """
        await self._require_owner(domain_id, user_id)

        application = Application.register(
            user_id=user_id,
            name=name,
            redirect_uri=redirect_uri,
            website=website,
            logo_image=logo_image,
            description=description,
            token_expire_seconds=token_expire_seconds,
            secret_bytes=self._secret_bytes,
        )

        existing = await lookup(
            self._application_repository.get_by_name(user_id, application.name)
        )
        if existing.is_found:
            self._probe.duplicate_application_name(
                user_id=user_id.value, name=application.name
            )
            raise ConflictError(f"application {application.name} already exists")
        existing.raise_for_failure()

        await self._application_repository.create(application)
        self._probe.application_registered(
            application_id=application.id.value,
            user_id=user_id.value,
            name=application.name,
            client_id=application.client_id,
        )
        return application

    async def get_application(
        self, domain_id: DomainId, application_id: ApplicationId
    ) -> Application:
        """Return an application of the domain.

        Raises:
            NotFoundError: If the application does not exist in the domain
        """
        application = await self._application_repository.get_by_id(application_id)
        if application is not None:
            owner = await self._user_repository.get_by_id(application.user_id)
            if owner is not None and owner.domain_id == domain_id:
                return application

        self._probe.application_not_found(application_id=application_id.value)
        raise NotFoundError(f"application {application_id} not found")

    async def list_user_applications(
        self, domain_id: DomainId, user_id: UserId
    ) -> list[Application]:
        await self._require_owner(domain_id, user_id)
        applications = await self._application_repository.list_by_user(user_id)
        self._probe.applications_listed(
            user_id=user_id.value, count=len(applications)
        )
        return applications

    async def delete_application(
        self, domain_id: DomainId, application_id: ApplicationId
    ) -> None:
        """Delete an application of the domain.

        Raises:
            NotFoundError: If the application does not exist in the domain
        """
        await self.get_application(domain_id, application_id)

        if not await self._application_repository.delete(application_id):
            self._probe.application_not_found(application_id=application_id.value)
            raise NotFoundError(f"application {application_id} not found")

        self._probe.application_deleted(application_id=application_id.value)

    async def _require_owner(self, domain_id: DomainId, user_id: UserId) -> None:
        owner = await self._user_repository.get_by_id(user_id)
        if owner is None or owner.domain_id != domain_id:
            raise NotFoundError(f"user {user_id} not found")
