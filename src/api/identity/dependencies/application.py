from typing import Annotated

from fastapi import Depends

from identity.application.observability import (
    ApplicationServiceProbe,
    DefaultApplicationServiceProbe,
)
from identity.application.services import ApplicationService
from identity.dependencies.repositories import (
    get_application_repository,
    get_user_repository,
)
from identity.infrastructure import ApplicationRepository, UserRepository
from infrastructure.settings import get_identity_settings


def get_application_service_probe() -> ApplicationServiceProbe:
    """Get ApplicationServiceProbe instance."""
    return DefaultApplicationServiceProbe()


def get_application_service(
    application_repository: Annotated[
        ApplicationRepository, Depends(get_application_repository)
    ],
    user_repository: Annotated[UserRepository, Depends(get_user_repository)],
    probe: Annotated[ApplicationServiceProbe, Depends(get_application_service_probe)],
) -> ApplicationService:
    """Get ApplicationService instance."""
    return ApplicationService(
        application_repository=application_repository,
        user_repository=user_repository,
        secret_bytes=get_identity_settings().client_secret_bytes,
        probe=probe,
    )
