from typing import Annotated

from fastapi import Depends

from identity.application.observability import (
    DefaultDomainServiceProbe,
    DomainServiceProbe,
)
from identity.application.services import DomainService
from identity.dependencies.repositories import (
    get_department_repository,
    get_domain_repository,
    get_user_repository,
)
from identity.infrastructure import (
    DepartmentRepository,
    DomainRepository,
    UserRepository,
)
from infrastructure.settings import get_identity_settings


def get_domain_service_probe() -> DomainServiceProbe:
    """Get DomainServiceProbe instance."""
    return DefaultDomainServiceProbe()


def get_domain_service(
    domain_repository: Annotated[DomainRepository, Depends(get_domain_repository)],
    department_repository: Annotated[
        DepartmentRepository, Depends(get_department_repository)
    ],
    user_repository: Annotated[UserRepository, Depends(get_user_repository)],
    probe: Annotated[DomainServiceProbe, Depends(get_domain_service_probe)],
) -> DomainService:
    """Get DomainService instance."""
    return DomainService(
        domain_repository=domain_repository,
        department_repository=department_repository,
        user_repository=user_repository,
        default_department_name=get_identity_settings().default_department_name,
        probe=probe,
    )
