from typing import Annotated

from fastapi import Depends

from identity.application.observability import (
    DefaultUserServiceProbe,
    UserServiceProbe,
)
from identity.application.services import AggregateCache, UserService
from identity.dependencies.cache import get_aggregate_cache
from identity.dependencies.repositories import (
    get_department_repository,
    get_domain_repository,
    get_project_repository,
    get_role_repository,
    get_user_repository,
)
from identity.infrastructure import (
    DepartmentRepository,
    DomainRepository,
    ProjectRepository,
    RoleRepository,
    UserRepository,
)
from infrastructure.settings import get_identity_settings


def get_user_service_probe() -> UserServiceProbe:
    """Get UserServiceProbe instance.

    Returns:
        DefaultUserServiceProbe instance for observability
    """
    return DefaultUserServiceProbe()


def get_user_service(
    user_repository: Annotated[UserRepository, Depends(get_user_repository)],
    domain_repository: Annotated[DomainRepository, Depends(get_domain_repository)],
    department_repository: Annotated[
        DepartmentRepository, Depends(get_department_repository)
    ],
    role_repository: Annotated[RoleRepository, Depends(get_role_repository)],
    project_repository: Annotated[ProjectRepository, Depends(get_project_repository)],
    aggregate_cache: Annotated[AggregateCache, Depends(get_aggregate_cache)],
    probe: Annotated[UserServiceProbe, Depends(get_user_service_probe)],
) -> UserService:
    """Get UserService instance.

    Returns:
        UserService wired to the request's repositories and the shared cache
    """
    return UserService(
        user_repository=user_repository,
        domain_repository=domain_repository,
        department_repository=department_repository,
        role_repository=role_repository,
        project_repository=project_repository,
        aggregate_cache=aggregate_cache,
        default_department_name=get_identity_settings().default_department_name,
        probe=probe,
    )
