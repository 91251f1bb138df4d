from typing import Annotated

from fastapi import Depends

from identity.application.observability import (
    DefaultProjectServiceProbe,
    ProjectServiceProbe,
)
from identity.application.services import AggregateCache, ProjectService
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


def get_project_service_probe() -> ProjectServiceProbe:
    """Get ProjectServiceProbe instance."""
    return DefaultProjectServiceProbe()


def get_project_service(
    project_repository: Annotated[ProjectRepository, Depends(get_project_repository)],
    user_repository: Annotated[UserRepository, Depends(get_user_repository)],
    domain_repository: Annotated[DomainRepository, Depends(get_domain_repository)],
    department_repository: Annotated[
        DepartmentRepository, Depends(get_department_repository)
    ],
    role_repository: Annotated[RoleRepository, Depends(get_role_repository)],
    aggregate_cache: Annotated[AggregateCache, Depends(get_aggregate_cache)],
    probe: Annotated[ProjectServiceProbe, Depends(get_project_service_probe)],
) -> ProjectService:
    """Get ProjectService instance."""
    return ProjectService(
        project_repository=project_repository,
        user_repository=user_repository,
        domain_repository=domain_repository,
        department_repository=department_repository,
        role_repository=role_repository,
        aggregate_cache=aggregate_cache,
        probe=probe,
    )
