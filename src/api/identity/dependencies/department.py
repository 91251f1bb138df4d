from typing import Annotated

from fastapi import Depends

from identity.application.observability import (
    DefaultDepartmentServiceProbe,
    DepartmentServiceProbe,
)
from identity.application.services import DepartmentService
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


def get_department_service_probe() -> DepartmentServiceProbe:
    """Get DepartmentServiceProbe instance."""
    return DefaultDepartmentServiceProbe()


def get_department_service(
    department_repository: Annotated[
        DepartmentRepository, Depends(get_department_repository)
    ],
    domain_repository: Annotated[DomainRepository, Depends(get_domain_repository)],
    project_repository: Annotated[ProjectRepository, Depends(get_project_repository)],
    role_repository: Annotated[RoleRepository, Depends(get_role_repository)],
    user_repository: Annotated[UserRepository, Depends(get_user_repository)],
    probe: Annotated[DepartmentServiceProbe, Depends(get_department_service_probe)],
) -> DepartmentService:
    """Get DepartmentService instance."""
    return DepartmentService(
        department_repository=department_repository,
        domain_repository=domain_repository,
        project_repository=project_repository,
        role_repository=role_repository,
        user_repository=user_repository,
        default_department_name=get_identity_settings().default_department_name,
        probe=probe,
    )
