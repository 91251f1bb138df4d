"""Infrastructure adapters for the identity bounded context."""

from identity.infrastructure.application_repository import ApplicationRepository
from identity.infrastructure.department_repository import DepartmentRepository
from identity.infrastructure.domain_repository import DomainRepository
from identity.infrastructure.project_repository import ProjectRepository
from identity.infrastructure.role_repository import RoleRepository
from identity.infrastructure.user_repository import UserRepository

__all__ = [
    "ApplicationRepository",
    "DepartmentRepository",
    "DomainRepository",
    "ProjectRepository",
    "RoleRepository",
    "UserRepository",
]
