"""Application services for the identity bounded context."""

from identity.application.services.aggregate_cache import AggregateCache
from identity.application.services.application_service import ApplicationService
from identity.application.services.department_service import DepartmentService
from identity.application.services.domain_service import DomainService
from identity.application.services.project_service import ProjectService
from identity.application.services.role_service import RoleService
from identity.application.services.user_assembler import UserAssembler
from identity.application.services.user_service import UserService

__all__ = [
    "AggregateCache",
    "ApplicationService",
    "DepartmentService",
    "DomainService",
    "ProjectService",
    "RoleService",
    "UserAssembler",
    "UserService",
]
