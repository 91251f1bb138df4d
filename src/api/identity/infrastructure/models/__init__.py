"""SQLAlchemy ORM models for the identity bounded context.

These models map to database tables and are used by repository implementations.
Relationships between records are stored in association tables.
"""

from identity.infrastructure.models.application import ApplicationModel
from identity.infrastructure.models.department import (
    DepartmentModel,
    DepartmentProjectModel,
    DepartmentRoleModel,
)
from identity.infrastructure.models.domain import DomainModel
from identity.infrastructure.models.project import ProjectModel
from identity.infrastructure.models.role import RoleModel
from identity.infrastructure.models.user import (
    UserModel,
    UserProjectModel,
    UserRoleModel,
)

__all__ = [
    "ApplicationModel",
    "DepartmentModel",
    "DepartmentProjectModel",
    "DepartmentRoleModel",
    "DomainModel",
    "ProjectModel",
    "RoleModel",
    "UserModel",
    "UserProjectModel",
    "UserRoleModel",
]
