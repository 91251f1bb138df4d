"""Domain aggregates for the identity context.

Aggregates are the core business objects containing state and business logic.
They enforce invariants and business rules without depending on infrastructure.
"""

from identity.domain.aggregates.application import Application
from identity.domain.aggregates.department import Department
from identity.domain.aggregates.domain import Domain
from identity.domain.aggregates.project import Project
from identity.domain.aggregates.role import Role
from identity.domain.aggregates.user import User

__all__ = [
    "Application",
    "Department",
    "Domain",
    "Project",
    "Role",
    "User",
]
