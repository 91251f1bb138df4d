"""Ports (interfaces) for the identity bounded context.

Ports define the contracts for repositories without specifying
implementation details. This allows for dependency inversion and keeps the
application layer independent of infrastructure.
"""

from identity.ports.exceptions import (
    BadRequestError,
    ConflictError,
    IdentityError,
    InconsistentAggregateError,
    InternalServerError,
    NotFoundError,
)
from identity.ports.repositories import (
    IApplicationRepository,
    IDepartmentRepository,
    IDomainRepository,
    IProjectRepository,
    IRoleRepository,
    IUserRepository,
)

__all__ = [
    "BadRequestError",
    "ConflictError",
    "IdentityError",
    "InconsistentAggregateError",
    "InternalServerError",
    "NotFoundError",
    "IApplicationRepository",
    "IDepartmentRepository",
    "IDomainRepository",
    "IProjectRepository",
    "IRoleRepository",
    "IUserRepository",
]
