"""Application-level observability for the identity context.

Domain probes for application service operations, following the Domain
Oriented Observability pattern.
"""

from identity.application.observability.aggregate_cache_probe import (
    AggregateCacheProbe,
    DefaultAggregateCacheProbe,
)
from identity.application.observability.application_service_probe import (
    ApplicationServiceProbe,
    DefaultApplicationServiceProbe,
)
from identity.application.observability.department_service_probe import (
    DefaultDepartmentServiceProbe,
    DepartmentServiceProbe,
)
from identity.application.observability.domain_service_probe import (
    DefaultDomainServiceProbe,
    DomainServiceProbe,
)
from identity.application.observability.project_service_probe import (
    DefaultProjectServiceProbe,
    ProjectServiceProbe,
)
from identity.application.observability.role_service_probe import (
    DefaultRoleServiceProbe,
    RoleServiceProbe,
)
from identity.application.observability.user_service_probe import (
    DefaultUserServiceProbe,
    UserServiceProbe,
)

__all__ = [
    "AggregateCacheProbe",
    "DefaultAggregateCacheProbe",
    "ApplicationServiceProbe",
    "DefaultApplicationServiceProbe",
    "DepartmentServiceProbe",
    "DefaultDepartmentServiceProbe",
    "DomainServiceProbe",
    "DefaultDomainServiceProbe",
    "ProjectServiceProbe",
    "DefaultProjectServiceProbe",
    "RoleServiceProbe",
    "DefaultRoleServiceProbe",
    "UserServiceProbe",
    "DefaultUserServiceProbe",
]
