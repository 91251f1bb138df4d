from typing import Annotated

from fastapi import Depends

from identity.application.observability import (
    DefaultRoleServiceProbe,
    RoleServiceProbe,
)
from identity.application.services import AggregateCache, RoleService
from identity.dependencies.cache import get_aggregate_cache
from identity.dependencies.repositories import get_role_repository
from identity.infrastructure import RoleRepository


def get_role_service_probe() -> RoleServiceProbe:
    """Get RoleServiceProbe instance."""
    return DefaultRoleServiceProbe()


def get_role_service(
    role_repository: Annotated[RoleRepository, Depends(get_role_repository)],
    aggregate_cache: Annotated[AggregateCache, Depends(get_aggregate_cache)],
    probe: Annotated[RoleServiceProbe, Depends(get_role_service_probe)],
) -> RoleService:
    """Get RoleService instance."""
    return RoleService(
        role_repository=role_repository,
        aggregate_cache=aggregate_cache,
        probe=probe,
    )
