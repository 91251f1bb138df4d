"""Role catalogue service for the identity bounded context."""

from __future__ import annotations

from identity.application.observability import (
    DefaultRoleServiceProbe,
    RoleServiceProbe,
)
from identity.application.services.aggregate_cache import AggregateCache
from identity.application.value_objects import lookup
from identity.domain.aggregates import Role
from identity.domain.value_objects import RoleId
from identity.ports.exceptions import ConflictError, NotFoundError
from identity.ports.repositories import IRoleRepository


class RoleService:
    """Application service for the global role catalogue.

    Deleting a role removes it from every holder, so the cached aggregates
    of its holders are evicted.
    """

    def __init__(
        self,
        role_repository: IRoleRepository,
        aggregate_cache: AggregateCache,
        probe: RoleServiceProbe | None = None,
    ):
        self._role_repository = role_repository
        self._cache = aggregate_cache
        self._probe = probe or DefaultRoleServiceProbe()

    async def create_role(self, name: str, description: str = "") -> Role:
        """Create a role.

        Raises:
            ConflictError: If the role name is taken
            ValueError: If the name is empty
        """
        role = Role.create(name=name, description=description)

        existing = await lookup(self._role_repository.get_by_name(role.name))
        if existing.is_found:
            self._probe.duplicate_role_name(name=role.name)
            raise ConflictError(f"role {role.name} already exists")
        existing.raise_for_failure()

        await self._role_repository.create(role)
        self._probe.role_created(role_id=role.id.value, name=role.name)
        return role

    async def get_role(self, role_id: RoleId) -> Role:
        role = await self._role_repository.get_by_id(role_id)
        if role is None:
            self._probe.role_not_found(role_id=role_id.value)
            raise NotFoundError(f"role {role_id} not found")
        return role

    async def list_roles(self) -> list[Role]:
        roles = await self._role_repository.list_all()
        self._probe.roles_listed(count=len(roles))
        return roles

    async def delete_role(self, role_id: RoleId) -> None:
        """Delete a role, then evict the aggregates of its former holders.

        Raises:
            NotFoundError: If no role was deleted
        """
        holders = await self._role_repository.list_role_user_ids(role_id)

        deleted = await self._role_repository.delete(role_id)
        if not deleted:
            self._probe.role_not_found(role_id=role_id.value)
            raise NotFoundError(f"role {role_id} not found")

        await self._cache.evict_users(holders)
        self._probe.role_deleted(role_id=role_id.value, evicted_users=len(holders))
