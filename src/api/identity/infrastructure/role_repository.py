"""PostgreSQL implementation of IRoleRepository."""

from __future__ import annotations

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from identity.domain.aggregates import Role
from identity.domain.value_objects import DepartmentId, DomainId, RoleId, UserId
from identity.infrastructure.models import (
    DepartmentRoleModel,
    RoleModel,
    UserModel,
    UserRoleModel,
)
from identity.infrastructure.observability import (
    DefaultRepositoryProbe,
    RepositoryProbe,
)
from identity.ports.exceptions import ConflictError
from identity.ports.repositories import IRoleRepository


def _to_role(model: RoleModel) -> Role:
    return Role(
        id=RoleId(value=model.id),
        name=model.name,
        description=model.description,
        created_at=model.created_at,
    )


class RoleRepository(IRoleRepository):
    """Repository managing PostgreSQL storage for Role records."""

    def __init__(
        self, session: AsyncSession, probe: RepositoryProbe | None = None
    ) -> None:
        """Initialize repository with database session and probe.

        Args:
            session: AsyncSession from FastAPI dependency injection
            probe: Optional domain probe for observability
        """
        self._session = session
        self._probe = probe or DefaultRepositoryProbe()

    async def create(self, role: Role) -> None:
        """Insert a role.

        Raises:
            ConflictError: If the role name already exists
        """
        self._session.add(
            RoleModel(
                id=role.id.value,
                name=role.name,
                description=role.description,
                created_at=role.created_at,
            )
        )
        try:
            await self._session.commit()
        except IntegrityError as e:
            await self._session.rollback()
            if "uq_roles_name" in str(e):
                self._probe.duplicate_record(kind="role", key=role.name)
                raise ConflictError(f"role {role.name} already exists") from e
            raise

        self._probe.record_created(kind="role", record_id=role.id.value)

    async def get_by_id(self, role_id: RoleId) -> Role | None:
        stmt = select(RoleModel).where(RoleModel.id == role_id.value)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return _to_role(model) if model is not None else None

    async def get_by_name(self, name: str) -> Role | None:
        stmt = select(RoleModel).where(RoleModel.name == name)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return _to_role(model) if model is not None else None

    async def list_all(self) -> list[Role]:
        stmt = select(RoleModel).order_by(RoleModel.name)
        result = await self._session.execute(stmt)
        return [_to_role(model) for model in result.scalars().all()]

    async def delete(self, role_id: RoleId) -> bool:
        """Delete a role; bindings and declarations go with it (CASCADE)."""
        stmt = delete(RoleModel).where(RoleModel.id == role_id.value)
        result = await self._session.execute(stmt)
        await self._session.commit()

        if result.rowcount == 0:
            return False

        self._probe.record_deleted(kind="role", record_id=role_id.value)
        return True

    async def list_department_roles(self, department_id: DepartmentId) -> list[Role]:
        stmt = (
            select(RoleModel)
            .join(DepartmentRoleModel, DepartmentRoleModel.role_id == RoleModel.id)
            .where(DepartmentRoleModel.department_id == department_id.value)
            .order_by(RoleModel.name)
        )
        result = await self._session.execute(stmt)
        return [_to_role(model) for model in result.scalars().all()]

    async def list_user_roles(self, domain_id: DomainId, user_id: UserId) -> list[Role]:
        """List a user's roles in the order they were bound."""
        stmt = (
            select(RoleModel)
            .join(UserRoleModel, UserRoleModel.role_id == RoleModel.id)
            .join(UserModel, UserModel.id == UserRoleModel.user_id)
            .where(
                UserRoleModel.user_id == user_id.value,
                UserModel.domain_id == domain_id.value,
            )
            .order_by(UserRoleModel.bound_at, RoleModel.name)
        )
        result = await self._session.execute(stmt)
        return [_to_role(model) for model in result.scalars().all()]

    async def list_role_user_ids(self, role_id: RoleId) -> list[UserId]:
        stmt = select(UserRoleModel.user_id).where(
            UserRoleModel.role_id == role_id.value
        )
        result = await self._session.execute(stmt)
        return [UserId(value=user_id) for user_id in result.scalars().all()]
