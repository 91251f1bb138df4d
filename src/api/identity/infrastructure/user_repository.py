"""PostgreSQL implementation of IUserRepository.

Stores user records plus the user_roles and user_projects associations.
Relationship writes are idempotent: re-adding an existing association is
a no-op, and removing a missing one changes nothing.
"""

from __future__ import annotations

from sqlalchemy import delete, func, literal, select, update
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from identity.domain.aggregates import User
from identity.domain.value_objects import (
    DepartmentId,
    DomainId,
    ProjectId,
    RoleId,
    UserId,
)
from identity.infrastructure.models import (
    ProjectModel,
    UserModel,
    UserProjectModel,
    UserRoleModel,
)
from identity.infrastructure.observability import (
    DefaultRepositoryProbe,
    RepositoryProbe,
)
from identity.ports.exceptions import ConflictError
from identity.ports.repositories import IUserRepository


def _to_user(model: UserModel) -> User:
    return User(
        id=UserId(value=model.id),
        domain_id=DomainId(value=model.domain_id),
        account=model.account,
        department_id=DepartmentId(value=model.department_id),
        default_project_id=(
            ProjectId(value=model.default_project_id)
            if model.default_project_id
            else None
        ),
        display_name=model.display_name,
        email=model.email,
        last_login_at=model.last_login_at,
        last_login_ip=model.last_login_ip,
        login_failed_times=model.login_failed_times,
        login_success_times=model.login_success_times,
        created_at=model.created_at,
    )


class UserRepository(IUserRepository):
    """Repository managing PostgreSQL storage for User records.

    Returned users carry references only; relationships are written with
    INSERT ... ON CONFLICT DO NOTHING so repeated grants are harmless.
    """

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

    async def create(self, user: User) -> None:
        """Insert a user.

        Raises:
            ConflictError: If the account is taken within the domain
            ValueError: If the user has no department
        """
        if user.department_id is None:
            raise ValueError("a user must reference a department")

        self._session.add(
            UserModel(
                id=user.id.value,
                domain_id=user.domain_id.value,
                account=user.account,
                department_id=user.department_id.value,
                default_project_id=(
                    user.default_project_id.value if user.default_project_id else None
                ),
                display_name=user.display_name,
                email=user.email,
                last_login_at=user.last_login_at,
                last_login_ip=user.last_login_ip,
                login_failed_times=user.login_failed_times,
                login_success_times=user.login_success_times,
                created_at=user.created_at,
            )
        )
        try:
            await self._session.commit()
        except IntegrityError as e:
            await self._session.rollback()
            if "uq_users_domain_id_account" in str(e):
                self._probe.duplicate_record(kind="user", key=user.account)
                raise ConflictError(f"account {user.account} already exists") from e
            raise

        self._probe.record_created(kind="user", record_id=user.id.value)

    async def get_by_id(self, user_id: UserId) -> User | None:
        stmt = select(UserModel).where(UserModel.id == user_id.value)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return _to_user(model) if model is not None else None

    async def get_by_account(self, domain_id: DomainId, account: str) -> User | None:
        stmt = select(UserModel).where(
            UserModel.domain_id == domain_id.value,
            UserModel.account == account,
        )
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return _to_user(model) if model is not None else None

    async def list_by_domain(self, domain_id: DomainId) -> list[User]:
        stmt = (
            select(UserModel)
            .where(UserModel.domain_id == domain_id.value)
            .order_by(UserModel.account)
        )
        result = await self._session.execute(stmt)
        return [_to_user(model) for model in result.scalars().all()]

    async def list_project_users(self, project_id: ProjectId) -> list[User]:
        stmt = (
            select(UserModel)
            .join(UserProjectModel, UserProjectModel.user_id == UserModel.id)
            .where(UserProjectModel.project_id == project_id.value)
            .order_by(UserModel.account)
        )
        result = await self._session.execute(stmt)
        return [_to_user(model) for model in result.scalars().all()]

    async def count_by_department(self, department_id: DepartmentId) -> int:
        stmt = (
            select(func.count())
            .select_from(UserModel)
            .where(UserModel.department_id == department_id.value)
        )
        result = await self._session.execute(stmt)
        return result.scalar_one()

    async def count_by_domain(self, domain_id: DomainId) -> int:
        stmt = (
            select(func.count())
            .select_from(UserModel)
            .where(UserModel.domain_id == domain_id.value)
        )
        result = await self._session.execute(stmt)
        return result.scalar_one()

    async def delete(self, domain_id: DomainId, user_id: UserId) -> bool:
        """Delete a user; bindings, memberships and applications go with it."""
        stmt = delete(UserModel).where(
            UserModel.id == user_id.value,
            UserModel.domain_id == domain_id.value,
        )
        result = await self._session.execute(stmt)
        await self._session.commit()

        if result.rowcount == 0:
            return False

        self._probe.record_deleted(kind="user", record_id=user_id.value)
        return True

    async def bind_role(
        self, domain_id: DomainId, user_id: UserId, role_id: RoleId
    ) -> None:
        # Selecting the user row scopes the grant to the domain.
        source = select(
            UserModel.id, literal(role_id.value), func.now()
        ).where(
            UserModel.id == user_id.value,
            UserModel.domain_id == domain_id.value,
        )
        stmt = (
            insert(UserRoleModel)
            .from_select(["user_id", "role_id", "bound_at"], source)
            .on_conflict_do_nothing(index_elements=["user_id", "role_id"])
        )
        await self._session.execute(stmt)
        await self._session.commit()
        self._probe.relationship_changed(
            relation="user_roles", owner_id=user_id.value, count=1, action="added"
        )

    async def unbind_role(
        self, domain_id: DomainId, user_id: UserId, role_id: RoleId
    ) -> None:
        domain_user = select(UserModel.id).where(
            UserModel.id == user_id.value,
            UserModel.domain_id == domain_id.value,
        )
        stmt = delete(UserRoleModel).where(
            UserRoleModel.user_id.in_(domain_user),
            UserRoleModel.role_id == role_id.value,
        )
        result = await self._session.execute(stmt)
        await self._session.commit()
        self._probe.relationship_changed(
            relation="user_roles",
            owner_id=user_id.value,
            count=result.rowcount,
            action="removed",
        )

    async def add_projects_to_user(
        self, domain_id: DomainId, user_id: UserId, project_ids: list[ProjectId]
    ) -> None:
        if not project_ids:
            return

        # Projects of other domains are skipped by the SELECT.
        source = select(
            literal(user_id.value), ProjectModel.id, func.now()
        ).where(
            ProjectModel.id.in_([pid.value for pid in project_ids]),
            ProjectModel.domain_id == domain_id.value,
        )
        stmt = (
            insert(UserProjectModel)
            .from_select(["user_id", "project_id", "joined_at"], source)
            .on_conflict_do_nothing(index_elements=["user_id", "project_id"])
        )
        await self._session.execute(stmt)
        await self._session.commit()
        self._probe.relationship_changed(
            relation="user_projects",
            owner_id=user_id.value,
            count=len(project_ids),
            action="added",
        )

    async def add_users_to_project(
        self, project_id: ProjectId, user_ids: list[UserId]
    ) -> None:
        if not user_ids:
            return

        # Users of other domains are skipped by the SELECT.
        project_domain = (
            select(ProjectModel.domain_id)
            .where(ProjectModel.id == project_id.value)
            .scalar_subquery()
        )
        source = select(
            UserModel.id, literal(project_id.value), func.now()
        ).where(
            UserModel.id.in_([uid.value for uid in user_ids]),
            UserModel.domain_id == project_domain,
        )
        stmt = (
            insert(UserProjectModel)
            .from_select(["user_id", "project_id", "joined_at"], source)
            .on_conflict_do_nothing(index_elements=["user_id", "project_id"])
        )
        await self._session.execute(stmt)
        await self._session.commit()
        self._probe.relationship_changed(
            relation="user_projects",
            owner_id=project_id.value,
            count=len(user_ids),
            action="added",
        )

    async def remove_users_from_project(
        self, project_id: ProjectId, user_ids: list[UserId]
    ) -> None:
        if not user_ids:
            return

        stmt = delete(UserProjectModel).where(
            UserProjectModel.project_id == project_id.value,
            UserProjectModel.user_id.in_([uid.value for uid in user_ids]),
        )
        result = await self._session.execute(stmt)
        await self._session.commit()
        self._probe.relationship_changed(
            relation="user_projects",
            owner_id=project_id.value,
            count=result.rowcount,
            action="removed",
        )

    async def set_default_project(self, user_id: UserId, project_id: ProjectId) -> None:
        stmt = (
            update(UserModel)
            .where(UserModel.id == user_id.value)
            .values(default_project_id=project_id.value)
        )
        await self._session.execute(stmt)
        await self._session.commit()
