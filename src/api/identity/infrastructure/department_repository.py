"""PostgreSQL implementation of IDepartmentRepository."""

from __future__ import annotations

from sqlalchemy import delete, select
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from identity.domain.aggregates import Department
from identity.domain.value_objects import DepartmentId, DomainId, ProjectId, RoleId
from identity.infrastructure.models import (
    DepartmentModel,
    DepartmentProjectModel,
    DepartmentRoleModel,
)
from identity.infrastructure.observability import (
    DefaultRepositoryProbe,
    RepositoryProbe,
)
from identity.ports.exceptions import ConflictError
from identity.ports.repositories import IDepartmentRepository


def _to_department(model: DepartmentModel) -> Department:
    return Department(
        id=DepartmentId(value=model.id),
        domain_id=DomainId(value=model.domain_id),
        name=model.name,
        description=model.description,
        created_at=model.created_at,
    )


class DepartmentRepository(IDepartmentRepository):
    """Repository managing PostgreSQL storage for Department records.

    Also owns the department_projects and department_roles declarations.
    Declaring an already declared record is a no-op.
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

    async def create(self, department: Department) -> None:
        """Insert a department.

        Raises:
            ConflictError: If the name is taken within the domain
        """
        self._session.add(
            DepartmentModel(
                id=department.id.value,
                domain_id=department.domain_id.value,
                name=department.name,
                description=department.description,
                created_at=department.created_at,
            )
        )
        try:
            await self._session.commit()
        except IntegrityError as e:
            await self._session.rollback()
            if "uq_departments_domain_id_name" in str(e):
                self._probe.duplicate_record(kind="department", key=department.name)
                raise ConflictError(
                    f"department {department.name} already exists"
                ) from e
            raise

        self._probe.record_created(kind="department", record_id=department.id.value)

    async def get_by_id(self, department_id: DepartmentId) -> Department | None:
        stmt = select(DepartmentModel).where(DepartmentModel.id == department_id.value)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return _to_department(model) if model is not None else None

    async def get_by_name(self, domain_id: DomainId, name: str) -> Department | None:
        stmt = select(DepartmentModel).where(
            DepartmentModel.domain_id == domain_id.value,
            DepartmentModel.name == name,
        )
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return _to_department(model) if model is not None else None

    async def list_by_domain(self, domain_id: DomainId) -> list[Department]:
        stmt = (
            select(DepartmentModel)
            .where(DepartmentModel.domain_id == domain_id.value)
            .order_by(DepartmentModel.name)
        )
        result = await self._session.execute(stmt)
        return [_to_department(model) for model in result.scalars().all()]

    async def delete(self, domain_id: DomainId, department_id: DepartmentId) -> bool:
        stmt = delete(DepartmentModel).where(
            DepartmentModel.id == department_id.value,
            DepartmentModel.domain_id == domain_id.value,
        )
        result = await self._session.execute(stmt)
        await self._session.commit()

        if result.rowcount == 0:
            return False

        self._probe.record_deleted(kind="department", record_id=department_id.value)
        return True

    async def add_projects(
        self, department_id: DepartmentId, project_ids: list[ProjectId]
    ) -> None:
        if not project_ids:
            return

        stmt = (
            insert(DepartmentProjectModel)
            .values(
                [
                    {"department_id": department_id.value, "project_id": pid.value}
                    for pid in project_ids
                ]
            )
            .on_conflict_do_nothing(index_elements=["department_id", "project_id"])
        )
        await self._session.execute(stmt)
        await self._session.commit()
        self._probe.relationship_changed(
            relation="department_projects",
            owner_id=department_id.value,
            count=len(project_ids),
            action="added",
        )

    async def add_roles(
        self, department_id: DepartmentId, role_ids: list[RoleId]
    ) -> None:
        if not role_ids:
            return

        stmt = (
            insert(DepartmentRoleModel)
            .values(
                [
                    {"department_id": department_id.value, "role_id": rid.value}
                    for rid in role_ids
                ]
            )
            .on_conflict_do_nothing(index_elements=["department_id", "role_id"])
        )
        await self._session.execute(stmt)
        await self._session.commit()
        self._probe.relationship_changed(
            relation="department_roles",
            owner_id=department_id.value,
            count=len(role_ids),
            action="added",
        )
