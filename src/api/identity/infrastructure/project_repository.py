"""PostgreSQL implementation of IProjectRepository."""

from __future__ import annotations

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from identity.domain.aggregates import Project
from identity.domain.value_objects import DepartmentId, DomainId, ProjectId, UserId
from identity.infrastructure.models import (
    DepartmentProjectModel,
    ProjectModel,
    UserProjectModel,
)
from identity.infrastructure.observability import (
    DefaultRepositoryProbe,
    RepositoryProbe,
)
from identity.ports.exceptions import ConflictError
from identity.ports.repositories import IProjectRepository


def _to_project(model: ProjectModel) -> Project:
    return Project(
        id=ProjectId(value=model.id),
        domain_id=DomainId(value=model.domain_id),
        name=model.name,
        description=model.description,
        created_at=model.created_at,
    )


class ProjectRepository(IProjectRepository):
    """Repository managing PostgreSQL storage for Project records."""

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

    async def create(self, project: Project) -> None:
        """Insert a project.

        Raises:
            ConflictError: If the name is taken within the domain
        """
        self._session.add(
            ProjectModel(
                id=project.id.value,
                domain_id=project.domain_id.value,
                name=project.name,
                description=project.description,
                created_at=project.created_at,
            )
        )
        try:
            await self._session.commit()
        except IntegrityError as e:
            await self._session.rollback()
            if "uq_projects_domain_id_name" in str(e):
                self._probe.duplicate_record(kind="project", key=project.name)
                raise ConflictError(f"project {project.name} already exists") from e
            raise

        self._probe.record_created(kind="project", record_id=project.id.value)

    async def get_by_id(self, project_id: ProjectId) -> Project | None:
        stmt = select(ProjectModel).where(ProjectModel.id == project_id.value)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return _to_project(model) if model is not None else None

    async def get_by_name(self, domain_id: DomainId, name: str) -> Project | None:
        stmt = select(ProjectModel).where(
            ProjectModel.domain_id == domain_id.value,
            ProjectModel.name == name,
        )
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return _to_project(model) if model is not None else None

    async def list_by_domain(self, domain_id: DomainId) -> list[Project]:
        stmt = (
            select(ProjectModel)
            .where(ProjectModel.domain_id == domain_id.value)
            .order_by(ProjectModel.name)
        )
        result = await self._session.execute(stmt)
        return [_to_project(model) for model in result.scalars().all()]

    async def delete(self, domain_id: DomainId, project_id: ProjectId) -> bool:
        """Delete a project of a domain.

        Memberships and department declarations are removed by CASCADE;
        users' default_project_id is cleared by SET NULL.
        """
        stmt = delete(ProjectModel).where(
            ProjectModel.id == project_id.value,
            ProjectModel.domain_id == domain_id.value,
        )
        result = await self._session.execute(stmt)
        await self._session.commit()

        if result.rowcount == 0:
            return False

        self._probe.record_deleted(kind="project", record_id=project_id.value)
        return True

    async def list_department_projects(
        self, department_id: DepartmentId
    ) -> list[Project]:
        stmt = (
            select(ProjectModel)
            .join(
                DepartmentProjectModel,
                DepartmentProjectModel.project_id == ProjectModel.id,
            )
            .where(DepartmentProjectModel.department_id == department_id.value)
            .order_by(ProjectModel.name)
        )
        result = await self._session.execute(stmt)
        return [_to_project(model) for model in result.scalars().all()]

    async def list_user_projects(
        self, domain_id: DomainId, user_id: UserId
    ) -> list[Project]:
        stmt = (
            select(ProjectModel)
            .join(UserProjectModel, UserProjectModel.project_id == ProjectModel.id)
            .where(
                UserProjectModel.user_id == user_id.value,
                ProjectModel.domain_id == domain_id.value,
            )
            .order_by(ProjectModel.name)
        )
        result = await self._session.execute(stmt)
        return [_to_project(model) for model in result.scalars().all()]
