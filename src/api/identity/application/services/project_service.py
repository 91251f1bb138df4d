"""Project application service for the identity bounded context.

Handles the project catalogue of a domain and project membership. User
aggregates embed their projects, so every membership change and every
project deletion evicts the cached aggregates of the affected users.
"""

from __future__ import annotations

from identity.application.observability import (
    DefaultProjectServiceProbe,
    ProjectServiceProbe,
)
from identity.application.services.aggregate_cache import AggregateCache
from identity.application.services.user_assembler import UserAssembler
from identity.application.value_objects import lookup
from identity.domain.aggregates import Project, User
from identity.domain.value_objects import DomainId, ProjectId, UserId
from identity.ports.exceptions import BadRequestError, ConflictError, NotFoundError
from identity.ports.repositories import (
    IDepartmentRepository,
    IDomainRepository,
    IProjectRepository,
    IRoleRepository,
    IUserRepository,
)


class ProjectService:
    """Application service for projects and their members."""

    def __init__(
        self,
        project_repository: IProjectRepository,
        user_repository: IUserRepository,
        domain_repository: IDomainRepository,
        department_repository: IDepartmentRepository,
        role_repository: IRoleRepository,
        aggregate_cache: AggregateCache,
        probe: ProjectServiceProbe | None = None,
    ):
        """Initialize ProjectService with dependencies.

        Args:
            project_repository: Store for projects
            user_repository: Store for users and memberships
            domain_repository: Store for domains
            department_repository: Store for departments (member hydration)
            role_repository: Store for roles (member hydration)
            aggregate_cache: Cache for project records and user aggregates
            probe: Optional domain probe for observability
        """
        self._project_repository = project_repository
        self._user_repository = user_repository
        self._domain_repository = domain_repository
        self._cache = aggregate_cache
        self._assembler = UserAssembler(
            domain_repository=domain_repository,
            department_repository=department_repository,
            role_repository=role_repository,
            project_repository=project_repository,
        )
        self._probe = probe or DefaultProjectServiceProbe()

    async def create_project(
        self, domain_id: DomainId, name: str, description: str = ""
    ) -> Project:
        """Create a project in a domain.

        Raises:
            BadRequestError: If the domain does not exist
            ConflictError: If the name is taken within the domain
            ValueError: If the name is empty
        """
        domain = await self._domain_repository.get_by_id(domain_id)
        if domain is None:
            raise BadRequestError(f"domain {domain_id} not exist")

        project = Project.create(
            domain_id=domain_id, name=name, description=description
        )

        existing = await lookup(
            self._project_repository.get_by_name(domain_id, project.name)
        )
        if existing.is_found:
            self._probe.duplicate_project_name(
                domain_id=domain_id.value, name=project.name
            )
            raise ConflictError(f"project {project.name} already exists")
        existing.raise_for_failure()

        await self._project_repository.create(project)
        self._probe.project_created(
            project_id=project.id.value,
            domain_id=domain_id.value,
            name=project.name,
        )
        return project

    async def get_project(self, domain_id: DomainId, project_id: ProjectId) -> Project:
        """Return a project of the domain, served from the cache when possible.

        Raises:
            NotFoundError: If the project does not exist in the domain
        """
        project = await self._cache.get_project(project_id)
        from_cache = project is not None

        if project is None:
            project = await self._project_repository.get_by_id(project_id)
            if project is not None:
                await self._cache.put_project(project)

        if project is None or project.domain_id != domain_id:
            self._probe.project_not_found(project_id=project_id.value)
            raise NotFoundError(f"project {project_id} not found")

        self._probe.project_retrieved(
            project_id=project_id.value, from_cache=from_cache
        )
        return project

    async def list_projects(self, domain_id: DomainId) -> list[Project]:
        projects = await self._project_repository.list_by_domain(domain_id)
        self._probe.projects_listed(domain_id=domain_id.value, count=len(projects))
        return projects

    async def delete_project(self, domain_id: DomainId, project_id: ProjectId) -> None:
        """Delete a project, then evict it and its former members.

        Raises:
            NotFoundError: If no project was deleted
        """
        members = await self._user_repository.list_project_users(project_id)

        deleted = await self._project_repository.delete(domain_id, project_id)
        if not deleted:
            self._probe.project_not_found(project_id=project_id.value)
            raise NotFoundError(f"project {project_id} not found")

        await self._cache.evict_project(project_id)
        await self._cache.evict_users([member.id for member in members])
        self._probe.project_deleted(
            project_id=project_id.value, evicted_users=len(members)
        )

    async def list_project_users(self, project_id: ProjectId) -> list[User]:
        """List project members with domain, department and roles attached.

        The cache is not consulted; any hydration failure fails the call.
        """
        users = await self._user_repository.list_project_users(project_id)
        await self._assembler.hydrate_all(users)
        return users

    async def add_users_to_project(
        self,
        project_id: ProjectId,
        user_ids: list[UserId],
        domain_id: DomainId | None = None,
    ) -> None:
        """Add users to a project in one store call.

        Args:
            project_id: Project to join
            user_ids: Users to add; must not be empty
            domain_id: When given, the project must belong to this domain

        Raises:
            BadRequestError: If no user ids are given
            NotFoundError: If the project does not exist
        """
        await self._prepare_membership_change(project_id, user_ids, domain_id)
        await self._user_repository.add_users_to_project(project_id, user_ids)
        self._probe.users_added_to_project(
            project_id=project_id.value, count=len(user_ids)
        )

    async def remove_users_from_project(
        self,
        project_id: ProjectId,
        user_ids: list[UserId],
        domain_id: DomainId | None = None,
    ) -> None:
        """Remove users from a project in one store call.

        Raises:
            BadRequestError: If no user ids are given
            NotFoundError: If the project does not exist
        """
        await self._prepare_membership_change(project_id, user_ids, domain_id)
        await self._user_repository.remove_users_from_project(project_id, user_ids)
        self._probe.users_removed_from_project(
            project_id=project_id.value, count=len(user_ids)
        )

    async def _prepare_membership_change(
        self,
        project_id: ProjectId,
        user_ids: list[UserId],
        domain_id: DomainId | None,
    ) -> None:
        if not user_ids:
            raise BadRequestError("user ids are required")

        project = await self._project_repository.get_by_id(project_id)
        if project is None or (
            domain_id is not None and project.domain_id != domain_id
        ):
            self._probe.project_not_found(project_id=project_id.value)
            raise NotFoundError(f"project {project_id} not found")

        await self._cache.evict_users(user_ids)
