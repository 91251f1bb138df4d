"""Assembly of user aggregate views from independently stored records."""

from __future__ import annotations

from identity.domain.aggregates import Department, Domain, User
from identity.domain.value_objects import DepartmentId, DomainId
from identity.ports.exceptions import InconsistentAggregateError
from identity.ports.repositories import (
    IDepartmentRepository,
    IDomainRepository,
    IProjectRepository,
    IRoleRepository,
)


class UserAssembler:
    """Attaches referenced records to users.

    A stored reference that resolves to nothing is a consistency failure:
    the assembler raises InconsistentAggregateError instead of returning a
    partially populated aggregate. Store errors propagate unchanged.
    """

    def __init__(
        self,
        domain_repository: IDomainRepository,
        department_repository: IDepartmentRepository,
        role_repository: IRoleRepository,
        project_repository: IProjectRepository,
    ):
        self._domain_repository = domain_repository
        self._department_repository = department_repository
        self._role_repository = role_repository
        self._project_repository = project_repository

    async def resolve_domain(self, domain_id: DomainId) -> Domain:
        domain = await self._domain_repository.get_by_id(domain_id)
        if domain is None:
            raise InconsistentAggregateError(f"domain {domain_id} not found")
        return domain

    async def resolve_department(self, department_id: DepartmentId | None) -> Department:
        if department_id is None:
            raise InconsistentAggregateError("user has no department")
        department = await self._department_repository.get_by_id(department_id)
        if department is None:
            raise InconsistentAggregateError(f"department {department_id} not found")
        return department

    async def hydrate(self, user: User, include_projects: bool = False) -> User:
        """Attach domain, department and roles to a user.

        Args:
            user: User as returned by the user store
            include_projects: Also attach project memberships and the
                default project

        Returns:
            The same user instance, populated in place
        """
        user.domain = await self.resolve_domain(user.domain_id)
        user.department = await self.resolve_department(user.department_id)
        user.attach_roles(
            await self._role_repository.list_user_roles(user.domain_id, user.id)
        )

        if include_projects:
            user.projects = await self._project_repository.list_user_projects(
                user.domain_id, user.id
            )
            if user.default_project_id is not None:
                default_project = await self._project_repository.get_by_id(
                    user.default_project_id
                )
                if default_project is None:
                    raise InconsistentAggregateError(
                        f"default project {user.default_project_id} not found"
                    )
                user.default_project = default_project

        return user

    async def hydrate_all(self, users: list[User]) -> list[User]:
        """Hydrate a list of users; the first failure aborts the whole call."""
        # Sequential: the stores share one session per request.
        for user in users:
            await self.hydrate(user)
        return users
