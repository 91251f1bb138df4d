"""Repository protocols (ports) for the identity bounded context.

One store per entity. Conventions shared by every store:

- ``get_*`` returns the entity, or None when it does not exist
- ``list_*`` returns a (possibly empty) list
- ``create`` raises ConflictError when a uniqueness rule is violated
- ``delete`` returns True when a record was removed
- every call is its own atomic unit of work; nothing spans calls
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from identity.domain.aggregates import (
    Application,
    Department,
    Domain,
    Project,
    Role,
    User,
)
from identity.domain.value_objects import (
    ApplicationId,
    DepartmentId,
    DomainId,
    ProjectId,
    RoleId,
    UserId,
)


@runtime_checkable
class IDomainRepository(Protocol):
    """Repository for Domain (tenant) records."""

    async def create(self, domain: Domain) -> None:
        """Persist a new domain.

        Raises:
            ConflictError: If the domain name is taken
        """
        ...

    async def get_by_id(self, domain_id: DomainId) -> Domain | None:
        """Retrieve a domain by ID."""
        ...

    async def get_by_name(self, name: str) -> Domain | None:
        """Retrieve a domain by its unique name."""
        ...

    async def list_all(self) -> list[Domain]:
        """List all domains ordered by creation time."""
        ...

    async def delete(self, domain_id: DomainId) -> bool:
        """Delete a domain with its departments and projects.

        Returns:
            True if deleted, False if not found
        """
        ...


@runtime_checkable
class IDepartmentRepository(Protocol):
    """Repository for Department records and their declared project/role sets."""

    async def create(self, department: Department) -> None:
        """Persist a new department.

        Raises:
            ConflictError: If the name is taken within the domain
        """
        ...

    async def get_by_id(self, department_id: DepartmentId) -> Department | None:
        """Retrieve a department by ID."""
        ...

    async def get_by_name(self, domain_id: DomainId, name: str) -> Department | None:
        """Retrieve a department by name within a domain."""
        ...

    async def list_by_domain(self, domain_id: DomainId) -> list[Department]:
        """List the departments of a domain."""
        ...

    async def delete(self, domain_id: DomainId, department_id: DepartmentId) -> bool:
        """Delete a department of a domain.

        Returns:
            True if deleted, False if not found in that domain
        """
        ...

    async def add_projects(
        self, department_id: DepartmentId, project_ids: list[ProjectId]
    ) -> None:
        """Declare projects that new members of the department join.

        Already declared projects are left untouched.
        """
        ...

    async def add_roles(
        self, department_id: DepartmentId, role_ids: list[RoleId]
    ) -> None:
        """Declare roles that new members of the department are granted.

        Already declared roles are left untouched.
        """
        ...


@runtime_checkable
class IProjectRepository(Protocol):
    """Repository for Project records."""

    async def create(self, project: Project) -> None:
        """Persist a new project.

        Raises:
            ConflictError: If the name is taken within the domain
        """
        ...

    async def get_by_id(self, project_id: ProjectId) -> Project | None:
        """Retrieve a project by ID."""
        ...

    async def get_by_name(self, domain_id: DomainId, name: str) -> Project | None:
        """Retrieve a project by name within a domain."""
        ...

    async def list_by_domain(self, domain_id: DomainId) -> list[Project]:
        """List the projects of a domain."""
        ...

    async def delete(self, domain_id: DomainId, project_id: ProjectId) -> bool:
        """Delete a project and its memberships.

        Users whose default project it was fall back to no default project.

        Returns:
            True if deleted, False if not found in that domain
        """
        ...

    async def list_department_projects(
        self, department_id: DepartmentId
    ) -> list[Project]:
        """List the projects declared by a department."""
        ...

    async def list_user_projects(
        self, domain_id: DomainId, user_id: UserId
    ) -> list[Project]:
        """List the projects a user belongs to."""
        ...


@runtime_checkable
class IRoleRepository(Protocol):
    """Repository for Role records."""

    async def create(self, role: Role) -> None:
        """Persist a new role.

        Raises:
            ConflictError: If the role name is taken
        """
        ...

    async def get_by_id(self, role_id: RoleId) -> Role | None:
        """Retrieve a role by ID."""
        ...

    async def get_by_name(self, name: str) -> Role | None:
        """Retrieve a role by its unique name."""
        ...

    async def list_all(self) -> list[Role]:
        """List all roles ordered by name."""
        ...

    async def delete(self, role_id: RoleId) -> bool:
        """Delete a role with its bindings and department declarations.

        Returns:
            True if deleted, False if not found
        """
        ...

    async def list_department_roles(self, department_id: DepartmentId) -> list[Role]:
        """List the roles declared by a department."""
        ...

    async def list_user_roles(self, domain_id: DomainId, user_id: UserId) -> list[Role]:
        """List the roles bound to a user, in binding order."""
        ...

    async def list_role_user_ids(self, role_id: RoleId) -> list[UserId]:
        """List the IDs of the users holding a role."""
        ...


@runtime_checkable
class IUserRepository(Protocol):
    """Repository for User records and their role/project relationships.

    Returned users carry references only; the application layer attaches
    the referenced records.
    """

    async def create(self, user: User) -> None:
        """Persist a new user.

        Raises:
            ConflictError: If the account is taken within the domain
        """
        ...

    async def get_by_id(self, user_id: UserId) -> User | None:
        """Retrieve a user by ID."""
        ...

    async def get_by_account(self, domain_id: DomainId, account: str) -> User | None:
        """Retrieve a user by account within a domain."""
        ...

    async def list_by_domain(self, domain_id: DomainId) -> list[User]:
        """List the users of a domain."""
        ...

    async def list_project_users(self, project_id: ProjectId) -> list[User]:
        """List the users that belong to a project."""
        ...

    async def count_by_department(self, department_id: DepartmentId) -> int:
        """Count the members of a department."""
        ...

    async def count_by_domain(self, domain_id: DomainId) -> int:
        """Count the users of a domain."""
        ...

    async def delete(self, domain_id: DomainId, user_id: UserId) -> bool:
        """Delete a user with its role bindings and memberships.

        Returns:
            True if deleted, False if not found in that domain
        """
        ...

    async def bind_role(self, domain_id: DomainId, user_id: UserId, role_id: RoleId) -> None:
        """Bind a role to a user. Binding a held role is a no-op."""
        ...

    async def unbind_role(
        self, domain_id: DomainId, user_id: UserId, role_id: RoleId
    ) -> None:
        """Unbind a role from a user. Unbinding a role not held is a no-op."""
        ...

    async def add_projects_to_user(
        self, domain_id: DomainId, user_id: UserId, project_ids: list[ProjectId]
    ) -> None:
        """Add a user to several projects at once."""
        ...

    async def add_users_to_project(
        self, project_id: ProjectId, user_ids: list[UserId]
    ) -> None:
        """Add several users to a project at once."""
        ...

    async def remove_users_from_project(
        self, project_id: ProjectId, user_ids: list[UserId]
    ) -> None:
        """Remove several users from a project at once."""
        ...

    async def set_default_project(self, user_id: UserId, project_id: ProjectId) -> None:
        """Set the user's default project."""
        ...


@runtime_checkable
class IApplicationRepository(Protocol):
    """Repository for client Application records."""

    async def create(self, application: Application) -> None:
        """Persist a new application.

        Raises:
            ConflictError: If the owner already has an application with that name
        """
        ...

    async def get_by_id(self, application_id: ApplicationId) -> Application | None:
        """Retrieve an application by ID."""
        ...

    async def get_by_name(self, user_id: UserId, name: str) -> Application | None:
        """Retrieve an application by name for its owner."""
        ...

    async def list_by_user(self, user_id: UserId) -> list[Application]:
        """List a user's applications, newest first."""
        ...

    async def delete(self, application_id: ApplicationId) -> bool:
        """Delete an application.

        Returns:
            True if deleted, False if not found
        """
        ...
