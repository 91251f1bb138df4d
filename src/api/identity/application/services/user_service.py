"""User application service for the identity bounded context.

Owns the user aggregate: member creation with department cascades, cached
aggregate reads, listing, deletion and role binding. Cache entries are
evicted before every mutation that changes a cached aggregate.
"""

from __future__ import annotations

import dataclasses

from identity.application.observability import (
    DefaultUserServiceProbe,
    UserServiceProbe,
)
from identity.application.services.aggregate_cache import AggregateCache
from identity.application.services.user_assembler import UserAssembler
from identity.application.value_objects import lookup
from identity.domain.aggregates import Role, User
from identity.domain.aggregates.department import DEFAULT_DEPARTMENT_NAME
from identity.domain.value_objects import DomainId, ProjectId, UserId
from identity.ports.exceptions import (
    BadRequestError,
    ConflictError,
    NotFoundError,
)
from identity.ports.repositories import (
    IDepartmentRepository,
    IDomainRepository,
    IProjectRepository,
    IRoleRepository,
    IUserRepository,
)


class UserService:
    """Application service for member users.

    Store calls are issued one at a time: the repositories of a request
    share a single database session.
    """

    def __init__(
        self,
        user_repository: IUserRepository,
        domain_repository: IDomainRepository,
        department_repository: IDepartmentRepository,
        role_repository: IRoleRepository,
        project_repository: IProjectRepository,
        aggregate_cache: AggregateCache,
        default_department_name: str = DEFAULT_DEPARTMENT_NAME,
        probe: UserServiceProbe | None = None,
    ):
        """Initialize UserService with dependencies.

        Args:
            user_repository: Store for user records and relationships
            domain_repository: Store for domains
            department_repository: Store for departments
            role_repository: Store for roles
            project_repository: Store for projects
            aggregate_cache: Read-through cache for user aggregates
            default_department_name: Name of each domain's default department
            probe: Optional domain probe for observability
        """
        self._user_repository = user_repository
        self._department_repository = department_repository
        self._role_repository = role_repository
        self._project_repository = project_repository
        self._cache = aggregate_cache
        self._default_department_name = default_department_name
        self._assembler = UserAssembler(
            domain_repository=domain_repository,
            department_repository=department_repository,
            role_repository=role_repository,
            project_repository=project_repository,
        )
        self._probe = probe or DefaultUserServiceProbe()

    async def create_member_user(self, user: User) -> User:
        """Create a member user and apply its department's cascades.

        The steps run as a saga without compensation: once the user record is
        persisted, a failure in a later step propagates and leaves the
        earlier steps in place (a user with part of its department roles).

        Args:
            user: New user; without a department it joins the domain's
                default department

        Returns:
            The user with domain, department and roles attached. Projects
            granted by the cascade are persisted but not attached.

        Raises:
            ConflictError: If the account already exists in the domain
            BadRequestError: If the department cannot be resolved
            InconsistentAggregateError: If the persisted references dangle
        """
        existing = await lookup(
            self._user_repository.get_by_account(user.domain_id, user.account)
        )
        if existing.is_found:
            self._probe.duplicate_account(
                domain_id=user.domain_id.value, account=user.account
            )
            raise ConflictError(f"account {user.account} already exists")
        existing.raise_for_failure()

        if user.department_id is None:
            department = await self._department_repository.get_by_name(
                user.domain_id, self._default_department_name
            )
            if department is None:
                self._probe.default_department_missing(
                    domain_id=user.domain_id.value,
                    department_name=self._default_department_name,
                )
                raise BadRequestError(
                    f"domain {user.domain_id} has no default department"
                )
        else:
            department = await self._department_repository.get_by_id(
                user.department_id
            )
            if department is None or department.domain_id != user.domain_id:
                raise BadRequestError(f"department {user.department_id} not exist")

        # The caller's user is only changed once the record is persisted.
        await self._user_repository.create(
            dataclasses.replace(user, department_id=department.id)
        )
        user.assign_department(department)
        self._probe.user_created(
            user_id=user.id.value,
            domain_id=user.domain_id.value,
            account=user.account,
            department_id=department.id.value,
        )

        user.domain = await self._assembler.resolve_domain(user.domain_id)
        user.department = await self._assembler.resolve_department(
            user.department_id
        )

        projects = await self._project_repository.list_department_projects(
            department.id
        )
        if projects:
            await self._user_repository.add_projects_to_user(
                user.domain_id, user.id, [project.id for project in projects]
            )
            self._probe.project_cascade_applied(
                user_id=user.id.value,
                department_id=department.id.value,
                project_count=len(projects),
            )

        roles = await self._role_repository.list_department_roles(department.id)
        bound: list[Role] = []
        for role in roles:
            try:
                await self._user_repository.bind_role(user.domain_id, user.id, role.id)
            except Exception as e:
                self._probe.role_cascade_failed(
                    user_id=user.id.value,
                    role_id=role.id.value,
                    bound_count=len(bound),
                    error=str(e),
                )
                raise
            bound.append(role)
        user.attach_roles(bound)
        self._probe.role_cascade_applied(
            user_id=user.id.value,
            department_id=department.id.value,
            role_count=len(bound),
        )

        return user

    async def get_user(self, domain_id: DomainId, user_id: UserId) -> User:
        """Return the full user aggregate, served from the cache when possible.

        Cache hits are returned as stored, without checking them against the
        persisted record.

        Raises:
            BadRequestError: If the user does not exist in the domain
            InconsistentAggregateError: If a stored reference dangles
        """
        cached = await self._cache.get_user(user_id)
        if cached is not None:
            self._ensure_in_domain(cached, domain_id)
            self._probe.user_retrieved(user_id=user_id.value, from_cache=True)
            return cached

        user = await self._user_repository.get_by_id(user_id)
        if user is None:
            self._probe.user_not_found(user_id=user_id.value)
            raise BadRequestError(f"user {user_id} not found")
        self._ensure_in_domain(user, domain_id)

        await self._assembler.hydrate(user, include_projects=True)
        await self._cache.put_user(user)

        self._probe.user_retrieved(user_id=user_id.value, from_cache=False)
        return user

    async def list_member_users(self, domain_id: DomainId) -> list[User]:
        """List the users of a domain with domain, department and roles attached."""
        users = await self._user_repository.list_by_domain(domain_id)
        await self._assembler.hydrate_all(users)
        self._probe.users_listed(
            scope="domain", scope_id=domain_id.value, count=len(users)
        )
        return users

    async def delete_user(self, domain_id: DomainId, user_id: UserId) -> None:
        """Delete a user, then evict its cached aggregate.

        Raises:
            NotFoundError: If no user was deleted
        """
        deleted = await self._user_repository.delete(domain_id, user_id)
        if not deleted:
            self._probe.user_not_found(user_id=user_id.value)
            raise NotFoundError(f"user {user_id} not found")

        await self._cache.evict_user(user_id)
        self._probe.user_deleted(domain_id=domain_id.value, user_id=user_id.value)

    async def bind_role(
        self, domain_id: DomainId, user_id: UserId, role_name: str
    ) -> None:
        """Bind a role by name. Binding a role the user holds is a no-op.

        Raises:
            BadRequestError: If the role or the user does not exist in the
                domain
        """
        role = await self._require_role(role_name)
        await self._require_user(domain_id, user_id)
        await self._cache.evict_user(user_id)
        await self._user_repository.bind_role(domain_id, user_id, role.id)
        self._probe.role_bound(user_id=user_id.value, role_name=role_name)

    async def unbind_role(
        self, domain_id: DomainId, user_id: UserId, role_name: str
    ) -> None:
        """Unbind a role by name. Unbinding a role not held is a no-op.

        Raises:
            BadRequestError: If the role or the user does not exist in the
                domain
        """
        role = await self._require_role(role_name)
        await self._require_user(domain_id, user_id)
        await self._cache.evict_user(user_id)
        await self._user_repository.unbind_role(domain_id, user_id, role.id)
        self._probe.role_unbound(user_id=user_id.value, role_name=role_name)

    async def set_default_project(
        self, domain_id: DomainId, user_id: UserId, project_id: ProjectId
    ) -> None:
        """Set the project a user works in by default.

        Raises:
            BadRequestError: If the user or project does not exist in the
                domain, or the user is not a member of the project
        """
        user = await self._require_user(domain_id, user_id)

        project = await self._project_repository.get_by_id(project_id)
        if project is None or project.domain_id != domain_id:
            raise BadRequestError(f"project {project_id} not exist")

        user.projects = await self._project_repository.list_user_projects(
            domain_id, user_id
        )
        if not user.belongs_to_project(project_id):
            raise BadRequestError(
                f"user {user_id} is not a member of project {project_id}"
            )

        await self._cache.evict_user(user_id)
        await self._user_repository.set_default_project(user_id, project_id)
        self._probe.default_project_set(
            user_id=user_id.value, project_id=project_id.value
        )

    async def _require_role(self, role_name: str) -> Role:
        role = await self._role_repository.get_by_name(role_name)
        if role is None:
            self._probe.role_not_found(role_name=role_name)
            raise BadRequestError(f"role {role_name} not exist")
        return role

    async def _require_user(self, domain_id: DomainId, user_id: UserId) -> User:
        user = await self._user_repository.get_by_id(user_id)
        if user is None:
            self._probe.user_not_found(user_id=user_id.value)
            raise BadRequestError(f"user {user_id} not found")
        self._ensure_in_domain(user, domain_id)
        return user

    def _ensure_in_domain(self, user: User, domain_id: DomainId) -> None:
        # Users of other domains are reported exactly like missing users.
        if user.domain_id != domain_id:
            self._probe.user_not_found(user_id=user.id.value)
            raise BadRequestError(f"user {user.id} not found")
