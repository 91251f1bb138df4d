"""Department application service for the identity bounded context.

Departments declare the projects and roles their future members inherit.
Declarations only affect users created afterwards, so no cached aggregate
changes when they are made.
"""

from __future__ import annotations

from identity.application.observability import (
    DefaultDepartmentServiceProbe,
    DepartmentServiceProbe,
)
from identity.application.value_objects import lookup
from identity.domain.aggregates import Department
from identity.domain.aggregates.department import DEFAULT_DEPARTMENT_NAME
from identity.domain.value_objects import DepartmentId, DomainId, ProjectId, RoleId
from identity.ports.exceptions import BadRequestError, ConflictError, NotFoundError
from identity.ports.repositories import (
    IDepartmentRepository,
    IDomainRepository,
    IProjectRepository,
    IRoleRepository,
    IUserRepository,
)


class DepartmentService:
    """Application service for departments and their declared sets."""

    def __init__(
        self,
        department_repository: IDepartmentRepository,
        domain_repository: IDomainRepository,
        project_repository: IProjectRepository,
        role_repository: IRoleRepository,
        user_repository: IUserRepository,
        default_department_name: str = DEFAULT_DEPARTMENT_NAME,
        probe: DepartmentServiceProbe | None = None,
    ):
        """Initialize DepartmentService with dependencies.

        Args:
            department_repository: Store for departments
            domain_repository: Store for domains
            project_repository: Store for projects (declaration checks)
            role_repository: Store for roles (declaration checks)
            user_repository: Store for users (member counts)
            default_department_name: Name of each domain's default department
            probe: Optional domain probe for observability
        """
        self._department_repository = department_repository
        self._domain_repository = domain_repository
        self._project_repository = project_repository
        self._role_repository = role_repository
        self._user_repository = user_repository
        self._default_department_name = default_department_name
        self._probe = probe or DefaultDepartmentServiceProbe()

    async def create_department(
        self, domain_id: DomainId, name: str, description: str = ""
    ) -> Department:
        """Create a department in a domain.

        Raises:
            BadRequestError: If the domain does not exist
            ConflictError: If the name is taken within the domain
            ValueError: If the name is empty
        """
        domain = await self._domain_repository.get_by_id(domain_id)
        if domain is None:
            raise BadRequestError(f"domain {domain_id} not exist")

        department = Department.create(
            domain_id=domain_id, name=name, description=description
        )

        existing = await lookup(
            self._department_repository.get_by_name(domain_id, department.name)
        )
        if existing.is_found:
            self._probe.duplicate_department_name(
                domain_id=domain_id.value, name=department.name
            )
            raise ConflictError(f"department {department.name} already exists")
        existing.raise_for_failure()

        await self._department_repository.create(department)
        self._probe.department_created(
            department_id=department.id.value,
            domain_id=domain_id.value,
            name=department.name,
        )
        return department

    async def get_department(
        self, domain_id: DomainId, department_id: DepartmentId
    ) -> Department:
        """Return a department of the domain.

        Raises:
            NotFoundError: If the department does not exist in the domain
        """
        department = await self._department_repository.get_by_id(department_id)
        if department is None or department.domain_id != domain_id:
            self._probe.department_not_found(department_id=department_id.value)
            raise NotFoundError(f"department {department_id} not found")
        return department

    async def get_default_department(self, domain_id: DomainId) -> Department:
        """Return the domain's default department.

        Raises:
            BadRequestError: If the domain has no default department
        """
        department = await self._department_repository.get_by_name(
            domain_id, self._default_department_name
        )
        if department is None:
            raise BadRequestError(f"domain {domain_id} has no default department")
        return department

    async def list_departments(self, domain_id: DomainId) -> list[Department]:
        departments = await self._department_repository.list_by_domain(domain_id)
        self._probe.departments_listed(
            domain_id=domain_id.value, count=len(departments)
        )
        return departments

    async def delete_department(
        self, domain_id: DomainId, department_id: DepartmentId
    ) -> None:
        """Delete an empty, non-default department.

        Raises:
            NotFoundError: If the department does not exist in the domain
            BadRequestError: If it is the default department or has members
        """
        department = await self.get_department(domain_id, department_id)

        if department.is_default(self._default_department_name):
            self._probe.department_delete_refused(
                department_id=department_id.value, reason="default department"
            )
            raise BadRequestError("the default department cannot be deleted")

        members = await self._user_repository.count_by_department(department_id)
        if members > 0:
            self._probe.department_delete_refused(
                department_id=department_id.value, reason="department has members"
            )
            raise BadRequestError(
                f"department {department.name} still has {members} members"
            )

        if not await self._department_repository.delete(domain_id, department_id):
            self._probe.department_not_found(department_id=department_id.value)
            raise NotFoundError(f"department {department_id} not found")

        self._probe.department_deleted(
            domain_id=domain_id.value, department_id=department_id.value
        )

    async def add_projects(
        self,
        domain_id: DomainId,
        department_id: DepartmentId,
        project_ids: list[ProjectId],
    ) -> None:
        """Declare projects that future members of the department join.

        Raises:
            BadRequestError: If no ids are given or a project is not in the domain
            NotFoundError: If the department does not exist in the domain
        """
        if not project_ids:
            raise BadRequestError("project ids are required")
        await self.get_department(domain_id, department_id)

        for project_id in project_ids:
            project = await self._project_repository.get_by_id(project_id)
            if project is None or project.domain_id != domain_id:
                raise BadRequestError(f"project {project_id} not exist")

        await self._department_repository.add_projects(department_id, project_ids)
        self._probe.projects_declared(
            department_id=department_id.value, count=len(project_ids)
        )

    async def add_roles(
        self,
        domain_id: DomainId,
        department_id: DepartmentId,
        role_ids: list[RoleId],
    ) -> None:
        """Declare roles that future members of the department are granted.

        Raises:
            BadRequestError: If no ids are given or a role does not exist
            NotFoundError: If the department does not exist in the domain
        """
        if not role_ids:
            raise BadRequestError("role ids are required")
        await self.get_department(domain_id, department_id)

        for role_id in role_ids:
            if await self._role_repository.get_by_id(role_id) is None:
                raise BadRequestError(f"role {role_id} not exist")

        await self._department_repository.add_roles(department_id, role_ids)
        self._probe.roles_declared(
            department_id=department_id.value, count=len(role_ids)
        )
