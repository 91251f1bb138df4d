"""User aggregate for the identity context."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime

from identity.domain.aggregates.department import Department
from identity.domain.aggregates.domain import Domain
from identity.domain.aggregates.project import Project
from identity.domain.aggregates.role import Role
from identity.domain.value_objects import DepartmentId, DomainId, ProjectId, UserId


@dataclass(eq=False)
class User:
    """User aggregate representing a member account of a domain.

    The persisted record only carries references (``domain_id``,
    ``department_id``, ``default_project_id``). The application layer
    assembles the aggregate view by attaching the referenced records to
    ``domain``, ``department``, ``default_project``, ``roles`` and
    ``projects``.

    Business rules:
    - Accounts are unique within a domain
    - A persisted user always references a department
    - Roles never contain the same role twice

    Login counters are maintained by the authentication flow and only
    carried here.
    """

    id: UserId
    domain_id: DomainId
    account: str
    department_id: DepartmentId | None = None
    default_project_id: ProjectId | None = None
    display_name: str = ""
    email: str = ""
    last_login_at: datetime | None = None
    last_login_ip: str | None = None
    login_failed_times: int = 0
    login_success_times: int = 0
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))

    # Aggregate view, attached by the application layer
    domain: Domain | None = None
    department: Department | None = None
    default_project: Project | None = None
    roles: list[Role] = field(default_factory=list)
    projects: list[Project] = field(default_factory=list)

    @classmethod
    def create(
        cls,
        account: str,
        domain_id: DomainId,
        department_id: DepartmentId | None = None,
        display_name: str = "",
        email: str = "",
    ) -> User:
        """Factory method for creating a new member user.

        Args:
            account: Login account, unique within the domain
            domain_id: Owning domain
            department_id: Department to join; None selects the domain's
                default department at creation time
            display_name: Human readable name
            email: Contact address

        Returns:
            A new, not yet persisted User

        Raises:
            ValueError: If the account is empty
        """
        account = account.strip()
        if not account:
            raise ValueError("User account cannot be empty")

        return cls(
            id=UserId.generate(),
            domain_id=domain_id,
            account=account,
            department_id=department_id,
            display_name=display_name,
            email=email,
        )

    def __str__(self) -> str:
        """Return string representation."""
        return f"User({self.account})"

    def __eq__(self, other: object) -> bool:
        """Users are equal if they have the same ID (identity-based equality)."""
        if not isinstance(other, User):
            return False
        return self.id == other.id

    def __hash__(self) -> int:
        """Hash based on ID for use in sets and dicts."""
        return hash(self.id)

    def assign_department(self, department: Department) -> None:
        """Join a department of the user's own domain.

        Raises:
            ValueError: If the department belongs to another domain
        """
        if department.domain_id != self.domain_id:
            raise ValueError(
                f"Department {department.id} does not belong to domain {self.domain_id}"
            )
        self.department_id = department.id
        self.department = department

    def attach_roles(self, roles: list[Role]) -> None:
        """Attach bound roles, keeping first-seen order and dropping duplicates."""
        seen: set[str] = set()
        unique: list[Role] = []
        for role in roles:
            if role.id.value in seen:
                continue
            seen.add(role.id.value)
            unique.append(role)
        self.roles = unique

    def belongs_to_project(self, project_id: ProjectId) -> bool:
        """Check membership against the attached projects."""
        return any(project.id == project_id for project in self.projects)

    @property
    def is_hydrated(self) -> bool:
        """True when domain and department records are attached."""
        return self.domain is not None and self.department is not None

    @property
    def role_names(self) -> list[str]:
        """Names of the attached roles, in binding order."""
        return [role.name for role in self.roles]
