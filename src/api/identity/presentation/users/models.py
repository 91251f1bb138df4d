"""Pydantic models for user API requests and responses."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

from identity.domain.aggregates import User
from identity.domain.value_objects import DepartmentId, DomainId
from identity.presentation.departments.models import DepartmentResponse
from identity.presentation.domains.models import DomainResponse
from identity.presentation.projects.models import ProjectResponse
from identity.presentation.roles.models import RoleResponse


class CreateUserRequest(BaseModel):
    """Request model for creating a member user.

    Without ``department_id`` the user joins the domain's default department.
    """

    account: str = Field(..., description="Login account", min_length=1, max_length=255)
    department_id: str | None = Field(default=None, description="Department to join")
    display_name: str = Field(default="", description="Display name", max_length=255)
    email: str = Field(default="", description="Contact email", max_length=255)

    def to_domain(self, domain_id: DomainId) -> User:
        """Build the new User aggregate for the caller's domain."""
        return User.create(
            account=self.account,
            domain_id=domain_id,
            department_id=(
                DepartmentId.from_string(self.department_id)
                if self.department_id
                else None
            ),
            display_name=self.display_name,
            email=self.email,
        )


class SetDefaultProjectRequest(BaseModel):
    """Request model for changing a user's default project."""

    project_id: str = Field(..., description="Project ID", min_length=1)


class UserResponse(BaseModel):
    """Response model for the user aggregate."""

    id: str = Field(..., description="User ID")
    account: str = Field(..., description="Login account")
    display_name: str = Field(..., description="Display name")
    email: str = Field(..., description="Contact email")
    domain: DomainResponse | None = Field(..., description="Owning domain")
    department: DepartmentResponse | None = Field(..., description="Department")
    default_project: ProjectResponse | None = Field(
        default=None, description="Default project"
    )
    roles: list[RoleResponse] = Field(..., description="Bound roles, in binding order")
    projects: list[ProjectResponse] = Field(..., description="Project memberships")
    last_login_at: datetime | None = Field(default=None, description="Last login")
    last_login_ip: str | None = Field(default=None, description="Last login address")
    login_failed_times: int = Field(..., description="Failed login count")
    login_success_times: int = Field(..., description="Successful login count")
    created_at: datetime = Field(..., description="Creation time")

    @classmethod
    def from_domain(cls, user: User) -> UserResponse:
        """Convert User aggregate to API response."""
        return cls(
            id=user.id.value,
            account=user.account,
            display_name=user.display_name,
            email=user.email,
            domain=DomainResponse.from_domain(user.domain) if user.domain else None,
            department=(
                DepartmentResponse.from_domain(user.department)
                if user.department
                else None
            ),
            default_project=(
                ProjectResponse.from_domain(user.default_project)
                if user.default_project
                else None
            ),
            roles=[RoleResponse.from_domain(role) for role in user.roles],
            projects=[ProjectResponse.from_domain(p) for p in user.projects],
            last_login_at=user.last_login_at,
            last_login_ip=user.last_login_ip,
            login_failed_times=user.login_failed_times,
            login_success_times=user.login_success_times,
            created_at=user.created_at,
        )
