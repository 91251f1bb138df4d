"""Pydantic models for department API requests and responses."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

from identity.domain.aggregates import Department


class CreateDepartmentRequest(BaseModel):
    """Request model for creating a department."""

    name: str = Field(..., description="Department name", min_length=1, max_length=255)
    description: str = Field(default="", description="Department description")


class DeclareProjectsRequest(BaseModel):
    """Projects new members of the department join."""

    project_ids: list[str] = Field(..., description="Project IDs")


class DeclareRolesRequest(BaseModel):
    """Roles new members of the department are granted."""

    role_ids: list[str] = Field(..., description="Role IDs")


class DepartmentResponse(BaseModel):
    """Response model for department."""

    id: str = Field(..., description="Department ID")
    domain_id: str = Field(..., description="Owning domain ID")
    name: str = Field(..., description="Department name")
    description: str = Field(..., description="Department description")
    created_at: datetime = Field(..., description="Creation time")

    @classmethod
    def from_domain(cls, department: Department) -> DepartmentResponse:
        """Convert Department aggregate to API response."""
        return cls(
            id=department.id.value,
            domain_id=department.domain_id.value,
            name=department.name,
            description=department.description,
            created_at=department.created_at,
        )
