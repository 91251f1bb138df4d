"""Pydantic models for role API requests and responses."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

from identity.domain.aggregates import Role


class CreateRoleRequest(BaseModel):
    """Request model for creating a role."""

    name: str = Field(..., description="Role name", min_length=1, max_length=255)
    description: str = Field(default="", description="Role description")


class RoleResponse(BaseModel):
    """Response model for role."""

    id: str = Field(..., description="Role ID")
    name: str = Field(..., description="Role name")
    description: str = Field(..., description="Role description")
    created_at: datetime = Field(..., description="Creation time")

    @classmethod
    def from_domain(cls, role: Role) -> RoleResponse:
        """Convert Role aggregate to API response."""
        return cls(
            id=role.id.value,
            name=role.name,
            description=role.description,
            created_at=role.created_at,
        )
