"""Pydantic models for project API requests and responses."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

from identity.domain.aggregates import Project


class CreateProjectRequest(BaseModel):
    """Request model for creating a project."""

    name: str = Field(..., description="Project name", min_length=1, max_length=255)
    description: str = Field(default="", description="Project description")


class ProjectResponse(BaseModel):
    """Response model for project."""

    id: str = Field(..., description="Project ID")
    domain_id: str = Field(..., description="Owning domain ID")
    name: str = Field(..., description="Project name")
    description: str = Field(..., description="Project description")
    created_at: datetime = Field(..., description="Creation time")

    @classmethod
    def from_domain(cls, project: Project) -> ProjectResponse:
        """Convert Project aggregate to API response."""
        return cls(
            id=project.id.value,
            domain_id=project.domain_id.value,
            name=project.name,
            description=project.description,
            created_at=project.created_at,
        )
