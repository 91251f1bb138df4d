"""Pydantic models for domain (tenant) API requests and responses."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

from identity.domain.aggregates import Domain


class CreateDomainRequest(BaseModel):
    """Request model for creating a domain."""

    name: str = Field(..., description="Domain name", min_length=1, max_length=255)
    description: str = Field(default="", description="Domain description")
    metadata: dict[str, str] = Field(
        default_factory=dict, description="Arbitrary string attributes"
    )


class DomainResponse(BaseModel):
    """Response model for domain."""

    id: str = Field(..., description="Domain ID")
    name: str = Field(..., description="Domain name")
    description: str = Field(..., description="Domain description")
    metadata: dict[str, str] = Field(..., description="Arbitrary string attributes")
    created_at: datetime = Field(..., description="Creation time")

    @classmethod
    def from_domain(cls, domain: Domain) -> DomainResponse:
        """Convert Domain aggregate to API response."""
        return cls(
            id=domain.id.value,
            name=domain.name,
            description=domain.description,
            metadata=dict(domain.metadata),
            created_at=domain.created_at,
        )
