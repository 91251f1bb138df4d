"""Pydantic models for client application API requests and responses."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

from identity.domain.aggregates import Application
from identity.domain.aggregates.application import DEFAULT_TOKEN_EXPIRE_SECONDS


class RegisterApplicationRequest(BaseModel):
    """Request model for registering a client application."""

    name: str = Field(..., description="Application name", min_length=1, max_length=255)
    redirect_uri: str = Field(default="", description="OAuth redirect URI")
    website: str = Field(default="", description="Public website")
    logo_image: str = Field(default="", description="Logo URL")
    description: str = Field(default="", description="Application description")
    token_expire_seconds: int = Field(
        default=DEFAULT_TOKEN_EXPIRE_SECONDS,
        description="Lifetime of tokens issued to this client",
        gt=0,
    )


class ApplicationResponse(BaseModel):
    """Response model for application.

    The client secret is never included; it is only returned once, at
    registration (see ApplicationCredentialsResponse).
    """

    id: str = Field(..., description="Application ID")
    user_id: str = Field(..., description="Owner user ID")
    name: str = Field(..., description="Application name")
    client_id: str = Field(..., description="OAuth client ID")
    redirect_uri: str = Field(..., description="OAuth redirect URI")
    website: str = Field(..., description="Public website")
    logo_image: str = Field(..., description="Logo URL")
    description: str = Field(..., description="Application description")
    locked: bool = Field(..., description="Whether the client is locked")
    token_expire_seconds: int = Field(..., description="Token lifetime in seconds")
    created_at: datetime = Field(..., description="Registration time")

    @classmethod
    def from_domain(cls, application: Application) -> ApplicationResponse:
        """Convert Application aggregate to API response."""
        return cls(
            id=application.id.value,
            user_id=application.user_id.value,
            name=application.name,
            client_id=application.client_id,
            redirect_uri=application.redirect_uri,
            website=application.website,
            logo_image=application.logo_image,
            description=application.description,
            locked=application.locked,
            token_expire_seconds=application.token_expire_seconds,
            created_at=application.created_at,
        )


class ApplicationCredentialsResponse(ApplicationResponse):
    """Registration response; carries the client secret."""

    client_secret: str = Field(..., description="OAuth client secret")

    @classmethod
    def from_domain(cls, application: Application) -> ApplicationCredentialsResponse:
        base = ApplicationResponse.from_domain(application)
        return cls(**base.model_dump(), client_secret=application.client_secret)
