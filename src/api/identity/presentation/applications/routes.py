"""HTTP routes for client applications."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, status

from identity.application.services import ApplicationService
from identity.dependencies.application import get_application_service
from identity.dependencies.domain_context import get_domain_id
from identity.domain.value_objects import ApplicationId, DomainId, UserId
from identity.presentation.applications.models import (
    ApplicationCredentialsResponse,
    ApplicationResponse,
    RegisterApplicationRequest,
)

router = APIRouter(tags=["applications"])


@router.post("/users/{user_id}/applications", status_code=status.HTTP_201_CREATED)
async def register_application(
    user_id: str,
    request: RegisterApplicationRequest,
    domain_id: Annotated[DomainId, Depends(get_domain_id)],
    service: Annotated[ApplicationService, Depends(get_application_service)],
) -> ApplicationCredentialsResponse:
    """Register a client application for a user.

    The response is the only place the client secret is ever returned.

    Raises:
        NotFoundError: 404 if the owner does not exist in the domain
        ConflictError: 409 if the owner already has an application with that name
    """
    application = await service.register_application(
        domain_id=domain_id,
        user_id=UserId.from_string(user_id),
        name=request.name,
        redirect_uri=request.redirect_uri,
        website=request.website,
        logo_image=request.logo_image,
        description=request.description,
        token_expire_seconds=request.token_expire_seconds,
    )
    return ApplicationCredentialsResponse.from_domain(application)


@router.get("/users/{user_id}/applications")
async def list_user_applications(
    user_id: str,
    domain_id: Annotated[DomainId, Depends(get_domain_id)],
    service: Annotated[ApplicationService, Depends(get_application_service)],
) -> list[ApplicationResponse]:
    applications = await service.list_user_applications(
        domain_id, UserId.from_string(user_id)
    )
    return [ApplicationResponse.from_domain(a) for a in applications]


@router.get("/applications/{application_id}")
async def get_application(
    application_id: str,
    domain_id: Annotated[DomainId, Depends(get_domain_id)],
    service: Annotated[ApplicationService, Depends(get_application_service)],
) -> ApplicationResponse:
    application = await service.get_application(
        domain_id, ApplicationId.from_string(application_id)
    )
    return ApplicationResponse.from_domain(application)


@router.delete(
    "/applications/{application_id}", status_code=status.HTTP_204_NO_CONTENT
)
async def delete_application(
    application_id: str,
    domain_id: Annotated[DomainId, Depends(get_domain_id)],
    service: Annotated[ApplicationService, Depends(get_application_service)],
) -> None:
    await service.delete_application(
        domain_id, ApplicationId.from_string(application_id)
    )
