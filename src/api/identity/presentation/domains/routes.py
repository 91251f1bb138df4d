"""HTTP routes for domain (tenant) management."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, status

from identity.application.services import DomainService
from identity.dependencies.domain import get_domain_service
from identity.domain.value_objects import DomainId
from identity.presentation.domains.models import CreateDomainRequest, DomainResponse

router = APIRouter(
    prefix="/domains",
    tags=["domains"],
)


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_domain(
    request: CreateDomainRequest,
    service: Annotated[DomainService, Depends(get_domain_service)],
) -> DomainResponse:
    """Create a domain together with its default department.

    Raises:
        ConflictError: 409 if the domain name already exists
    """
    domain = await service.create_domain(
        name=request.name,
        description=request.description,
        metadata=request.metadata,
    )
    return DomainResponse.from_domain(domain)


@router.get("")
async def list_domains(
    service: Annotated[DomainService, Depends(get_domain_service)],
) -> list[DomainResponse]:
    domains = await service.list_domains()
    return [DomainResponse.from_domain(d) for d in domains]


@router.get("/{domain_id}")
async def get_domain(
    domain_id: str,
    service: Annotated[DomainService, Depends(get_domain_service)],
) -> DomainResponse:
    domain = await service.get_domain(DomainId.from_string(domain_id))
    return DomainResponse.from_domain(domain)


@router.delete("/{domain_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_domain(
    domain_id: str,
    service: Annotated[DomainService, Depends(get_domain_service)],
) -> None:
    """Delete a domain that has no users left.

    Raises:
        NotFoundError: 404 if the domain does not exist
        BadRequestError: 400 if users remain in the domain
    """
    await service.delete_domain(DomainId.from_string(domain_id))
