"""HTTP routes for the role catalogue."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, status

from identity.application.services import RoleService
from identity.dependencies.role import get_role_service
from identity.domain.value_objects import RoleId
from identity.presentation.roles.models import CreateRoleRequest, RoleResponse

router = APIRouter(
    prefix="/roles",
    tags=["roles"],
)


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_role(
    request: CreateRoleRequest,
    service: Annotated[RoleService, Depends(get_role_service)],
) -> RoleResponse:
    role = await service.create_role(
        name=request.name, description=request.description
    )
    return RoleResponse.from_domain(role)


@router.get("")
async def list_roles(
    service: Annotated[RoleService, Depends(get_role_service)],
) -> list[RoleResponse]:
    roles = await service.list_roles()
    return [RoleResponse.from_domain(r) for r in roles]


@router.get("/{role_id}")
async def get_role(
    role_id: str,
    service: Annotated[RoleService, Depends(get_role_service)],
) -> RoleResponse:
    role = await service.get_role(RoleId.from_string(role_id))
    return RoleResponse.from_domain(role)


@router.delete("/{role_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_role(
    role_id: str,
    service: Annotated[RoleService, Depends(get_role_service)],
) -> None:
    """Delete a role; its holders lose it."""
    await service.delete_role(RoleId.from_string(role_id))
