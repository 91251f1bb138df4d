"""HTTP routes for member users."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, status

from identity.application.services import UserService
from identity.dependencies.domain_context import get_domain_id
from identity.dependencies.user import get_user_service
from identity.domain.value_objects import DomainId, ProjectId, UserId
from identity.presentation.users.models import (
    CreateUserRequest,
    SetDefaultProjectRequest,
    UserResponse,
)

router = APIRouter(
    prefix="/users",
    tags=["users"],
)


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_user(
    request: CreateUserRequest,
    domain_id: Annotated[DomainId, Depends(get_domain_id)],
    service: Annotated[UserService, Depends(get_user_service)],
) -> UserResponse:
    """Create a member user.

    The user inherits the projects and roles declared by its department.

    Raises:
        ConflictError: 409 if the account already exists in the domain
        BadRequestError: 400 if the department cannot be resolved
    """
    user = await service.create_member_user(request.to_domain(domain_id))
    return UserResponse.from_domain(user)


@router.get("")
async def list_users(
    domain_id: Annotated[DomainId, Depends(get_domain_id)],
    service: Annotated[UserService, Depends(get_user_service)],
) -> list[UserResponse]:
    users = await service.list_member_users(domain_id)
    return [UserResponse.from_domain(u) for u in users]


@router.get("/{user_id}")
async def get_user(
    user_id: str,
    domain_id: Annotated[DomainId, Depends(get_domain_id)],
    service: Annotated[UserService, Depends(get_user_service)],
) -> UserResponse:
    """Get the full user aggregate.

    Raises:
        BadRequestError: 400 if the user does not exist in the domain
    """
    user = await service.get_user(domain_id, UserId.from_string(user_id))
    return UserResponse.from_domain(user)


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_user(
    user_id: str,
    domain_id: Annotated[DomainId, Depends(get_domain_id)],
    service: Annotated[UserService, Depends(get_user_service)],
) -> None:
    await service.delete_user(domain_id, UserId.from_string(user_id))


@router.put("/{user_id}/roles/{role_name}", status_code=status.HTTP_204_NO_CONTENT)
async def bind_role(
    user_id: str,
    role_name: str,
    domain_id: Annotated[DomainId, Depends(get_domain_id)],
    service: Annotated[UserService, Depends(get_user_service)],
) -> None:
    """Bind a role to a user; binding a held role is a no-op."""
    await service.bind_role(domain_id, UserId.from_string(user_id), role_name)


@router.delete(
    "/{user_id}/roles/{role_name}", status_code=status.HTTP_204_NO_CONTENT
)
async def unbind_role(
    user_id: str,
    role_name: str,
    domain_id: Annotated[DomainId, Depends(get_domain_id)],
    service: Annotated[UserService, Depends(get_user_service)],
) -> None:
    """Unbind a role from a user; unbinding a role not held is a no-op."""
    await service.unbind_role(domain_id, UserId.from_string(user_id), role_name)


@router.put("/{user_id}/default-project", status_code=status.HTTP_204_NO_CONTENT)
async def set_default_project(
    user_id: str,
    request: SetDefaultProjectRequest,
    domain_id: Annotated[DomainId, Depends(get_domain_id)],
    service: Annotated[UserService, Depends(get_user_service)],
) -> None:
    await service.set_default_project(
        domain_id,
        UserId.from_string(user_id),
        ProjectId.from_string(request.project_id),
    )
