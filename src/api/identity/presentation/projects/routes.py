"""HTTP routes for projects and project membership."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Body, Depends, status

from identity.application.services import ProjectService
from identity.dependencies.domain_context import get_domain_id
from identity.dependencies.project import get_project_service
from identity.domain.value_objects import DomainId, ProjectId, UserId
from identity.presentation.projects.models import CreateProjectRequest, ProjectResponse
from identity.presentation.users.models import UserResponse

router = APIRouter(
    prefix="/projects",
    tags=["projects"],
)


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_project(
    request: CreateProjectRequest,
    domain_id: Annotated[DomainId, Depends(get_domain_id)],
    service: Annotated[ProjectService, Depends(get_project_service)],
) -> ProjectResponse:
    project = await service.create_project(
        domain_id=domain_id,
        name=request.name,
        description=request.description,
    )
    return ProjectResponse.from_domain(project)


@router.get("")
async def list_projects(
    domain_id: Annotated[DomainId, Depends(get_domain_id)],
    service: Annotated[ProjectService, Depends(get_project_service)],
) -> list[ProjectResponse]:
    projects = await service.list_projects(domain_id)
    return [ProjectResponse.from_domain(p) for p in projects]


@router.get("/{project_id}")
async def get_project(
    project_id: str,
    domain_id: Annotated[DomainId, Depends(get_domain_id)],
    service: Annotated[ProjectService, Depends(get_project_service)],
) -> ProjectResponse:
    project = await service.get_project(domain_id, ProjectId.from_string(project_id))
    return ProjectResponse.from_domain(project)


@router.delete("/{project_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_project(
    project_id: str,
    domain_id: Annotated[DomainId, Depends(get_domain_id)],
    service: Annotated[ProjectService, Depends(get_project_service)],
) -> None:
    await service.delete_project(domain_id, ProjectId.from_string(project_id))


@router.get("/{project_id}/users")
async def list_project_users(
    project_id: str,
    domain_id: Annotated[DomainId, Depends(get_domain_id)],
    service: Annotated[ProjectService, Depends(get_project_service)],
) -> list[UserResponse]:
    """List project members with domain, department and roles attached."""
    project = await service.get_project(domain_id, ProjectId.from_string(project_id))
    users = await service.list_project_users(project.id)
    return [UserResponse.from_domain(u) for u in users]


@router.post("/{project_id}/users", status_code=status.HTTP_201_CREATED)
async def add_users_to_project(
    project_id: str,
    user_ids: Annotated[list[str], Body(description="User IDs to add")],
    domain_id: Annotated[DomainId, Depends(get_domain_id)],
    service: Annotated[ProjectService, Depends(get_project_service)],
) -> None:
    """Add users to a project.

    Raises:
        BadRequestError: 400 if the list of user IDs is empty
        NotFoundError: 404 if the project does not exist in the domain
    """
    await service.add_users_to_project(
        ProjectId.from_string(project_id),
        [UserId.from_string(uid) for uid in user_ids],
        domain_id=domain_id,
    )


@router.delete("/{project_id}/users", status_code=status.HTTP_204_NO_CONTENT)
async def remove_users_from_project(
    project_id: str,
    user_ids: Annotated[list[str], Body(description="User IDs to remove")],
    domain_id: Annotated[DomainId, Depends(get_domain_id)],
    service: Annotated[ProjectService, Depends(get_project_service)],
) -> None:
    """Remove users from a project.

    Raises:
        BadRequestError: 400 if the list of user IDs is empty
        NotFoundError: 404 if the project does not exist in the domain
    """
    await service.remove_users_from_project(
        ProjectId.from_string(project_id),
        [UserId.from_string(uid) for uid in user_ids],
        domain_id=domain_id,
    )
