"""HTTP routes for department management."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, status

from identity.application.services import DepartmentService
from identity.dependencies.department import get_department_service
from identity.dependencies.domain_context import get_domain_id
from identity.domain.value_objects import DepartmentId, DomainId, ProjectId, RoleId
from identity.presentation.departments.models import (
    CreateDepartmentRequest,
    DeclareProjectsRequest,
    DeclareRolesRequest,
    DepartmentResponse,
)

router = APIRouter(
    prefix="/departments",
    tags=["departments"],
)


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_department(
    request: CreateDepartmentRequest,
    domain_id: Annotated[DomainId, Depends(get_domain_id)],
    service: Annotated[DepartmentService, Depends(get_department_service)],
) -> DepartmentResponse:
    department = await service.create_department(
        domain_id=domain_id,
        name=request.name,
        description=request.description,
    )
    return DepartmentResponse.from_domain(department)


@router.get("")
async def list_departments(
    domain_id: Annotated[DomainId, Depends(get_domain_id)],
    service: Annotated[DepartmentService, Depends(get_department_service)],
) -> list[DepartmentResponse]:
    departments = await service.list_departments(domain_id)
    return [DepartmentResponse.from_domain(d) for d in departments]


@router.get("/default")
async def get_default_department(
    domain_id: Annotated[DomainId, Depends(get_domain_id)],
    service: Annotated[DepartmentService, Depends(get_department_service)],
) -> DepartmentResponse:
    department = await service.get_default_department(domain_id)
    return DepartmentResponse.from_domain(department)


@router.get("/{department_id}")
async def get_department(
    department_id: str,
    domain_id: Annotated[DomainId, Depends(get_domain_id)],
    service: Annotated[DepartmentService, Depends(get_department_service)],
) -> DepartmentResponse:
    department = await service.get_department(
        domain_id, DepartmentId.from_string(department_id)
    )
    return DepartmentResponse.from_domain(department)


@router.delete("/{department_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_department(
    department_id: str,
    domain_id: Annotated[DomainId, Depends(get_domain_id)],
    service: Annotated[DepartmentService, Depends(get_department_service)],
) -> None:
    """Delete an empty, non-default department."""
    await service.delete_department(domain_id, DepartmentId.from_string(department_id))


@router.post("/{department_id}/projects", status_code=status.HTTP_204_NO_CONTENT)
async def declare_department_projects(
    department_id: str,
    request: DeclareProjectsRequest,
    domain_id: Annotated[DomainId, Depends(get_domain_id)],
    service: Annotated[DepartmentService, Depends(get_department_service)],
) -> None:
    """Declare projects that future members of the department join."""
    await service.add_projects(
        domain_id,
        DepartmentId.from_string(department_id),
        [ProjectId.from_string(pid) for pid in request.project_ids],
    )


@router.post("/{department_id}/roles", status_code=status.HTTP_204_NO_CONTENT)
async def declare_department_roles(
    department_id: str,
    request: DeclareRolesRequest,
    domain_id: Annotated[DomainId, Depends(get_domain_id)],
    service: Annotated[DepartmentService, Depends(get_department_service)],
) -> None:
    """Declare roles that future members of the department are granted."""
    await service.add_roles(
        domain_id,
        DepartmentId.from_string(department_id),
        [RoleId.from_string(rid) for rid in request.role_ids],
    )
