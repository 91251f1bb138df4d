"""Repository dependencies for the identity context.

FastAPI caches ``get_session`` per request, so every repository built for
one request shares a single session.
"""

from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from identity.infrastructure import (
    ApplicationRepository,
    DepartmentRepository,
    DomainRepository,
    ProjectRepository,
    RoleRepository,
    UserRepository,
)
from infrastructure.database.dependencies import get_session


def get_domain_repository(
    session: Annotated[AsyncSession, Depends(get_session)],
) -> DomainRepository:
    return DomainRepository(session=session)


def get_department_repository(
    session: Annotated[AsyncSession, Depends(get_session)],
) -> DepartmentRepository:
    return DepartmentRepository(session=session)


def get_project_repository(
    session: Annotated[AsyncSession, Depends(get_session)],
) -> ProjectRepository:
    return ProjectRepository(session=session)


def get_role_repository(
    session: Annotated[AsyncSession, Depends(get_session)],
) -> RoleRepository:
    return RoleRepository(session=session)


def get_user_repository(
    session: Annotated[AsyncSession, Depends(get_session)],
) -> UserRepository:
    return UserRepository(session=session)


def get_application_repository(
    session: Annotated[AsyncSession, Depends(get_session)],
) -> ApplicationRepository:
    return ApplicationRepository(session=session)
