"""Identity presentation layer - aggregate-based organization.

Organizes presentation concerns by aggregate (domains, departments,
projects, users, roles, applications). Each aggregate package contains
its own routes and models.
"""

from __future__ import annotations

from fastapi import APIRouter

from identity.presentation import (
    applications,
    departments,
    domains,
    projects,
    roles,
    users,
)

router = APIRouter(
    prefix="/identity",
    tags=["identity"],
)

router.include_router(domains.router)
router.include_router(departments.router)
router.include_router(projects.router)
router.include_router(users.router)
router.include_router(roles.router)
router.include_router(applications.router)

__all__ = ["router"]
