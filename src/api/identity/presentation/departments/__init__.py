"""Departments presentation: routes and models."""

from identity.presentation.departments.routes import router

__all__ = ["router"]
