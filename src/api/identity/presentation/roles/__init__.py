"""Roles presentation: routes and models."""

from identity.presentation.roles.routes import router

__all__ = ["router"]
