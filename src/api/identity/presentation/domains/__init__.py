"""Domains presentation: routes and models."""

from identity.presentation.domains.routes import router

__all__ = ["router"]
