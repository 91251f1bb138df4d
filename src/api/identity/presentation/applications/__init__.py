"""Applications presentation: routes and models."""

from identity.presentation.applications.routes import router

__all__ = ["router"]
