"""Projects presentation: routes and models."""

from identity.presentation.projects.routes import router

__all__ = ["router"]
