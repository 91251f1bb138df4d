"""Users presentation: routes and models."""

from identity.presentation.users.routes import router

__all__ = ["router"]
