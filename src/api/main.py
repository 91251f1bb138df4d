"""Main FastAPI application entry point."""

from contextlib import asynccontextmanager

from fastapi import FastAPI

from identity.presentation import router as identity_router
from identity.presentation.errors import register_error_handlers
from infrastructure.database.dependencies import close_database_connections
from infrastructure.dependencies import close_cache_provider, get_cache_provider
from infrastructure.logging import configure_logging
from infrastructure.observability import DefaultLifecycleProbe
from infrastructure.settings import get_cache_settings, get_settings
from infrastructure.version import __version__


@asynccontextmanager
async def keyauth_lifespan(app: FastAPI):
    """Application lifespan context.

    Manages:
    - Logging configuration
    - Cache provider lifecycle (created at startup, closed on shutdown)
    - Database engine lifecycle (created lazily, disposed on shutdown)
    """
    settings = get_settings()
    configure_logging(settings.log_level)
    probe = DefaultLifecycleProbe()

    get_cache_provider()
    probe.application_started(
        version=__version__, caching_enabled=get_cache_settings().enabled
    )

    try:
        yield
    finally:
        await close_cache_provider()
        await close_database_connections()
        probe.application_stopped()


def create_app() -> FastAPI:
    """Build the FastAPI application."""
    settings = get_settings()
    app = FastAPI(
        title=settings.app_name,
        description="Multi-tenant identity and organization service",
        version=__version__,
        debug=settings.debug,
        lifespan=keyauth_lifespan,
    )

    register_error_handlers(app)
    app.include_router(identity_router)

    @app.get("/health")
    def health():
        """Basic health check endpoint."""
        return {"status": "ok"}

    return app


app = create_app()
