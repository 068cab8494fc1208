"""FastAPI application factory."""

from __future__ import annotations

from fastapi import FastAPI

from community_service.app.exception_handlers import configure_exception_handlers
from community_service.app.lifespan import lifespan
from community_service.app.middleware import configure_middleware
from community_service.app.router import setup_routers
from community_service.core.settings import get_settings


def create_app() -> FastAPI:
    """Create and configure FastAPI application.

    Uses unified settings from core.settings, loaded once and cached.

    Returns:
        Configured FastAPI application instance.
    """
    settings = get_settings()
    app_settings = settings.app

    app = FastAPI(
        title=app_settings.title,
        summary=app_settings.summary,
        description=app_settings.description,
        version=app_settings.version,
        docs_url=app_settings.get_docs_url(),
        redoc_url=app_settings.get_redoc_url(),
        openapi_url=app_settings.get_openapi_url(),
        root_path=app_settings.root_path,
        debug=app_settings.debug,
        lifespan=lifespan,
    )

    # Configure exception handlers (must be before middleware)
    configure_exception_handlers(app)

    configure_middleware(app, settings)

    setup_routers(app, app_settings)

    return app


# Application instance for uvicorn
app = create_app()
