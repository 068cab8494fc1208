"""Middleware configuration for the FastAPI application.

The stack, outermost first:
- Request ID: request tracking and log correlation
- CORS: only when ``APP_CORS_ORIGINS`` is configured

Middleware is applied in reverse order (last added runs first), so
``configure_middleware`` adds the outermost middleware last.

Example Usage:
    from community_service.app.middleware import configure_middleware
    from community_service.core.settings import get_settings

    configure_middleware(app, get_settings())
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from fastapi.middleware.cors import CORSMiddleware

from community_service.app.middleware.base import HeaderContextMiddleware
from community_service.app.middleware.request_id import RequestIDMiddleware

if TYPE_CHECKING:
    from fastapi import FastAPI

    from community_service.core.settings import Settings

logger = logging.getLogger(__name__)

__all__ = [
    "HeaderContextMiddleware",
    "RequestIDMiddleware",
    "configure_middleware",
]


def configure_middleware(app: FastAPI, settings: Settings) -> None:
    """Configure all middleware for the FastAPI application.

    Args:
        app: FastAPI application instance
        settings: Unified application settings
    """
    app_settings = settings.app

    if app_settings.cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=app_settings.cors_origins,
            allow_credentials=app_settings.cors_allow_credentials,
            allow_methods=app_settings.cors_allow_methods,
            allow_headers=app_settings.cors_allow_headers,
            max_age=app_settings.cors_max_age,
        )
        logger.info("CORSMiddleware enabled", extra={"origins": app_settings.cors_origins})

    # Outermost, so every response (including CORS preflight) carries the ID
    app.add_middleware(RequestIDMiddleware)
    logger.debug("RequestIDMiddleware enabled")
