"""Application lifespan: startup and shutdown in dependency order."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from community_service.core.settings import (
    get_app_settings,
    get_db_settings,
    get_logging_settings,
)
from community_service.infra.logging import setup_logging
from community_service.infra.logging.config import shutdown as shutdown_logging
from community_service.infra.metrics.prometheus import application_info

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

    from fastapi import FastAPI

logger = logging.getLogger(__name__)


async def _startup_core() -> None:
    """Configure logging and publish application info."""
    app = get_app_settings()
    setup_logging(log_settings=get_logging_settings(), force=True)
    logger.info(
        "Application starting",
        extra={"service": app.service_name, "environment": app.environment},
    )

    application_info.labels(
        version=app.version,
        service=app.service_name,
        environment=app.environment,
    ).set(1)


async def _startup_database() -> None:
    """Check the database and create tables when asked to.

    A configured database that is unreachable fails startup. The SQLite
    fallback only logs, so the service still boots for local use.
    """
    from community_service.infra.database.session import init_database

    db = get_db_settings()
    try:
        await init_database()
    except Exception as e:
        if db.is_configured:
            logger.exception("Database unavailable, failing startup")
            raise
        logger.warning(
            "Fallback database unavailable, continuing in degraded mode",
            extra={"error": str(e)},
        )


async def _shutdown_database() -> None:
    from community_service.infra.database.session import close_database

    await close_database()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Manage application lifecycle.

    Startup: logging, metrics info, database.
    Shutdown: database engine, then the logging queue listener.

    Args:
        app: FastAPI application instance.

    Yields:
        None during application runtime.
    """
    _ = app

    await _startup_core()
    await _startup_database()

    logger.info("Application startup complete")
    try:
        yield
    finally:
        logger.info("Application shutting down")
        await _shutdown_database()
        shutdown_logging()
