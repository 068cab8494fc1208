"""Database session management for the async SQLAlchemy engine."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from community_service.core.settings import get_app_settings, get_db_settings

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

logger = logging.getLogger(__name__)

# Get settings from modular configuration
db_settings = get_db_settings()
app_settings = get_app_settings()

engine_kwargs = db_settings.sqlalchemy_engine_kwargs()
engine_kwargs["echo"] = db_settings.echo or app_settings.debug

# Falls back to a local SQLite file when no PostgreSQL is configured
engine = create_async_engine(db_settings.get_sqlalchemy_url(), **engine_kwargs)

# Create session factory
AsyncSessionLocal = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autoflush=False,
    autocommit=False,
)


@asynccontextmanager
async def get_async_session() -> AsyncGenerator[AsyncSession]:
    """Get async database session.

    Yields:
        Database session that is automatically closed.

    Example:
        async with get_async_session() as session:
            result = await session.execute(select(Post))
    """
    async with AsyncSessionLocal() as session:
        try:
            yield session
        finally:
            await session.close()


async def init_database() -> None:
    """Check connectivity and optionally create missing tables.

    Tables are created only when ``DB_CREATE_TABLES`` is set; schema
    management otherwise belongs to whoever owns the posts, answers and
    comments tables.

    Raises:
        SQLAlchemyError: If the database is unreachable.
    """
    try:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))

        if db_settings.create_tables:
            from community_service.core.database import Base
            from community_service.core.models import load_all_models

            load_all_models()
            async with engine.begin() as conn:
                await conn.run_sync(Base.metadata.create_all)
            logger.info("Database tables ensured", extra={"tables": len(Base.metadata.tables)})

        logger.info(
            "Database connection established successfully",
            extra={"url": engine.url.render_as_string(hide_password=True)},
        )
    except Exception:
        logger.exception(
            "Failed to initialize database",
            extra={"configured": db_settings.is_configured, "sqlite": db_settings.is_sqlite},
        )
        raise


async def close_database() -> None:
    """Dispose the engine and its connection pool."""
    await engine.dispose()
    logger.info("Database connections closed")


__all__ = [
    "AsyncSessionLocal",
    "close_database",
    "engine",
    "get_async_session",
    "init_database",
]
