"""Database dependencies for FastAPI route handlers.

Two session getters exist for different use cases:

1. `get_db_session()` (this module) - FastAPI Dependency
   - Use in route handlers with `Depends(get_db_session)`
   - Session lifecycle tied to HTTP request

2. `get_async_session()` (infra.database) - General Context Manager
   - Use in scripts and startup code
   - Framework-agnostic async context manager

Both use the same underlying session factory. Tests replace this dependency
through ``app.dependency_overrides``.
"""

from collections.abc import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncSession

from community_service.infra.database import get_async_session


async def get_db_session() -> AsyncGenerator[AsyncSession]:
    """FastAPI dependency for database session.

    Yields:
        Database session that is automatically closed after request.
    """
    async with get_async_session() as session:
        yield session
