"""Pytest configuration and shared fixtures.

Organization:
    - Application Fixtures: FastAPI app and HTTP client bound to the test database
    - Database Fixtures: in-memory SQLite engine and session with all tables
    - Data Fixtures: factories for posts, answers and comments
"""

from __future__ import annotations

import os
from collections.abc import AsyncGenerator, Awaitable, Callable
from typing import TYPE_CHECKING, Any

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

if TYPE_CHECKING:
    from fastapi import FastAPI
    from sqlalchemy.ext.asyncio import AsyncEngine

    from community_service.core.models import Post
    from community_service.features.answers.models import Answer
    from community_service.features.comments.models import Comment

# Ensure tests run without external infrastructure
os.environ.setdefault("APP_ENVIRONMENT", "test")
os.environ.setdefault("APP_ROOT_PATH", "")
os.environ.setdefault("DB_ENABLED", "false")
os.environ.setdefault("LOG_LEVEL", "WARNING")

# ============================================================================
# Database Fixtures
# ============================================================================


@pytest.fixture
async def db_engine() -> AsyncGenerator[AsyncEngine]:
    """Create async SQLAlchemy engine with in-memory SQLite.

    Yields:
        Async SQLAlchemy engine connected to in-memory SQLite.
    """
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        echo=False,
        poolclass=StaticPool,
    )

    try:
        yield engine
    finally:
        await engine.dispose()


@pytest.fixture
async def db_session(db_engine: AsyncEngine) -> AsyncGenerator[AsyncSession]:
    """Create a session with every table created.

    Yields:
        Async database session for testing.
    """
    from community_service.core.database import Base
    from community_service.core.models import load_all_models

    load_all_models()
    async with db_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    session_maker = async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)
    async with session_maker() as session:
        try:
            yield session
        finally:
            await session.rollback()

    async with db_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


# ============================================================================
# Application Fixtures
# ============================================================================


@pytest.fixture
async def app(db_session: AsyncSession) -> FastAPI:
    """Create a FastAPI application whose routes use the test session."""
    from community_service.app.main import create_app
    from community_service.core.dependencies.database import get_db_session

    application = create_app()

    async def _override_session() -> AsyncGenerator[AsyncSession]:
        yield db_session

    application.dependency_overrides[get_db_session] = _override_session
    return application


@pytest.fixture
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient]:
    """Create async HTTP client for testing.

    Example:
        async def test_answers(client, question):
            response = await client.get(f"/api/v1/posts/{question.id}/answers")
            assert response.status_code == 200
    """
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac


# ============================================================================
# Data Fixtures
# ============================================================================


@pytest.fixture
def make_post(db_session: AsyncSession) -> Callable[..., Awaitable[Post]]:
    """Factory persisting a post; defaults to a question."""
    from community_service.core.models import Post, PostType
    from community_service.core.repositories import get_post_repository

    async def _make(**kwargs: Any) -> Post:
        kwargs.setdefault("author_id", "author-1")
        kwargs.setdefault("type", PostType.QUESTION.value)
        kwargs.setdefault("title", "How do I page through answers?")
        kwargs.setdefault("content", "Question body")
        post = await get_post_repository().create(db_session, Post(**kwargs))
        await db_session.commit()
        return post

    return _make


@pytest.fixture
def make_answer(db_session: AsyncSession) -> Callable[..., Awaitable[Answer]]:
    """Factory persisting an answer; ``post_id`` is required."""
    from community_service.features.answers.models import Answer
    from community_service.features.answers.repository import get_answer_repository

    async def _make(**kwargs: Any) -> Answer:
        kwargs.setdefault("author_id", "author-2")
        kwargs.setdefault("content", "Answer body")
        kwargs.setdefault("likes", 0)
        kwargs.setdefault("is_adopted", False)
        answer = await get_answer_repository().create(db_session, Answer(**kwargs))
        await db_session.commit()
        return answer

    return _make


@pytest.fixture
def make_comment(db_session: AsyncSession) -> Callable[..., Awaitable[Comment]]:
    """Factory persisting a comment; needs ``post_id`` or ``answer_id``."""
    from community_service.features.comments.models import Comment
    from community_service.features.comments.repository import get_comment_repository

    async def _make(**kwargs: Any) -> Comment:
        kwargs.setdefault("author_id", "author-3")
        kwargs.setdefault("content", "Comment body")
        comment = await get_comment_repository().create(db_session, Comment(**kwargs))
        await db_session.commit()
        return comment

    return _make


@pytest.fixture
async def question(make_post: Callable[..., Awaitable[Post]]) -> Post:
    """A persisted question post."""
    return await make_post(id="question-1")


@pytest.fixture(autouse=True)
def _reset_settings_cache() -> None:
    """Make every test read settings from the current environment."""
    from community_service.core.settings import clear_all_caches

    clear_all_caches()
