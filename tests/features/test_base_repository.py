"""Tests for BaseRepository lookups through the post repository."""

from __future__ import annotations

import pytest
from sqlalchemy import select

from community_service.core.database import NotFoundError, RepositoryError
from community_service.core.models import Post, PostType
from community_service.core.pagination import ListRequest
from community_service.core.repositories import PostRepository


@pytest.fixture
def repo() -> PostRepository:
    return PostRepository()


async def test_create_assigns_id_and_timestamps(db_session, repo):
    post = await repo.create(
        db_session,
        Post(author_id="author-1", type=PostType.QUESTION.value, title="Why?", content=""),
    )

    assert len(post.id) == 36
    assert post.created_at.tzinfo is not None
    assert post.is_question


async def test_get_returns_none_for_missing(db_session, repo):
    assert await repo.get(db_session, "missing") is None


async def test_get_or_raise(db_session, repo, question):
    assert (await repo.get_or_raise(db_session, question.id)).id == question.id

    with pytest.raises(NotFoundError) as exc_info:
        await repo.get_or_raise(db_session, "missing")

    assert exc_info.value.model_name == "Post"
    assert exc_info.value.identifier == {"id": "missing"}


async def test_get_with_loader_options(db_session, repo, question):
    from sqlalchemy.orm import load_only

    post = await repo.get(db_session, question.id, options=[load_only(Post.title)])

    assert post is not None
    assert post.title == question.title


async def test_listing_without_keyset_raises(db_session, repo):
    with pytest.raises(RepositoryError, match="no keyset"):
        await repo.paginate(db_session, select(Post), ListRequest(limit=5))

    with pytest.raises(RepositoryError):
        await repo.list_all(db_session, select(Post))
