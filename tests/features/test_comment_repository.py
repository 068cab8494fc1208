"""Tests for comment threads and reply loading."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

import pytest

from community_service.core.pagination import ListRequest, PaginationMode
from community_service.features.comments.repository import CommentRepository

BASE_TIME = datetime(2025, 1, 15, 12, 0, tzinfo=UTC)


def _at(minutes: int) -> datetime:
    return BASE_TIME + timedelta(minutes=minutes)


@pytest.fixture
def repo() -> CommentRepository:
    return CommentRepository()


@pytest.fixture
async def thread(question, make_answer, make_comment):
    """Top-level comments on a post and an answer, with a few replies."""
    answer = await make_answer(id="answer-1", post_id=question.id)

    await make_comment(id="comment-2", post_id=question.id, created_at=_at(2))
    await make_comment(id="comment-1", post_id=question.id, created_at=_at(1))
    await make_comment(id="comment-3b", post_id=question.id, created_at=_at(3))
    await make_comment(id="comment-3a", post_id=question.id, created_at=_at(3))

    await make_comment(
        id="reply-1b", post_id=question.id, parent_id="comment-1", created_at=_at(6)
    )
    await make_comment(
        id="reply-1a", post_id=question.id, parent_id="comment-1", created_at=_at(5)
    )
    await make_comment(
        id="reply-2a", post_id=question.id, parent_id="comment-2", created_at=_at(7)
    )

    await make_comment(id="answer-comment-1", answer_id=answer.id, created_at=_at(4))
    await make_comment(
        id="answer-reply-1",
        answer_id=answer.id,
        parent_id="answer-comment-1",
        created_at=_at(8),
    )
    return question, answer


async def test_post_thread_is_oldest_first_without_replies(db_session, repo, thread):
    question, _ = thread

    comments = await repo.list_all(db_session, repo.post_thread_statement(question.id))

    assert [c.id for c in comments] == ["comment-1", "comment-2", "comment-3a", "comment-3b"]


async def test_answer_thread_only_has_answer_comments(db_session, repo, thread):
    _, answer = thread

    comments = await repo.list_all(db_session, repo.answer_thread_statement(answer.id))

    assert [c.id for c in comments] == ["answer-comment-1"]


async def test_replies_statement(db_session, repo, thread):
    replies = await repo.list_all(db_session, repo.replies_statement("comment-1"))

    assert [c.id for c in replies] == ["reply-1a", "reply-1b"]
    assert all(reply.parent_id == "comment-1" for reply in replies)


async def test_thread_cursor_walk(db_session, repo, thread):
    question, _ = thread
    statement = repo.post_thread_statement(question.id)

    first = await repo.list_thread(db_session, statement, ListRequest(limit=2))
    second = await repo.list_thread(
        db_session, statement, ListRequest(limit=2, cursor=first.next_cursor)
    )

    assert [c.id for c in first.items] == ["comment-1", "comment-2"]
    assert first.total == 4
    assert second.mode == PaginationMode.CURSOR
    assert [c.id for c in second.items] == ["comment-3a", "comment-3b"]
    assert second.has_more is False


class TestRepliesByParent:
    """Batch reply loading for embedding."""

    async def test_groups_replies_in_order(self, db_session, repo, thread):
        grouped = await repo.replies_by_parent(
            db_session, ["comment-1", "comment-2", "comment-3a"]
        )

        assert {parent: [r.id for r in replies] for parent, replies in grouped.items()} == {
            "comment-1": ["reply-1a", "reply-1b"],
            "comment-2": ["reply-2a"],
        }

    async def test_no_parents_skips_query(self, db_session, repo):
        assert await repo.replies_by_parent(db_session, []) == {}

    async def test_unknown_parents(self, db_session, repo, thread):
        assert await repo.replies_by_parent(db_session, ["missing"]) == {}
