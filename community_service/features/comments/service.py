"""Service layer for the comments feature."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from community_service.core.pagination import ListResponse, PageAssembler
from community_service.core.repositories.post import PostRepository, get_post_repository
from community_service.features.answers.repository import (
    AnswerRepository,
    get_answer_repository,
)
from community_service.features.comments.repository import (
    CommentRepository,
    get_comment_repository,
)
from community_service.features.comments.schemas import CommentResponse
from community_service.infra.logging import get_lazy_logger

if TYPE_CHECKING:
    from collections.abc import Sequence

    from sqlalchemy import Select
    from sqlalchemy.ext.asyncio import AsyncSession

    from community_service.core.pagination import ListRequest
    from community_service.features.comments.models import Comment


logger = logging.getLogger(__name__)
lazy_logger = get_lazy_logger(__name__)


class CommentService:
    """Service for listing comment threads.

    Handles:
    - Resolving the parent (post, answer or comment) before listing
    - Paging top-level comments or replies through the comment keyset
    - Embedding each listed comment's direct replies
    """

    def __init__(
        self,
        session: AsyncSession,
        repo: CommentRepository | None = None,
        posts: PostRepository | None = None,
        answers: AnswerRepository | None = None,
    ) -> None:
        self._session = session
        self._repo = repo or get_comment_repository()
        self._posts = posts or get_post_repository()
        self._answers = answers or get_answer_repository()

    async def list_post_comments(
        self,
        post_id: str,
        request: ListRequest,
    ) -> ListResponse[CommentResponse]:
        """List top-level comments on a post.

        Raises:
            NotFoundError: If the post doesn't exist
        """
        await self._posts.get_or_raise(self._session, post_id)
        return await self._list(self._repo.post_thread_statement(post_id), request)

    async def list_answer_comments(
        self,
        answer_id: str,
        request: ListRequest,
    ) -> ListResponse[CommentResponse]:
        """List top-level comments on an answer.

        Raises:
            NotFoundError: If the answer doesn't exist
        """
        await self._answers.get_or_raise(self._session, answer_id)
        return await self._list(self._repo.answer_thread_statement(answer_id), request)

    async def list_replies(
        self,
        comment_id: str,
        request: ListRequest,
    ) -> ListResponse[CommentResponse]:
        """List direct replies to a comment.

        Raises:
            NotFoundError: If the comment doesn't exist
        """
        await self._repo.get_or_raise(self._session, comment_id)
        return await self._list(self._repo.replies_statement(comment_id), request)

    async def _list(
        self,
        statement: Select[tuple[Comment]],
        request: ListRequest,
    ) -> ListResponse[CommentResponse]:
        if not request.is_paginated:
            comments = await self._repo.list_all(self._session, statement)
            return PageAssembler.unpaginated(await self._with_replies(comments))

        window = await self._repo.list_thread(self._session, statement, request)
        items = await self._with_replies(window.items)

        lazy_logger.debug(
            lambda: f"service.list_comments -> {len(items)} comments ({window.mode})"
        )
        return PageAssembler.assemble(items, window)

    async def _with_replies(self, comments: Sequence[Comment]) -> list[CommentResponse]:
        replies = await self._repo.replies_by_parent(
            self._session, [comment.id for comment in comments]
        )
        return [
            CommentResponse.from_comment(comment, replies.get(comment.id, ()))
            for comment in comments
        ]
