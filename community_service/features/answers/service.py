"""Service layer for the answers feature."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from community_service.core.exceptions import BadRequestException
from community_service.core.pagination import ListResponse, PageAssembler
from community_service.core.repositories.post import PostRepository, get_post_repository
from community_service.features.answers.repository import (
    AnswerRepository,
    get_answer_repository,
)
from community_service.features.answers.schemas import AnswerResponse
from community_service.infra.logging import get_lazy_logger

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession

    from community_service.core.pagination import ListRequest


# Standard logger for INFO/WARNING/ERROR
logger = logging.getLogger(__name__)
# Lazy logger for DEBUG (zero overhead when DEBUG disabled)
lazy_logger = get_lazy_logger(__name__)


class AnswerService:
    """Service for listing the answers of a question."""

    def __init__(
        self,
        session: AsyncSession,
        repo: AnswerRepository | None = None,
        posts: PostRepository | None = None,
    ) -> None:
        """Initialize the answer service.

        Args:
            session: Database session for operations
            repo: Answer repository (optional, uses default if not provided)
            posts: Post repository used to resolve the question
        """
        self._session = session
        self._repo = repo or get_answer_repository()
        self._posts = posts or get_post_repository()

    async def list_answers(
        self,
        post_id: str,
        request: ListRequest,
    ) -> ListResponse[AnswerResponse]:
        """List the answers of a question.

        Args:
            post_id: Question identifier
            request: Normalized pagination parameters

        Returns:
            List envelope; without a pagination block when the request
            asked for no pagination.

        Raises:
            NotFoundError: If the post doesn't exist
            BadRequestException: If the post is not a question
        """
        post = await self._posts.get_or_raise(self._session, post_id)
        if not post.is_question:
            logger.info(
                "Answers requested for non-question post",
                extra={"post_id": post_id, "post_type": post.type},
            )
            raise BadRequestException(
                detail="Answers can only be listed for question posts",
                type="invalid-post-type",
                extra={"post_id": post_id, "post_type": post.type},
            )

        if not request.is_paginated:
            answers = await self._repo.list_all_for_post(self._session, post_id)
            lazy_logger.debug(lambda: f"service.list_answers({post_id}) -> {len(answers)} (all)")
            return PageAssembler.unpaginated(
                [AnswerResponse.model_validate(answer) for answer in answers]
            )

        window = await self._repo.list_for_post(self._session, post_id, request)
        lazy_logger.debug(
            lambda: f"service.list_answers({post_id}) -> {len(window.items)} ({window.mode})"
        )
        return PageAssembler.assemble(
            [AnswerResponse.model_validate(answer) for answer in window.items],
            window,
        )
