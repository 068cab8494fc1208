"""API router for the comments feature.

Endpoints:
    GET /posts/{post_id}/comments        - Top-level comments on a post
    GET /answers/{answer_id}/comments    - Top-level comments on an answer
    GET /comments/{comment_id}/replies   - Direct replies to a comment

Comments are listed oldest first and every listed comment embeds its direct
replies. Pagination works as for answers: ``page``/``limit`` for offset
paging, ``cursor`` for keyset paging, nothing for the full thread.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession  # noqa: TC002

from community_service.core.database import NotFoundError
from community_service.core.dependencies.database import get_db_session
from community_service.core.dependencies.pagination import CommentsListRequest
from community_service.core.exceptions import NotFoundException
from community_service.core.pagination import ListResponse
from community_service.features.comments.schemas import CommentResponse
from community_service.features.comments.service import CommentService

router = APIRouter(tags=["comments"])

SessionDep = Annotated[AsyncSession, Depends(get_db_session)]


@router.get(
    "/posts/{post_id}/comments",
    response_model=ListResponse[CommentResponse],
    response_model_exclude_unset=True,
    summary="List comments on a post",
    responses={404: {"description": "Post not found"}},
)
async def list_post_comments(
    post_id: str,
    request: CommentsListRequest,
    session: SessionDep,
) -> ListResponse[CommentResponse]:
    """List top-level comments on a post, oldest first."""
    service = CommentService(session)
    try:
        return await service.list_post_comments(post_id, request)
    except NotFoundError as e:
        raise NotFoundException(
            detail=f"Post {post_id} not found",
            extra={"post_id": post_id},
        ) from e


@router.get(
    "/answers/{answer_id}/comments",
    response_model=ListResponse[CommentResponse],
    response_model_exclude_unset=True,
    summary="List comments on an answer",
    responses={404: {"description": "Answer not found"}},
)
async def list_answer_comments(
    answer_id: str,
    request: CommentsListRequest,
    session: SessionDep,
) -> ListResponse[CommentResponse]:
    """List top-level comments on an answer, oldest first."""
    service = CommentService(session)
    try:
        return await service.list_answer_comments(answer_id, request)
    except NotFoundError as e:
        raise NotFoundException(
            detail=f"Answer {answer_id} not found",
            extra={"answer_id": answer_id},
        ) from e


@router.get(
    "/comments/{comment_id}/replies",
    response_model=ListResponse[CommentResponse],
    response_model_exclude_unset=True,
    summary="List replies to a comment",
    responses={404: {"description": "Comment not found"}},
)
async def list_replies(
    comment_id: str,
    request: CommentsListRequest,
    session: SessionDep,
) -> ListResponse[CommentResponse]:
    """List direct replies to a comment, oldest first."""
    service = CommentService(session)
    try:
        return await service.list_replies(comment_id, request)
    except NotFoundError as e:
        raise NotFoundException(
            detail=f"Comment {comment_id} not found",
            extra={"comment_id": comment_id},
        ) from e
