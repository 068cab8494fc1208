"""API router for the answers feature.

Endpoints:
    GET /posts/{post_id}/answers - List answers to a question

Answers are ordered adopted first, then by likes, then newest first.
Pagination is hybrid: send ``page``/``limit`` for offset paging, or the
``nextCursor`` of a previous page as ``cursor`` for keyset paging. With no
pagination parameter at all every answer is returned.

Example Usage:
    GET /posts/{id}/answers?limit=10
    GET /posts/{id}/answers?limit=10&cursor=eyJpc0Fkb3B0ZWQiOnRydWUsLi4ufQ
"""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession  # noqa: TC002

from community_service.core.database import NotFoundError
from community_service.core.dependencies.database import get_db_session
from community_service.core.dependencies.pagination import AnswersListRequest
from community_service.core.exceptions import NotFoundException
from community_service.core.pagination import ListResponse
from community_service.features.answers.schemas import AnswerResponse
from community_service.features.answers.service import AnswerService

router = APIRouter(tags=["answers"])


@router.get(
    "/posts/{post_id}/answers",
    response_model=ListResponse[AnswerResponse],
    response_model_exclude_unset=True,
    summary="List answers to a question",
    description=(
        "Return the answers of a question post, adopted answers first, then by "
        "likes and recency. Supports offset and cursor pagination."
    ),
    responses={
        400: {"description": "Post is not a question"},
        404: {"description": "Post not found"},
    },
)
async def list_answers(
    post_id: str,
    request: AnswersListRequest,
    session: Annotated[AsyncSession, Depends(get_db_session)],
) -> ListResponse[AnswerResponse]:
    """List answers for a question post."""
    service = AnswerService(session)
    try:
        return await service.list_answers(post_id, request)
    except NotFoundError as e:
        raise NotFoundException(
            detail=f"Post {post_id} not found",
            extra={"post_id": post_id},
        ) from e
