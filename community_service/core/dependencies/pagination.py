"""Pagination dependencies for FastAPI routes.

Query parameters are declared as plain strings and normalized by
``ListRequest.from_query``: a non-numeric ``page`` or ``limit`` falls back to
the default and out-of-range values are clamped, so pagination parameters
never produce a 422.

Usage:
    from community_service.core.dependencies.pagination import AnswersListRequest

    @router.get("/posts/{post_id}/answers")
    async def list_answers(post_id: str, request: AnswersListRequest):
        ...
"""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, Query

from community_service.core.pagination import ListRequest
from community_service.core.settings import get_pagination_settings

PageParam = Annotated[
    str | None,
    Query(description="1-based page number for offset pagination (default 1)"),
]
LimitParam = Annotated[
    str | None,
    Query(description="Items per page, clamped to the configured maximum"),
]
CursorParam = Annotated[
    str | None,
    Query(description="nextCursor from a previous page; switches to cursor pagination"),
]


def answers_list_request(
    page: PageParam = None,
    limit: LimitParam = None,
    cursor: CursorParam = None,
) -> ListRequest:
    """Build the list request for answer listings (default limit 10)."""
    settings = get_pagination_settings()
    return ListRequest.from_query(
        page=page,
        limit=limit,
        cursor=cursor,
        default_limit=settings.answers_default_limit,
        settings=settings,
    )


def comments_list_request(
    page: PageParam = None,
    limit: LimitParam = None,
    cursor: CursorParam = None,
) -> ListRequest:
    """Build the list request for comment and reply listings (default limit 20)."""
    settings = get_pagination_settings()
    return ListRequest.from_query(
        page=page,
        limit=limit,
        cursor=cursor,
        default_limit=settings.comments_default_limit,
        settings=settings,
    )


# Type aliases for cleaner route signatures
AnswersListRequest = Annotated[ListRequest, Depends(answers_list_request)]
CommentsListRequest = Annotated[ListRequest, Depends(comments_list_request)]
