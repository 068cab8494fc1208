"""Pagination response schemas.

Every list endpoint returns the same envelope:

    {
        "success": true,
        "data": [...],
        "pagination": {
            "page": 1,
            "limit": 10,
            "total": 42,          # offset mode only
            "totalPages": 5,      # offset mode only
            "nextCursor": "...",  # null on the last page
            "hasMore": true,
            "paginationMode": "offset"
        }
    }

Routes are declared with ``response_model_exclude_unset=True``: fields the
assembler never sets (offset totals in cursor mode, the whole pagination
block for unpaginated requests) are left out of the JSON, while an
explicitly set ``nextCursor: null`` is kept.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from community_service.core.pagination.mode import PaginationMode
from community_service.core.schemas.base import CamelModel


class PaginationMeta(CamelModel):
    """Pagination metadata for one page.

    Attributes:
        page: Requested page number (meaningful in offset mode)
        limit: Page size actually applied
        total: Total matching rows (offset mode only)
        total_pages: Number of pages at this limit (offset mode only)
        next_cursor: Token for the page after this one
        has_more: Whether another page exists
        pagination_mode: How this page was located
    """

    page: int = Field(ge=1, description="Current page number")
    limit: int = Field(ge=1, description="Items per page")
    total: int | None = Field(default=None, ge=0, description="Total items (offset mode)")
    total_pages: int | None = Field(
        default=None, ge=0, description="Total pages (offset mode)"
    )
    next_cursor: str | None = Field(
        default=None,
        description="Cursor for fetching the next page",
    )
    has_more: bool = Field(description="Whether more items exist")
    pagination_mode: PaginationMode = Field(
        description="'offset' (drive next with page + 1) or 'cursor' (drive next with nextCursor)"
    )


class ListResponse[T](BaseModel):
    """List envelope with optional pagination metadata.

    Example:
        @router.get(
            "/posts/{post_id}/answers",
            response_model=ListResponse[AnswerResponse],
            response_model_exclude_unset=True,
        )
    """

    success: bool = Field(default=True, description="Operation success status")
    data: list[T] = Field(default_factory=list, description="Items on this page")
    pagination: PaginationMeta | None = Field(
        default=None,
        description="Pagination metadata, omitted for unpaginated requests",
    )


__all__ = [
    "ListResponse",
    "PaginationMeta",
]
