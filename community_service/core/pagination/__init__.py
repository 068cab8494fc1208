"""Keyset (cursor) pagination.

Components, leaf first:
- CursorCodec / CursorData: opaque continuation tokens
- ListRequest / select_mode: offset vs cursor decision
- SortKey / Keyset / CursorFilter: ordering and "strictly after" predicate
- ResultWindower / Window: overfetch, trim, has_more, next cursor
- PageAssembler / ListResponse: response envelope
- Paginator: the above composed for one keyset

Usage:
    from community_service.core.pagination import Keyset, Paginator, SortKey

    COMMENT_KEYSET = Keyset(
        SortKey("createdAt", Comment.created_at, "asc"),
        SortKey("id", Comment.id, "asc"),
    )
    paginator = Paginator[Comment](COMMENT_KEYSET, resource="comments")
"""

from community_service.core.pagination.assembler import PageAssembler
from community_service.core.pagination.cursor import CursorCodec, CursorData
from community_service.core.pagination.filters import CursorFilter
from community_service.core.pagination.keyset import Keyset, SortKey
from community_service.core.pagination.mode import ListRequest, PaginationMode, select_mode
from community_service.core.pagination.paginator import Paginator
from community_service.core.pagination.schemas import ListResponse, PaginationMeta
from community_service.core.pagination.windower import ResultWindower, Window

__all__ = [
    "CursorCodec",
    "CursorData",
    "CursorFilter",
    "Keyset",
    "ListRequest",
    "ListResponse",
    "PageAssembler",
    "PaginationMeta",
    "PaginationMode",
    "Paginator",
    "ResultWindower",
    "SortKey",
    "Window",
    "select_mode",
]
