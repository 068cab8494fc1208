"""Assemble list responses from windows."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from community_service.core.pagination.mode import PaginationMode
from community_service.core.pagination.schemas import ListResponse, PaginationMeta

if TYPE_CHECKING:
    from collections.abc import Sequence

    from community_service.core.pagination.windower import Window


class PageAssembler:
    """Merge serialized items with pagination metadata.

    Only the fields that apply to the window's mode are set on the metadata,
    so serializing with ``exclude_unset`` drops offset totals in cursor mode.
    """

    @staticmethod
    def meta(window: Window[Any]) -> PaginationMeta:
        fields: dict[str, Any] = {
            "page": window.page,
            "limit": window.limit,
            "next_cursor": window.next_cursor,
            "has_more": window.has_more,
            "pagination_mode": window.mode,
        }
        if window.mode == PaginationMode.OFFSET:
            fields["total"] = window.total
            fields["total_pages"] = window.total_pages
        return PaginationMeta(**fields)

    @classmethod
    def assemble[T](cls, items: Sequence[T], window: Window[Any]) -> ListResponse[T]:
        """Build the paginated envelope.

        Args:
            items: Serialized rows of the window, in window order.
            window: Window the items came from.

        Returns:
            ListResponse with a pagination block.
        """
        return ListResponse(success=True, data=list(items), pagination=cls.meta(window))

    @staticmethod
    def unpaginated[T](items: Sequence[T]) -> ListResponse[T]:
        """Build the envelope for a request that asked for no pagination."""
        return ListResponse(success=True, data=list(items))


__all__ = ["PageAssembler"]
