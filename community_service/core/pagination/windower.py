"""Result windowing: run the page query, trim it, derive the continuation.

Cursor mode fetches ``limit + 1`` rows; the extra row only signals that
another page exists and is never returned. Offset mode counts the filtered
statement and reports totals. In both modes the last returned row becomes
the next cursor when more rows follow, so a client can switch from offset
to cursor pagination after the first page.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from sqlalchemy import func, select

from community_service.core.database.filters import LimitOffset
from community_service.core.pagination.filters import CursorFilter
from community_service.core.pagination.mode import PaginationMode

if TYPE_CHECKING:
    from sqlalchemy import Select
    from sqlalchemy.ext.asyncio import AsyncSession

    from community_service.core.pagination.cursor import CursorCodec, CursorData
    from community_service.core.pagination.keyset import Keyset


@dataclass(frozen=True)
class Window[Row]:
    """One page of rows plus its continuation metadata.

    ``total`` and ``total_pages`` are only set in offset mode.
    """

    items: list[Row]
    mode: PaginationMode
    page: int
    limit: int
    has_more: bool
    next_cursor: str | None = None
    total: int | None = None
    total_pages: int | None = None


class ResultWindower:
    """Execute paged queries for one keyset.

    Data-source errors raised by the session propagate unchanged.
    """

    __slots__ = ("codec", "keyset")

    def __init__(self, keyset: Keyset, codec: CursorCodec) -> None:
        self.keyset = keyset
        self.codec = codec

    async def window_cursor(
        self,
        session: AsyncSession,
        statement: Select[Any],
        cursor: CursorData | None,
        limit: int,
        *,
        page: int = 1,
    ) -> Window[Any]:
        """Fetch the page strictly after ``cursor``.

        Args:
            session: Active database session.
            statement: Filtered, unordered select of the rows to page through.
            cursor: Decoded cursor, or None to start from the first row.
            limit: Page size.
            page: Page number echoed back to the client.

        Returns:
            Window in cursor mode.
        """
        stmt = CursorFilter(self.keyset, cursor, limit=limit).apply(statement)
        rows = list((await session.execute(stmt)).scalars().all())

        has_more = len(rows) > limit
        items = rows[:limit]
        return Window(
            items=items,
            mode=PaginationMode.CURSOR,
            page=page,
            limit=limit,
            has_more=has_more,
            next_cursor=self._next_cursor(items, has_more),
        )

    async def window_offset(
        self,
        session: AsyncSession,
        statement: Select[Any],
        page: int,
        limit: int,
    ) -> Window[Any]:
        """Fetch page ``page`` using LIMIT/OFFSET and report totals.

        Args:
            session: Active database session.
            statement: Filtered, unordered select of the rows to page through.
            page: 1-based page number.
            limit: Page size.

        Returns:
            Window in offset mode.
        """
        count_stmt = select(func.count()).select_from(statement.order_by(None).subquery())
        total = (await session.execute(count_stmt)).scalar_one()

        stmt = self.keyset.apply_ordering(statement)
        stmt = LimitOffset(limit, (page - 1) * limit).apply(stmt)
        items = list((await session.execute(stmt)).scalars().all())

        total_pages = math.ceil(total / limit) if total else 0
        has_more = page < total_pages
        return Window(
            items=items,
            mode=PaginationMode.OFFSET,
            page=page,
            limit=limit,
            has_more=has_more,
            next_cursor=self._next_cursor(items, has_more),
            total=total,
            total_pages=total_pages,
        )

    def _next_cursor(self, items: list[Any], has_more: bool) -> str | None:
        if not has_more or not items:
            return None
        return self.codec.from_row(items[-1])


__all__ = ["ResultWindower", "Window"]
