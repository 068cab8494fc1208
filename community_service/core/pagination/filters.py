"""Cursor filter for SQLAlchemy queries.

The CursorFilter implements the seek method of keyset pagination:
- Instead of OFFSET, WHERE conditions seek directly past the cursor position
- Cost does not grow with the page number
- Results stay stable while rows are inserted between requests

How it works:
    For ORDER BY is_adopted DESC, likes DESC, created_at DESC, id DESC with
    the cursor at (a, l, t, i):

    WHERE is_adopted < a
       OR (is_adopted = a AND likes < l)
       OR (is_adopted = a AND likes = l AND created_at < t)
       OR (is_adopted = a AND likes = l AND created_at = t AND id < i)

One extra row beyond the page size is requested, so the caller can tell
whether another page exists without a count query.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from community_service.core.database.filters import StatementFilter

if TYPE_CHECKING:
    from sqlalchemy import Select

    from community_service.core.pagination.cursor import CursorData
    from community_service.core.pagination.keyset import Keyset


class CursorFilter(StatementFilter):
    """Apply keyset ordering, the seek predicate and an overfetch limit.

    Example:
        stmt = select(Answer).where(Answer.post_id == post_id)
        stmt = CursorFilter(ANSWER_KEYSET, cursor, limit=10).apply(stmt)
        rows = (await session.execute(stmt)).scalars().all()

        has_more = len(rows) > 10

    Attributes:
        keyset: Ordering and seek definition
        cursor: Decoded cursor (None for the first page)
        limit: Page size; the query fetches ``limit + 1`` rows
    """

    def __init__(
        self,
        keyset: Keyset,
        cursor: CursorData | None,
        *,
        limit: int,
    ) -> None:
        self.keyset = keyset
        self.cursor = cursor
        self.limit = limit

    def apply(self, statement: Select[Any]) -> Select[Any]:
        """Apply cursor pagination to statement."""
        statement = self.keyset.apply_ordering(statement)
        if self.cursor is not None:
            statement = statement.where(self.keyset.seek_predicate(self.cursor))
        return statement.limit(self.limit + 1)


__all__ = ["CursorFilter"]
