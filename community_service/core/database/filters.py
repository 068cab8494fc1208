"""Query filtering utilities for SQLAlchemy.

These filters work directly with SQLAlchemy statements without hiding the
query. They're utility helpers, not an abstraction layer.

Usage:
    from sqlalchemy import select
    from community_service.core.database.filters import CollectionFilter, LimitOffset

    stmt = select(Comment)
    stmt = CollectionFilter(Comment.parent_id, parent_ids).apply(stmt)
    stmt = LimitOffset(limit=20, offset=0).apply(stmt)

    result = await session.execute(stmt)
    comments = result.scalars().all()
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import TYPE_CHECKING, Any

from sqlalchemy import Select, false

if TYPE_CHECKING:
    from sqlalchemy.orm import InstrumentedAttribute


class StatementFilter(ABC):
    """Base class for statement filters.

    All filters implement `apply()` which modifies a SQLAlchemy statement.
    """

    @abstractmethod
    def apply(self, statement: Select[Any]) -> Select[Any]:
        """Apply filter to statement.

        Args:
            statement: SQLAlchemy select statement

        Returns:
            Modified select statement
        """
        ...


class LimitOffset(StatementFilter):
    """Pagination using LIMIT and OFFSET.

    Example:
        # Page 2 of 10-item pages
        stmt = LimitOffset(limit=10, offset=10).apply(stmt)
    """

    def __init__(self, limit: int, offset: int = 0):
        self.limit = limit
        self.offset = offset

    def apply(self, statement: Select[Any]) -> Select[Any]:
        """Apply pagination to statement."""
        return statement.limit(self.limit).offset(self.offset)


class CollectionFilter(StatementFilter):
    """Filter by collection (WHERE ... IN).

    Example:
        stmt = CollectionFilter(Comment.parent_id, ["c1", "c2"]).apply(stmt)
        # WHERE comments.parent_id IN ('c1', 'c2')
    """

    def __init__(
        self,
        field: InstrumentedAttribute[Any],
        values: Sequence[Any],
    ):
        """Initialize collection filter.

        Args:
            field: Field to filter
            values: Collection of values to match
        """
        self.field = field
        self.values = list(values)

    def apply(self, statement: Select[Any]) -> Select[Any]:
        """Apply collection filter to statement."""
        if not self.values:
            # Empty collection - return statement that matches nothing
            return statement.where(false())
        return statement.where(self.field.in_(self.values))


__all__ = [
    "CollectionFilter",
    "LimitOffset",
    "StatementFilter",
]
