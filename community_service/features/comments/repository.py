"""Repository for the comments feature."""

from __future__ import annotations

from collections import defaultdict
from typing import TYPE_CHECKING

from sqlalchemy import select

from community_service.core.database.filters import CollectionFilter
from community_service.core.database.repository import BaseRepository
from community_service.core.pagination import Keyset, SortKey
from community_service.features.comments.models import Comment

if TYPE_CHECKING:
    from collections.abc import Sequence

    from sqlalchemy import Select
    from sqlalchemy.ext.asyncio import AsyncSession

    from community_service.core.pagination import ListRequest, Window

COMMENT_KEYSET = Keyset(
    SortKey("createdAt", Comment.created_at, "asc"),
    SortKey("id", Comment.id, "asc"),
)
"""Oldest first; used for top-level comments and for replies alike."""


class CommentRepository(BaseRepository[Comment]):
    """Repository for Comment model.

    Inherits from BaseRepository:
        - get(session, id) -> Comment | None
        - get_or_raise(session, id) -> Comment
        - paginate(session, statement, request) -> Window[Comment]
        - list_all(session, statement) -> list[Comment]

    The ``*_statement`` helpers build the filtered selects; listing goes
    through ``paginate`` or ``list_all`` so every thread shares one ordering.
    """

    def __init__(self) -> None:
        """Initialize with Comment model and the comment keyset."""
        super().__init__(Comment, keyset=COMMENT_KEYSET, resource="comments")

    @staticmethod
    def post_thread_statement(post_id: str) -> Select[tuple[Comment]]:
        """Top-level comments on a post."""
        return select(Comment).where(Comment.post_id == post_id, Comment.parent_id.is_(None))

    @staticmethod
    def answer_thread_statement(answer_id: str) -> Select[tuple[Comment]]:
        """Top-level comments on an answer."""
        return select(Comment).where(
            Comment.answer_id == answer_id, Comment.parent_id.is_(None)
        )

    @staticmethod
    def replies_statement(comment_id: str) -> Select[tuple[Comment]]:
        """Direct replies to a comment."""
        return select(Comment).where(Comment.parent_id == comment_id)

    async def list_thread(
        self,
        session: AsyncSession,
        statement: Select[tuple[Comment]],
        request: ListRequest,
    ) -> Window[Comment]:
        """Return one page of ``statement`` in comment order."""
        window = await self.paginate(session, statement, request)

        self._lazy.debug(
            lambda: f"db.list_thread -> {len(window.items)} items, has_more={window.has_more}"
        )
        return window

    async def replies_by_parent(
        self,
        session: AsyncSession,
        parent_ids: Sequence[str],
    ) -> dict[str, list[Comment]]:
        """Load the direct replies of several comments in one query.

        Args:
            session: Database session
            parent_ids: Comments whose replies to load

        Returns:
            Mapping of parent id to its replies, oldest first. Parents
            without replies are absent.
        """
        if not parent_ids:
            return {}

        stmt = CollectionFilter(Comment.parent_id, parent_ids).apply(select(Comment))
        stmt = COMMENT_KEYSET.apply_ordering(stmt)
        result = await session.execute(stmt)

        grouped: dict[str, list[Comment]] = defaultdict(list)
        for reply in result.scalars():
            if reply.parent_id is not None:
                grouped[reply.parent_id].append(reply)

        self._lazy.debug(
            lambda: f"db.replies_by_parent({len(parent_ids)} parents) -> "
            f"{sum(len(v) for v in grouped.values())} replies"
        )
        return dict(grouped)


# Factory function for dependency injection
_comment_repository: CommentRepository | None = None


def get_comment_repository() -> CommentRepository:
    """Get CommentRepository instance."""
    global _comment_repository
    if _comment_repository is None:
        _comment_repository = CommentRepository()
    return _comment_repository
