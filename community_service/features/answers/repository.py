"""Repository for the answers feature."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import select

from community_service.core.database.repository import BaseRepository
from community_service.core.pagination import Keyset, SortKey
from community_service.features.answers.models import Answer

if TYPE_CHECKING:
    from sqlalchemy import Select
    from sqlalchemy.ext.asyncio import AsyncSession

    from community_service.core.pagination import ListRequest, Window

ANSWER_KEYSET = Keyset(
    SortKey("isAdopted", Answer.is_adopted, "desc"),
    SortKey("likes", Answer.likes, "desc"),
    SortKey("createdAt", Answer.created_at, "desc"),
    SortKey("id", Answer.id, "desc"),
)
"""Adopted answers first, then most liked, then newest."""


class AnswerRepository(BaseRepository[Answer]):
    """Repository for Answer model.

    Inherits from BaseRepository:
        - get(session, id) -> Answer | None
        - get_or_raise(session, id) -> Answer
        - paginate(session, statement, request) -> Window[Answer]
        - list_all(session, statement) -> list[Answer]

    Feature-specific methods below.
    """

    def __init__(self) -> None:
        """Initialize with Answer model and the answer keyset."""
        super().__init__(Answer, keyset=ANSWER_KEYSET, resource="answers")

    @staticmethod
    def for_post(post_id: str) -> Select[tuple[Answer]]:
        """Select the answers of one question, unordered."""
        return select(Answer).where(Answer.post_id == post_id)

    async def list_for_post(
        self,
        session: AsyncSession,
        post_id: str,
        request: ListRequest,
    ) -> Window[Answer]:
        """Return one page of a question's answers.

        Args:
            session: Database session
            post_id: Question identifier
            request: Normalized pagination parameters

        Returns:
            Window of answers in keyset order
        """
        window = await self.paginate(session, self.for_post(post_id), request)

        self._lazy.debug(
            lambda: f"db.list_for_post({post_id}) -> {len(window.items)} items, has_more={window.has_more}"
        )
        return window

    async def list_all_for_post(self, session: AsyncSession, post_id: str) -> list[Answer]:
        """Return every answer of a question in keyset order."""
        return await self.list_all(session, self.for_post(post_id))


# Factory function for dependency injection
_answer_repository: AnswerRepository | None = None


def get_answer_repository() -> AnswerRepository:
    """Get AnswerRepository instance.

    Usage in FastAPI routes:
        @router.get("/posts/{post_id}/answers")
        async def list_answers(
            post_id: str,
            session: AsyncSession = Depends(get_db_session),
            repo: AnswerRepository = Depends(get_answer_repository),
        ):
            ...
    """
    global _answer_repository
    if _answer_repository is None:
        _answer_repository = AnswerRepository()
    return _answer_repository
