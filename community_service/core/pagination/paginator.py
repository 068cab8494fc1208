"""Generic keyset paginator.

One Paginator per listing composes the codec, mode selection and windowing
for a keyset. Feature repositories own a Paginator and hand it a filtered
select; none of them build seek predicates or trim pages themselves.

Usage:
    paginator = Paginator[Answer](ANSWER_KEYSET, resource="answers")

    stmt = select(Answer).where(Answer.post_id == post_id)
    window = await paginator.paginate(session, stmt, request)
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from community_service.core.pagination.cursor import CursorCodec
from community_service.core.pagination.mode import ListRequest, PaginationMode, select_mode
from community_service.core.pagination.windower import ResultWindower, Window
from community_service.infra.logging import get_lazy_logger
from community_service.infra.metrics import tracking

if TYPE_CHECKING:
    from sqlalchemy import Select
    from sqlalchemy.ext.asyncio import AsyncSession

    from community_service.core.pagination.keyset import Keyset


class Paginator[Row]:
    """Keyset pagination engine for one row type.

    Instances are immutable and hold no per-request state, so a single
    instance is shared by every request for its listing.
    """

    __slots__ = ("_lazy", "codec", "keyset", "resource", "windower")

    def __init__(self, keyset: Keyset, *, resource: str) -> None:
        self.keyset = keyset
        self.resource = resource
        self.codec = CursorCodec(keyset)
        self.windower = ResultWindower(keyset, self.codec)
        self._lazy = get_lazy_logger(f"pagination.{resource}")

    async def paginate(
        self,
        session: AsyncSession,
        statement: Select[Any],
        request: ListRequest,
    ) -> Window[Row]:
        """Return one page of ``statement`` according to ``request``.

        Args:
            session: Active database session.
            statement: Filtered select of the rows to page through. Any
                ordering on it is replaced by the keyset ordering.
            request: Normalized pagination parameters.

        Returns:
            Window with the page's rows and continuation metadata.
        """
        mode, cursor = select_mode(request, self.codec, resource=self.resource)
        statement = statement.order_by(None)

        if mode == PaginationMode.CURSOR:
            window = await self.windower.window_cursor(
                session, statement, cursor, request.limit, page=request.page
            )
        else:
            window = await self.windower.window_offset(
                session, statement, request.page, request.limit
            )

        tracking.track_page(self.resource, mode.value, len(window.items))
        self._lazy.debug(
            lambda: (
                f"{self.resource}: mode={mode.value} page={window.page} limit={window.limit} "
                f"rows={len(window.items)} has_more={window.has_more} total={window.total}"
            )
        )
        return window

    async def fetch_all(self, session: AsyncSession, statement: Select[Any]) -> list[Row]:
        """Return every row of ``statement`` in keyset order, unpaginated."""
        stmt = self.keyset.apply_ordering(statement.order_by(None))
        rows = list((await session.execute(stmt)).scalars().all())

        tracking.track_page(self.resource, "all", len(rows))
        self._lazy.debug(lambda: f"{self.resource}: unpaginated rows={len(rows)}")
        return rows

    def __repr__(self) -> str:
        return f"Paginator(resource={self.resource!r}, keyset={self.keyset!r})"


__all__ = ["Paginator"]
