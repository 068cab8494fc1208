"""Minimal generic repository for SQLAlchemy models.

Provides lookups and keyset-paginated listing with explicit session passing.
For complex queries, use the session directly - this is a convenience, not a cage.

Example:
    from community_service.core.database import BaseRepository

    class AnswerRepository(BaseRepository[Answer]):
        def __init__(self) -> None:
            super().__init__(Answer, keyset=ANSWER_KEYSET, resource="answers")

        async def list_for_post(self, session, post_id, request):
            stmt = select(Answer).where(Answer.post_id == post_id)
            return await self.paginate(session, stmt, request)
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, cast

from sqlalchemy import inspect as sa_inspect
from sqlalchemy import select

from community_service.core.database.exceptions import NotFoundError, RepositoryError
from community_service.infra.logging import get_lazy_logger

if TYPE_CHECKING:
    from collections.abc import Iterable

    from sqlalchemy import Select
    from sqlalchemy.ext.asyncio import AsyncSession
    from sqlalchemy.orm import InstrumentedAttribute

    from community_service.core.pagination.keyset import Keyset
    from community_service.core.pagination.mode import ListRequest
    from community_service.core.pagination.paginator import Paginator
    from community_service.core.pagination.windower import Window


class BaseRepository[T]:
    """Minimal generic repository.

    Provides:
        - get(session, id) -> T | None
        - get_or_raise(session, id) -> T (raises NotFoundError)
        - create(session, instance) -> T
        - paginate(session, statement, request) -> Window[T]
        - list_all(session, statement) -> list[T]

    Session is always explicit - no hidden state. Listing methods need a
    keyset; repositories without one only support lookups.
    """

    __slots__ = ("_lazy", "_logger", "model", "paginator")

    def __init__(
        self,
        model: type[T],
        *,
        keyset: Keyset | None = None,
        resource: str | None = None,
    ) -> None:
        """Initialize repository with model class.

        Args:
            model: SQLAlchemy model class (e.g., Post, Answer)
            keyset: Ordering used by paginate() and list_all()
            resource: Label for pagination logs and metrics (defaults to table name)
        """
        self.model = model
        # Standard logger for INFO/WARNING/ERROR
        self._logger = logging.getLogger(f"repository.{model.__name__}")
        # Lazy logger for DEBUG (zero overhead when DEBUG disabled)
        self._lazy = get_lazy_logger(f"repository.{model.__name__}")
        self.paginator: Paginator[T] | None = None
        if keyset is not None:
            from community_service.core.pagination.paginator import Paginator

            label = resource or getattr(model, "__tablename__", model.__name__.lower())
            self.paginator = Paginator(keyset, resource=label)

    async def get(
        self,
        session: AsyncSession,
        id: Any,  # noqa: A002
        *,
        options: Iterable[Any] | None = None,
    ) -> T | None:
        """Get entity by primary key.

        Args:
            session: Database session
            id: Primary key value
            options: SQLAlchemy loader options (e.g., selectinload)

        Returns:
            Entity if found, None otherwise
        """
        if options:
            stmt = select(self.model).where(self._pk_attr() == id).options(*options)
            result = await session.execute(stmt)
            instance = result.scalar_one_or_none()
        else:
            instance = await session.get(self.model, id)

        self._lazy.debug(
            lambda: f"db.get: {self.model.__name__}({id}) -> {'found' if instance else 'not found'}"
        )
        return instance

    async def get_or_raise(
        self,
        session: AsyncSession,
        id: Any,  # noqa: A002
        *,
        options: Iterable[Any] | None = None,
    ) -> T:
        """Get entity by primary key or raise NotFoundError.

        Raises:
            NotFoundError: If entity doesn't exist
        """
        instance = await self.get(session, id, options=options)
        if instance is None:
            self._logger.info(
                "Entity not found",
                extra={
                    "entity": self.model.__name__,
                    "id": str(id),
                    "operation": "db.get_or_raise",
                },
            )
            raise NotFoundError(self.model.__name__, {"id": id})
        return instance

    async def create(self, session: AsyncSession, instance: T) -> T:
        """Persist a new entity.

        Adds to session, flushes to get generated values (like id),
        and refreshes to ensure instance is up-to-date.
        """
        session.add(instance)
        await session.flush()
        await session.refresh(instance)

        entity_id = getattr(instance, "id", None)
        self._lazy.debug(lambda: f"db.create: {self.model.__name__}(id={entity_id})")
        return instance

    async def paginate(
        self,
        session: AsyncSession,
        statement: Select[Any],
        request: ListRequest,
    ) -> Window[T]:
        """Return one keyset-ordered page of ``statement``.

        Raises:
            RepositoryError: If the repository has no keyset
        """
        return await self._require_paginator().paginate(session, statement, request)

    async def list_all(self, session: AsyncSession, statement: Select[Any]) -> list[T]:
        """Return every row of ``statement`` in keyset order."""
        return await self._require_paginator().fetch_all(session, statement)

    def _require_paginator(self) -> Paginator[T]:
        if self.paginator is None:
            raise RepositoryError(
                "Repository has no keyset configured", {"model": self.model.__name__}
            )
        return self.paginator

    def _pk_attr(self) -> InstrumentedAttribute[Any]:
        """Get primary key attribute from the model's mapper."""
        mapper = sa_inspect(self.model)
        pk_column = mapper.primary_key[0]
        return cast("InstrumentedAttribute[Any]", getattr(self.model, pk_column.key))


__all__ = ["BaseRepository"]
