"""Post model: the root of every thread.

Posts are written by other services; this one only reads them to resolve the
parent of an answer or comment listing.
"""

from __future__ import annotations

from enum import StrEnum

from sqlalchemy import Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from community_service.core.database import TimestampedBase


class PostType(StrEnum):
    """Kind of post. Only questions accept answers."""

    QUESTION = "question"
    POST = "post"


class Post(TimestampedBase):
    """Post or question that answers and comments hang off."""

    __tablename__ = "posts"

    author_id: Mapped[str] = mapped_column(
        String(36),
        nullable=False,
        index=True,
        comment="Identifier of the author (owned by the user service)",
    )
    type: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default=PostType.POST.value,
        comment="'question' or 'post'",
    )
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False, default="")

    __table_args__ = (Index("ix_posts_type_created_at", "type", "created_at"),)

    @property
    def is_question(self) -> bool:
        return self.type == PostType.QUESTION

    def __repr__(self) -> str:
        return f"<Post(id={self.id}, type={self.type!r})>"
