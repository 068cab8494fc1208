"""SQLAlchemy models for the comments feature."""

from __future__ import annotations

from sqlalchemy import CheckConstraint, ForeignKey, Index, Integer, String, Text, text
from sqlalchemy.orm import Mapped, mapped_column

from community_service.core.database import TimestampedBase


class Comment(TimestampedBase):
    """Comment on a post or on an answer.

    Top-level comments have no ``parent_id``. A reply points at the comment
    it answers through ``parent_id`` and carries the same ``post_id`` or
    ``answer_id`` as its parent.
    """

    __tablename__ = "comments"

    post_id: Mapped[str | None] = mapped_column(
        ForeignKey("posts.id", ondelete="CASCADE"),
        nullable=True,
        comment="Post the thread belongs to",
    )
    answer_id: Mapped[str | None] = mapped_column(
        ForeignKey("answers.id", ondelete="CASCADE"),
        nullable=True,
        comment="Answer the thread belongs to",
    )
    parent_id: Mapped[str | None] = mapped_column(
        ForeignKey("comments.id", ondelete="CASCADE"),
        nullable=True,
        comment="Comment this one replies to (NULL for top-level comments)",
    )
    author_id: Mapped[str] = mapped_column(String(36), nullable=False, index=True)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    likes: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=0,
        server_default=text("0"),
    )

    __table_args__ = (
        CheckConstraint(
            "post_id IS NOT NULL OR answer_id IS NOT NULL",
            name="has_target",
        ),
        Index("ix_comments_post_listing", "post_id", "parent_id", "created_at", "id"),
        Index("ix_comments_answer_listing", "answer_id", "parent_id", "created_at", "id"),
        Index("ix_comments_replies", "parent_id", "created_at", "id"),
    )

    def __repr__(self) -> str:
        """Return comment summary for debugging."""
        return f"<Comment(id={self.id}, parent_id={self.parent_id})>"
