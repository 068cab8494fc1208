"""SQLAlchemy models for the answers feature."""

from __future__ import annotations

from sqlalchemy import Boolean, ForeignKey, Index, Integer, String, Text, text
from sqlalchemy.orm import Mapped, mapped_column

from community_service.core.database import TimestampedBase


class Answer(TimestampedBase):
    """Answer to a question post.

    Answers are listed adopted first, then by likes, then newest first.
    The composite index mirrors that ordering so a page is an index range
    scan.
    """

    __tablename__ = "answers"

    post_id: Mapped[str] = mapped_column(
        ForeignKey("posts.id", ondelete="CASCADE"),
        nullable=False,
        comment="Question this answer belongs to",
    )
    author_id: Mapped[str] = mapped_column(String(36), nullable=False, index=True)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    likes: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=0,
        server_default=text("0"),
        comment="Like count (denormalized)",
    )
    is_adopted: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
        server_default=text("false"),
        comment="Whether the question author accepted this answer",
    )

    __table_args__ = (
        Index(
            "ix_answers_post_listing",
            "post_id",
            "is_adopted",
            "likes",
            "created_at",
            "id",
        ),
    )

    def __repr__(self) -> str:
        """Return answer summary for debugging."""
        return f"<Answer(id={self.id}, post_id={self.post_id}, likes={self.likes})>"
