"""Pydantic schemas for the comments feature."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime
from typing import TYPE_CHECKING

from pydantic import Field

from community_service.core.schemas.base import CamelModel

if TYPE_CHECKING:
    from community_service.features.comments.models import Comment


class CommentResponse(CamelModel):
    """Comment as returned by list endpoints, with its direct replies."""

    id: str
    post_id: str | None = None
    answer_id: str | None = None
    parent_id: str | None = None
    author_id: str
    content: str
    likes: int = Field(default=0, ge=0)
    created_at: datetime
    updated_at: datetime
    replies: list[CommentResponse] = Field(
        default_factory=list,
        description="Direct replies, oldest first",
    )

    @classmethod
    def from_comment(
        cls,
        comment: Comment,
        replies: Sequence[Comment] = (),
    ) -> CommentResponse:
        """Build a response with every field set explicitly.

        Responses are serialized with ``exclude_unset``, so optional fields
        are passed even when they are ``None``.
        """
        return cls(
            id=comment.id,
            post_id=comment.post_id,
            answer_id=comment.answer_id,
            parent_id=comment.parent_id,
            author_id=comment.author_id,
            content=comment.content,
            likes=comment.likes,
            created_at=comment.created_at,
            updated_at=comment.updated_at,
            replies=[cls.from_comment(reply) for reply in replies],
        )
