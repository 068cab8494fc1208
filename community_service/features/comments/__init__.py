"""Comments feature: keyset-paginated comment threads and replies."""

from __future__ import annotations

from .models import Comment
from .repository import COMMENT_KEYSET, CommentRepository, get_comment_repository
from .schemas import CommentResponse
from .service import CommentService

__all__ = [
    "COMMENT_KEYSET",
    "Comment",
    "CommentRepository",
    "CommentResponse",
    "CommentService",
    "get_comment_repository",
]
