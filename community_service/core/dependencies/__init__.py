"""FastAPI dependencies for route handlers.

Re-exports the dependencies features use, so routes import from one place.
"""

from __future__ import annotations

from .database import get_db_session
from .pagination import (
    AnswersListRequest,
    CommentsListRequest,
    answers_list_request,
    comments_list_request,
)

__all__ = [
    "AnswersListRequest",
    "CommentsListRequest",
    "answers_list_request",
    "comments_list_request",
    "get_db_session",
]
