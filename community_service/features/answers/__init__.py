"""Answers feature: keyset-paginated answers to question posts."""

from __future__ import annotations

from .models import Answer
from .repository import ANSWER_KEYSET, AnswerRepository, get_answer_repository
from .schemas import AnswerResponse
from .service import AnswerService

__all__ = [
    "ANSWER_KEYSET",
    "Answer",
    "AnswerRepository",
    "AnswerResponse",
    "AnswerService",
    "get_answer_repository",
]
