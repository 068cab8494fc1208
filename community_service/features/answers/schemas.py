"""Pydantic schemas for the answers feature."""

from __future__ import annotations

from datetime import datetime

from pydantic import Field

from community_service.core.schemas.base import CamelModel


class AnswerResponse(CamelModel):
    """Answer as returned by list endpoints."""

    id: str
    post_id: str
    author_id: str
    content: str
    likes: int = Field(ge=0, description="Like count")
    is_adopted: bool = Field(description="Accepted by the question author")
    created_at: datetime
    updated_at: datetime
