"""Pagination settings for list endpoints.

Centralizes page size limits so every list endpoint clamps the same way.

Environment variables use PAGINATION_ prefix.
Example: PAGINATION_MAX_LIMIT=50, PAGINATION_ANSWERS_DEFAULT_LIMIT=10
"""

from __future__ import annotations

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class PaginationSettings(BaseSettings):
    """Pagination configuration settings.

    Attributes:
        min_limit: Smallest page size a request can ask for.
        max_limit: Largest page size a request can ask for (hard limit).
        answers_default_limit: Page size for answer listings when none is given.
        comments_default_limit: Page size for comment and reply listings when none is given.

    Example:
        settings = PaginationSettings()
        limit = min(max(requested_limit, settings.min_limit), settings.max_limit)
    """

    min_limit: int = Field(
        default=1,
        ge=1,
        le=1000,
        description="Minimum allowed page size",
    )
    max_limit: int = Field(
        default=50,
        ge=1,
        le=1000,
        description="Maximum allowed page size (hard limit)",
    )
    answers_default_limit: int = Field(
        default=10,
        ge=1,
        le=1000,
        description="Default page size for answers to a question",
    )
    comments_default_limit: int = Field(
        default=20,
        ge=1,
        le=1000,
        description="Default page size for comments and replies",
    )

    @model_validator(mode="after")
    def validate_bounds(self) -> PaginationSettings:
        """Ensure the limit bounds form a non-empty range."""
        if self.min_limit > self.max_limit:
            msg = "min_limit cannot be greater than max_limit"
            raise ValueError(msg)
        return self

    model_config = SettingsConfigDict(
        env_prefix="PAGINATION_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        frozen=True,
        extra="ignore",
    )
