"""Base schema classes for API responses."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CustomBase(BaseModel):
    """Base model with common configuration for all schemas.

    Example:
        class PostSummary(CustomBase):
            id: str
            title: str
            created_at: datetime
    """

    model_config = ConfigDict(
        # Allow creation from ORM models (SQLAlchemy)
        from_attributes=True,
        # Validate on assignment (not just initialization)
        validate_assignment=True,
        # Use enum values instead of names
        use_enum_values=True,
        # Populate models by field name (not alias)
        populate_by_name=True,
        # Ignore extra fields for security (silently drop unexpected data)
        extra="ignore",
        # Strip leading/trailing whitespace from strings
        str_strip_whitespace=True,
    )


class CamelModel(CustomBase):
    """Schema serialized with camelCase keys.

    Fields are declared in snake_case and exposed as camelCase through the
    alias generator; FastAPI serializes response models by alias.

    Example:
        class AnswerResponse(CamelModel):
            post_id: str      # -> "postId"
            is_adopted: bool  # -> "isAdopted"
    """

    model_config = ConfigDict(
        from_attributes=True,
        populate_by_name=True,
        alias_generator=to_camel,
        extra="ignore",
    )


__all__ = [
    "CamelModel",
    "CustomBase",
]
