"""RFC 7807 Problem Details schemas for error responses.

See: https://datatracker.ietf.org/doc/html/rfc7807
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ProblemDetail(BaseModel):
    """RFC 7807 Problem Details for HTTP APIs.

    Example:
        return JSONResponse(
            status_code=404,
            content=ProblemDetail(
                type="not-found",
                title="Not Found",
                status=404,
                detail="Post not found with id='abc123'",
                instance="/api/v1/posts/abc123/answers",
            ).model_dump(exclude_none=True),
        )
    """

    type: str = Field(
        default="about:blank",
        min_length=1,
        max_length=200,
        description="URI reference identifying the problem type",
    )
    title: str = Field(
        min_length=1, max_length=200, description="Short, human-readable summary of the problem"
    )
    status: int = Field(ge=100, le=599, description="HTTP status code")
    detail: str | None = Field(
        default=None,
        max_length=2000,
        description="Human-readable explanation specific to this occurrence",
    )
    instance: str | None = Field(
        default=None,
        max_length=500,
        description="URI reference identifying the specific occurrence",
    )

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "type": "invalid-post-type",
                "title": "Bad Request",
                "status": 400,
                "detail": "Answers can only be listed for question posts",
                "instance": "/api/v1/posts/abc123/answers",
            }
        },
        str_strip_whitespace=True,
    )


class ValidationError(BaseModel):
    """A single field-level validation failure."""

    field: str = Field(description="Dotted path to the offending field")
    message: str = Field(description="Validation error message")
    type: str = Field(description="Validation error type")
    value: Any | None = Field(default=None, description="Rejected input value")


class ValidationProblemDetail(ProblemDetail):
    """Problem detail carrying field-level validation errors."""

    errors: list[ValidationError] = Field(
        default_factory=list, description="Field-level validation errors"
    )


__all__ = [
    "ProblemDetail",
    "ValidationError",
    "ValidationProblemDetail",
]
