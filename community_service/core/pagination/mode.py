"""List request parsing and pagination mode selection.

A list endpoint runs in one of two modes:

| cursor param | decodes | mode                     |
|--------------|---------|--------------------------|
| absent       | n/a     | offset                   |
| present      | no      | offset (silent fallback) |
| present      | yes     | cursor                   |

A request with none of page, limit or cursor is not paginated at all and
returns the whole collection.
"""

from __future__ import annotations

import logging
import re
from enum import StrEnum
from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, Field

from community_service.infra.metrics import tracking

if TYPE_CHECKING:
    from community_service.core.pagination.cursor import CursorCodec, CursorData
    from community_service.core.settings.pagination import PaginationSettings

logger = logging.getLogger(__name__)

_LEADING_INT = re.compile(r"^\s*([+-]?)0*(\d+)")
_MAX_DIGITS = 18

# OFFSET is bound as a signed 64-bit value
_MAX_OFFSET = 2**63 - 1


class PaginationMode(StrEnum):
    """How a page was located."""

    OFFSET = "offset"
    CURSOR = "cursor"


class ListRequest(BaseModel):
    """Normalized pagination parameters for one list call.

    Attributes:
        page: 1-based page number, only used in offset mode.
        limit: Page size, already clamped to the configured bounds.
        cursor: Raw cursor string as sent by the client.
        is_paginated: Whether the client asked for pagination at all.
    """

    page: int = Field(default=1, ge=1, description="1-based page number (offset mode)")
    limit: int = Field(ge=1, description="Page size")
    cursor: str | None = Field(default=None, description="Opaque continuation token")
    is_paginated: bool = Field(default=True, description="False returns the full collection")

    model_config = ConfigDict(frozen=True)

    @classmethod
    def from_query(
        cls,
        *,
        page: str | None,
        limit: str | None,
        cursor: str | None,
        default_limit: int,
        settings: PaginationSettings,
    ) -> ListRequest:
        """Build a request from raw query-string values.

        Values are parsed leniently: a leading integer is used if present
        ("3", "3abc"), anything else falls back to the default. The results
        are then clamped, so a bad parameter never rejects the request.

        Args:
            page: Raw ``page`` parameter.
            limit: Raw ``limit`` parameter.
            cursor: Raw ``cursor`` parameter.
            default_limit: Endpoint-specific page size.
            settings: Pagination bounds.

        Returns:
            Normalized ListRequest.
        """
        max_page = _MAX_OFFSET // settings.max_limit + 1
        parsed_page = min(max(1, parse_int(page, 1)), max_page)
        parsed_limit = parse_int(limit, default_limit)
        parsed_limit = min(max(parsed_limit, settings.min_limit), settings.max_limit)

        return cls(
            page=parsed_page,
            limit=parsed_limit,
            cursor=cursor,
            is_paginated=any(param is not None for param in (page, limit, cursor)),
        )


def parse_int(raw: str | None, default: int) -> int:
    """Parse the leading integer of ``raw``, or return ``default``.

    Integers longer than 18 digits saturate at 10**18 so callers can clamp
    them instead of converting arbitrarily long digit strings.
    """
    if raw is None:
        return default
    match = _LEADING_INT.match(raw)
    if match is None:
        return default
    sign, digits = match.groups()
    value = int(digits) if len(digits) <= _MAX_DIGITS else 10**_MAX_DIGITS
    return -value if sign == "-" else value


def select_mode(
    request: ListRequest,
    codec: CursorCodec,
    *,
    resource: str = "unknown",
) -> tuple[PaginationMode, CursorData | None]:
    """Decide between offset and cursor mode for ``request``.

    An undecodable cursor is not an error: it is logged at DEBUG, counted,
    and the request proceeds in offset mode.

    Args:
        request: Normalized list request.
        codec: Codec bound to the listing's keyset.
        resource: Resource label for logs and metrics.

    Returns:
        The selected mode and, in cursor mode, the decoded cursor.
    """
    if request.cursor is None:
        return PaginationMode.OFFSET, None

    decoded = codec.decode(request.cursor)
    if decoded is None:
        logger.debug(
            "Invalid cursor, falling back to offset pagination",
            extra={"resource": resource, "cursor_length": len(request.cursor)},
        )
        tracking.track_cursor_fallback(resource)
        return PaginationMode.OFFSET, None

    return PaginationMode.CURSOR, decoded


__all__ = [
    "ListRequest",
    "PaginationMode",
    "parse_int",
    "select_mode",
]
