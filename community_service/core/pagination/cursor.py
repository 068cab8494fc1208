"""Cursor encoding and decoding for keyset pagination.

Cursors are opaque strings that encode the position of the last row a client
has seen. They hold that row's keyset values, allowing the next query to seek
directly past it.

The cursor format is:
1. Compact JSON object with one field per keyset key, in keyset order
2. Base64 URL-safe encoded, with ``=`` padding stripped

Example payload for the answer keyset:
    {"isAdopted":false,"likes":3,"createdAt":"2025-01-15T10:30:00+00:00","id":"7c1e..."}

Decoding never raises. Anything that isn't a well-formed cursor for the
codec's keyset decodes to ``None`` and the caller falls back to offset mode.
"""

from __future__ import annotations

import base64
import binascii
import json
import math
import re
from datetime import datetime
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, ConfigDict, Field

from community_service.core.database.types import to_utc

if TYPE_CHECKING:
    from community_service.core.pagination.keyset import Keyset, SortKey

_TOKEN_PATTERN = re.compile(r"[A-Za-z0-9_-]+={0,2}")

# Integer sort columns are bound as signed 64-bit values
_INT_MIN = -(2**63)
_INT_MAX = 2**63 - 1


class CursorData(BaseModel):
    """Decoded cursor position.

    Attributes:
        values: Keyset values of the last row seen, keyed by cursor field name.
            Timestamps are timezone-aware UTC datetimes.
    """

    values: dict[str, Any] = Field(
        description="Sort field values for seeking"
    )

    model_config = ConfigDict(frozen=True)


class CursorCodec:
    """Encode and decode cursors for one keyset.

    Usage:
        codec = CursorCodec(ANSWER_KEYSET)

        token = codec.from_row(last_answer)
        data = codec.decode(token)  # CursorData or None
    """

    __slots__ = ("keyset",)

    def __init__(self, keyset: Keyset) -> None:
        self.keyset = keyset

    def encode(self, payload: CursorData) -> str:
        """Encode cursor data to an opaque URL-safe string.

        Args:
            payload: Cursor data holding a value for every keyset field.

        Returns:
            Base64url-encoded JSON without padding.

        Raises:
            ValueError: If a keyset field is missing or cannot be serialized.
        """
        ordered: dict[str, Any] = {}
        for key in self.keyset:
            if key.name not in payload.values:
                msg = f"Cursor payload is missing '{key.name}'"
                raise ValueError(msg)
            ordered[key.name] = _serialize_value(payload.values[key.name])

        json_str = json.dumps(ordered, separators=(",", ":"), allow_nan=False)
        encoded = base64.urlsafe_b64encode(json_str.encode("utf-8")).decode("ascii")
        return encoded.rstrip("=")

    def decode(self, token: str | None) -> CursorData | None:
        """Decode a cursor string, returning None for anything malformed.

        A token decodes only if it is base64url, UTF-8 JSON, an object, and
        carries a correctly typed value for every keyset field. Unknown
        fields are ignored.

        Args:
            token: Raw cursor string from the request, or None.

        Returns:
            CursorData on success, otherwise None.
        """
        if not token or not _TOKEN_PATTERN.fullmatch(token):
            return None

        stripped = token.rstrip("=")
        try:
            padded = stripped + "=" * (-len(stripped) % 4)
            raw = base64.urlsafe_b64decode(padded)
            parsed = json.loads(raw.decode("utf-8"))
        except (binascii.Error, ValueError):
            # UnicodeDecodeError and JSONDecodeError are ValueErrors
            return None

        if not isinstance(parsed, dict):
            return None

        values: dict[str, Any] = {}
        for key in self.keyset:
            value = _validate_value(key, parsed.get(key.name))
            if value is None:
                return None
            values[key.name] = value

        return CursorData(values=values)

    def from_row(self, row: Any) -> str:
        """Create a cursor pointing at ``row``.

        Args:
            row: ORM instance carrying every keyset attribute.

        Returns:
            Encoded cursor string.
        """
        return self.encode(CursorData(values=self.keyset.values_from_row(row)))


def _serialize_value(value: Any) -> Any:
    if isinstance(value, datetime):
        return to_utc(value).isoformat()
    return value


def _validate_value(key: SortKey, value: Any) -> Any:
    """Return the typed value for ``key`` or None if ``value`` is unusable."""
    if value is None:
        return None

    kind = key.kind
    if kind == "bool":
        return value if isinstance(value, bool) else None
    if kind == "int":
        if isinstance(value, bool) or not isinstance(value, int):
            return None
        return value if _INT_MIN <= value <= _INT_MAX else None
    if kind == "float":
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            return None
        return float(value) if math.isfinite(value) else None
    if kind == "datetime":
        if not isinstance(value, str) or not value:
            return None
        try:
            return to_utc(datetime.fromisoformat(value))
        except (ValueError, OverflowError):
            return None
    if not isinstance(value, str) or not value.strip():
        return None
    return value


__all__ = [
    "CursorCodec",
    "CursorData",
]
