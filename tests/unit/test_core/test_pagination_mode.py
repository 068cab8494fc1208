"""Unit tests for list request parsing and pagination mode selection."""
from __future__ import annotations

from datetime import UTC, datetime

import pytest

from community_service.core.pagination import CursorCodec, CursorData, ListRequest, PaginationMode
from community_service.core.pagination.mode import parse_int, select_mode
from community_service.core.settings.pagination import PaginationSettings
from community_service.features.comments.repository import COMMENT_KEYSET
from community_service.infra.metrics.prometheus import REGISTRY

# Largest page whose OFFSET still fits a signed 64-bit integer at limit 50
MAX_PAGE = (2**63 - 1) // 50 + 1


def _request(
    page: str | None = None,
    limit: str | None = None,
    cursor: str | None = None,
    default_limit: int = 10,
) -> ListRequest:
    return ListRequest.from_query(
        page=page,
        limit=limit,
        cursor=cursor,
        default_limit=default_limit,
        settings=PaginationSettings(min_limit=1, max_limit=50),
    )


def _fallbacks(resource: str) -> float:
    value = REGISTRY.get_sample_value(
        "pagination_cursor_fallback_total", {"resource": resource}
    )
    return value or 0.0


class TestParseInt:
    """parse_int reads a leading integer and otherwise uses the default."""

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            (None, 7),
            ("", 7),
            ("3", 3),
            ("3abc", 3),
            ("  12", 12),
            ("-4", -4),
            ("+5", 5),
            ("1.9", 1),
            ("abc", 7),
            ("-", 7),
            ("007", 7),
            ("9" * 25, 10**18),
            ("-" + "9" * 25, -(10**18)),
            ("9" * 5000, 10**18),
        ],
    )
    def test_parse_int(self, raw, expected):
        assert parse_int(raw, 7) == expected


class TestListRequest:
    """ListRequest.from_query normalizes raw query parameters."""

    def test_defaults_without_parameters(self):
        request = _request()

        assert request.page == 1
        assert request.limit == 10
        assert request.cursor is None
        assert request.is_paginated is False

    @pytest.mark.parametrize(
        ("params", "page", "limit"),
        [
            ({"page": "2", "limit": "5"}, 2, 5),
            ({"page": "0"}, 1, 10),
            ({"page": "-3"}, 1, 10),
            ({"page": "abc"}, 1, 10),
            ({"limit": "0"}, 1, 1),
            ({"limit": "-10"}, 1, 1),
            ({"limit": "1000"}, 1, 50),
            ({"limit": "abc"}, 1, 10),
            ({"limit": "20items"}, 1, 20),
            ({"page": "9" * 25}, MAX_PAGE, 10),
            ({"page": "9" * 5000, "limit": "2"}, MAX_PAGE, 2),
            ({"limit": "9" * 5000}, 1, 50),
            ({"limit": "-" + "9" * 5000}, 1, 1),
        ],
    )
    def test_values_are_clamped_not_rejected(self, params, page, limit):
        request = _request(**params)

        assert request.page == page
        assert request.limit == limit
        assert request.is_paginated is True

    def test_largest_page_offset_fits_int64(self):
        request = _request(page="9" * 25, limit="50")

        assert (request.page - 1) * request.limit <= 2**63 - 1

    def test_default_limit_is_clamped(self):
        assert _request(limit="x", default_limit=500).limit == 50

    def test_empty_cursor_counts_as_pagination(self):
        request = _request(cursor="")

        assert request.is_paginated is True
        assert request.cursor == ""

    def test_request_is_immutable(self):
        request = _request(page="1")

        with pytest.raises(Exception):
            request.page = 3  # type: ignore[misc]


class TestSelectMode:
    """select_mode picks cursor mode only for decodable cursors."""

    @pytest.fixture
    def codec(self) -> CursorCodec:
        return CursorCodec(COMMENT_KEYSET)

    def test_no_cursor_selects_offset(self, codec):
        mode, cursor = select_mode(_request(page="2"), codec, resource="unit-none")

        assert mode == PaginationMode.OFFSET
        assert cursor is None
        assert _fallbacks("unit-none") == 0.0

    def test_valid_cursor_selects_cursor(self, codec):
        token = codec.encode(
            CursorData(values={"createdAt": datetime(2025, 1, 1, tzinfo=UTC), "id": "c-1"})
        )

        mode, cursor = select_mode(_request(cursor=token), codec, resource="unit-valid")

        assert mode == PaginationMode.CURSOR
        assert cursor is not None
        assert cursor.values["id"] == "c-1"

    @pytest.mark.parametrize("token", ["", "garbage!", "eyJmb28iOiJiYXIifQ"])
    def test_invalid_cursor_falls_back_to_offset(self, codec, token):
        """Bad cursors are counted and silently served in offset mode."""
        before = _fallbacks("unit-invalid")

        mode, cursor = select_mode(_request(cursor=token), codec, resource="unit-invalid")

        assert mode == PaginationMode.OFFSET
        assert cursor is None
        assert _fallbacks("unit-invalid") == before + 1

    def test_fallback_is_logged_at_debug(self, codec, caplog):
        with caplog.at_level("DEBUG", logger="community_service.core.pagination.mode"):
            select_mode(_request(cursor="garbage!"), codec, resource="unit-log")

        assert "falling back to offset" in caplog.text
