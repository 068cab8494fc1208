"""Unit tests for the keyset cursor codec."""
from __future__ import annotations

import base64
import json
from datetime import UTC, datetime, timedelta, timezone

import pytest

from community_service.core.pagination.cursor import CursorCodec, CursorData
from community_service.features.answers.models import Answer
from community_service.features.answers.repository import ANSWER_KEYSET
from community_service.features.comments.repository import COMMENT_KEYSET

CREATED = datetime(2025, 1, 15, 10, 30, tzinfo=UTC)


def _token(payload: object) -> str:
    """Encode an arbitrary JSON payload the way a client-forged cursor would be."""
    raw = json.dumps(payload).encode("utf-8")
    return base64.urlsafe_b64encode(raw).decode("ascii").rstrip("=")


def _answer_values(**overrides: object) -> dict[str, object]:
    values: dict[str, object] = {
        "isAdopted": False,
        "likes": 3,
        "createdAt": CREATED.isoformat(),
        "id": "answer-1",
    }
    values.update(overrides)
    return values


@pytest.fixture
def codec() -> CursorCodec:
    return CursorCodec(ANSWER_KEYSET)


class TestCursorEncode:
    """Tests for CursorCodec.encode."""

    def test_encode_is_url_safe_without_padding(self, codec: CursorCodec):
        """Encoded cursors should only use base64url characters."""
        token = codec.encode(
            CursorData(
                values={"isAdopted": True, "likes": 1, "createdAt": CREATED, "id": "a"}
            )
        )

        assert "=" not in token
        assert "+" not in token
        assert "/" not in token

    def test_encode_writes_fields_in_keyset_order(self, codec: CursorCodec):
        """Fields should follow the keyset, not the payload's insertion order."""
        token = codec.encode(
            CursorData(
                values={"id": "a", "createdAt": CREATED, "likes": 7, "isAdopted": False}
            )
        )

        padded = token + "=" * (-len(token) % 4)
        payload = json.loads(base64.urlsafe_b64decode(padded))
        assert list(payload) == ["isAdopted", "likes", "createdAt", "id"]
        assert payload["createdAt"] == "2025-01-15T10:30:00+00:00"

    def test_encode_uses_compact_json(self, codec: CursorCodec):
        token = codec.encode(
            CursorData(values={"isAdopted": False, "likes": 0, "createdAt": CREATED, "id": "a"})
        )

        padded = token + "=" * (-len(token) % 4)
        assert b" " not in base64.urlsafe_b64decode(padded)

    def test_encode_missing_field_raises(self, codec: CursorCodec):
        with pytest.raises(ValueError, match="likes"):
            codec.encode(CursorData(values={"isAdopted": False, "createdAt": CREATED, "id": "a"}))

    def test_encode_converts_timestamps_to_utc(self):
        """Offsets should be normalized so equal instants encode identically."""
        codec = CursorCodec(COMMENT_KEYSET)
        local = CREATED.astimezone(timezone(timedelta(hours=2)))

        assert codec.encode(CursorData(values={"createdAt": local, "id": "c"})) == codec.encode(
            CursorData(values={"createdAt": CREATED, "id": "c"})
        )


class TestCursorDecode:
    """Tests for CursorCodec.decode."""

    def test_roundtrip(self, codec: CursorCodec):
        """Decoding an encoded cursor should give back the same values."""
        values = {"isAdopted": True, "likes": 42, "createdAt": CREATED, "id": "answer-9"}

        decoded = codec.decode(codec.encode(CursorData(values=values)))

        assert decoded is not None
        assert decoded.values == values

    def test_from_row(self, codec: CursorCodec):
        """A cursor built from a row should carry the row's keyset values."""
        answer = Answer(
            id="answer-7",
            post_id="question-1",
            author_id="author-1",
            content="body",
            likes=5,
            is_adopted=True,
            created_at=CREATED,
        )

        decoded = codec.decode(codec.from_row(answer))

        assert decoded is not None
        assert decoded.values == {
            "isAdopted": True,
            "likes": 5,
            "createdAt": CREATED,
            "id": "answer-7",
        }

    @pytest.mark.parametrize("token", [None, "", "!!!", "not a cursor", "abc=def"])
    def test_malformed_token_returns_none(self, codec: CursorCodec, token: str | None):
        assert codec.decode(token) is None

    def test_non_json_returns_none(self, codec: CursorCodec):
        token = base64.urlsafe_b64encode(b"not json at all").decode().rstrip("=")
        assert codec.decode(token) is None

    def test_invalid_utf8_returns_none(self, codec: CursorCodec):
        token = base64.urlsafe_b64encode(b"\xff\xfe\xfd").decode().rstrip("=")
        assert codec.decode(token) is None

    def test_truncated_token_returns_none(self, codec: CursorCodec):
        token = _token(_answer_values())
        assert codec.decode(token[: len(token) // 2]) is None

    @pytest.mark.parametrize("payload", [[1, 2, 3], "cursor", 42, None])
    def test_non_object_payload_returns_none(self, codec: CursorCodec, payload: object):
        assert codec.decode(_token(payload)) is None

    @pytest.mark.parametrize("field", ["isAdopted", "likes", "createdAt", "id"])
    def test_missing_field_returns_none(self, codec: CursorCodec, field: str):
        values = _answer_values()
        del values[field]
        assert codec.decode(_token(values)) is None

    @pytest.mark.parametrize(
        "overrides",
        [
            {"isAdopted": 1},
            {"isAdopted": "false"},
            {"likes": "3"},
            {"likes": True},
            {"likes": 2.5},
            {"createdAt": "yesterday"},
            {"createdAt": 1736937000},
            {"createdAt": ""},
            {"id": ""},
            {"id": "   "},
            {"id": 17},
            {"likes": None},
            {"likes": 10**30},
            {"likes": -(2**63) - 1},
            {"createdAt": "9999-12-31T23:59:59-01:00"},
            {"createdAt": "0001-01-01T00:00:00+01:00"},
        ],
    )
    def test_wrongly_typed_field_returns_none(
        self, codec: CursorCodec, overrides: dict[str, object]
    ):
        """A field whose type doesn't match its column must reject the cursor."""
        assert codec.decode(_token(_answer_values(**overrides))) is None

    def test_int64_bounds_are_accepted(self, codec: CursorCodec):
        for likes in (2**63 - 1, -(2**63)):
            decoded = codec.decode(_token(_answer_values(likes=likes)))

            assert decoded is not None
            assert decoded.values["likes"] == likes

    def test_trailing_newline_returns_none(self, codec: CursorCodec):
        token = _token(_answer_values())

        assert codec.decode(token) is not None
        assert codec.decode(token + "\n") is None

    def test_non_finite_number_returns_none(self, codec: CursorCodec):
        raw = b'{"isAdopted":false,"likes":NaN,"createdAt":"2025-01-15T10:30:00+00:00","id":"a"}'
        token = base64.urlsafe_b64encode(raw).decode().rstrip("=")
        assert codec.decode(token) is None

    def test_unknown_fields_are_ignored(self, codec: CursorCodec):
        decoded = codec.decode(_token(_answer_values(score=99, extra={"nested": True})))

        assert decoded is not None
        assert set(decoded.values) == {"isAdopted", "likes", "createdAt", "id"}

    def test_padded_token_is_accepted(self):
        """Clients that re-add base64 padding still get their cursor decoded."""
        raw = json.dumps({"createdAt": CREATED.isoformat(), "id": "abc"}).encode()
        padded = base64.urlsafe_b64encode(raw).decode()
        assert padded.endswith("=")

        decoded = CursorCodec(COMMENT_KEYSET).decode(padded)

        assert decoded is not None
        assert decoded.values["id"] == "abc"

    def test_naive_timestamp_is_read_as_utc(self):
        codec = CursorCodec(COMMENT_KEYSET)

        decoded = codec.decode(_token({"createdAt": "2025-01-15T10:30:00", "id": "c-1"}))

        assert decoded is not None
        assert decoded.values["createdAt"] == CREATED
        assert decoded.values["createdAt"].tzinfo is not None

    def test_offset_timestamp_is_converted_to_utc(self):
        codec = CursorCodec(COMMENT_KEYSET)

        decoded = codec.decode(_token({"createdAt": "2025-01-15T12:30:00+02:00", "id": "c-1"}))

        assert decoded is not None
        assert decoded.values["createdAt"] == CREATED
        assert decoded.values["createdAt"].utcoffset() == timedelta(0)

    def test_cursor_for_another_keyset_returns_none(self):
        """A comment cursor lacks the answer fields and must not decode as one."""
        comment_token = CursorCodec(COMMENT_KEYSET).encode(
            CursorData(values={"createdAt": CREATED, "id": "c-1"})
        )

        assert CursorCodec(ANSWER_KEYSET).decode(comment_token) is None
