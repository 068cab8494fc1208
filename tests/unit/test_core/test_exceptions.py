"""Tests for core exceptions."""

from community_service.core import exceptions as exc
from community_service.core.database import NotFoundError, RepositoryError


def test_app_exception_defaults_title() -> None:
    error = exc.AppException(status_code=400, detail="bad")
    assert error.title == "Bad Request"
    assert error.type == "about:blank"
    assert error.extra == {}


def test_unknown_status_gets_generic_title() -> None:
    assert exc.default_title(418) == "Error"


def test_not_found_exception_fields() -> None:
    error = exc.NotFoundException(detail="missing", extra={"post_id": "p-1"})
    assert error.status_code == 404
    assert error.type == "not-found"
    assert error.title == "Not Found"
    assert error.extra["post_id"] == "p-1"


def test_bad_request_exception_custom_type() -> None:
    error = exc.BadRequestException(
        detail="Answers can only be listed for question posts",
        type="invalid-post-type",
    )
    assert error.status_code == 400
    assert error.type == "invalid-post-type"
    assert str(error) == "Answers can only be listed for question posts"


def test_validation_exception_fields() -> None:
    error = exc.ValidationException(detail="bad id")
    assert error.status_code == 422
    assert error.title == "Validation Error"


def test_repository_not_found_error_message() -> None:
    error = NotFoundError("Post", {"id": "p-1"})
    assert isinstance(error, RepositoryError)
    assert "Post" in str(error)
    assert "p-1" in str(error)
