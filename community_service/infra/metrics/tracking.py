"""Helper functions for tracking pagination and error metrics."""

from __future__ import annotations

import logging
from typing import Any

from community_service.infra.metrics import business, prometheus

logger = logging.getLogger(__name__)


# ============================================================================
# Pagination Tracking
# ============================================================================


def track_page(resource: str, mode: str, size: int) -> None:
    """Track one served list request.

    Args:
        resource: Listing name (e.g., 'answers', 'comments', 'replies')
        mode: 'offset', 'cursor', or 'all' for unpaginated requests
        size: Number of rows returned

    Example:
        track_page("answers", "cursor", 10)
    """
    prometheus.pagination_requests_total.labels(resource=resource, mode=mode).inc()
    prometheus.pagination_page_size.labels(resource=resource).observe(size)


def track_cursor_fallback(resource: str) -> None:
    """Track a cursor that failed to decode.

    Args:
        resource: Listing the cursor was sent to
    """
    prometheus.pagination_cursor_fallback_total.labels(resource=resource).inc()


# ============================================================================
# Error Tracking
# ============================================================================


def track_error(
    error_type: str,
    endpoint: str,
    status_code: int,
    extra: dict[str, Any] | None = None,
) -> None:
    """Track an error occurrence.

    Args:
        error_type: Problem type (e.g., 'not-found', 'invalid-post-type')
        endpoint: Route template where the error occurred
        status_code: HTTP status code
        extra: Additional context for logging

    Example:
        track_error("not-found", "/api/v1/posts/{post_id}/answers", 404)
    """
    business.errors_total.labels(
        error_type=error_type,
        endpoint=endpoint,
        status_code=str(status_code),
    ).inc()

    logger.debug(
        "Tracked error: %s",
        error_type,
        extra={"endpoint": endpoint, "status_code": status_code, **(extra or {})},
    )


def track_validation_error(endpoint: str, field: str) -> None:
    """Track a validation error for a specific field."""
    business.validation_errors_total.labels(
        endpoint=endpoint,
        field=field,
    ).inc()


def track_unhandled_exception(exception_type: str, endpoint: str) -> None:
    """Track an unhandled exception.

    Args:
        exception_type: Exception class name (e.g., 'OperationalError')
        endpoint: Route template where the exception occurred
    """
    business.exceptions_unhandled_total.labels(
        exception_type=exception_type,
        endpoint=endpoint,
    ).inc()
    business.errors_total.labels(
        error_type="internal-error",
        endpoint=endpoint,
        status_code="500",
    ).inc()
