"""Context management for structured logging.

Log context lives in a ContextVar, so every request handled by the event loop
gets its own copy. The ContextInjectingFilter attached to the root logger copies
the current context onto each LogRecord, where the JSON formatter picks it up.
"""

from __future__ import annotations

import logging
from contextvars import ContextVar
from typing import Any

_log_context: ContextVar[dict[str, Any]] = ContextVar("log_context", default={})


def set_log_context(**kwargs: Any) -> None:
    """Add fields to the logging context of the current task.

    Args:
        **kwargs: Key-value pairs to add to logging context.

    Example:
        ```python
        # In middleware
        set_log_context(request_id="abc-123")

        # In a list endpoint
        set_log_context(resource="answers", post_id=post_id)

        logger.info("Listing")  # Includes request_id, resource, post_id
        ```
    """
    current = _log_context.get().copy()
    current.update(kwargs)
    _log_context.set(current)


def get_log_context() -> dict[str, Any]:
    """Return a copy of the current logging context."""
    return _log_context.get().copy()


def clear_log_context() -> None:
    """Clear all logging context for the current task.

    Called by the request ID middleware once a response is sent, and useful
    in test teardown.
    """
    _log_context.set({})


class ContextInjectingFilter(logging.Filter):
    """Logging filter that injects the current log context into each record.

    Applied to the root logger so every logger benefits:

        config = {
            "filters": {
                "context": {
                    "()": "community_service.infra.logging.context.ContextInjectingFilter"
                }
            },
            "root": {"level": "INFO", "filters": ["context"]},
        }
    """

    def filter(self, record: logging.LogRecord) -> bool:
        """Inject context into log record.

        Args:
            record: The log record to enhance with context.

        Returns:
            True (always allow the record to be logged).
        """
        for key, value in _log_context.get().items():
            # Don't overwrite existing attributes
            if not hasattr(record, key):
                setattr(record, key, value)
        return True
