"""Logging infrastructure.

Provides structured logging with:
- JSONL format for Loki/Elasticsearch ingestion
- Automatic context injection (request_id, resource, pagination mode)
- QueueHandler + QueueListener for non-blocking I/O
- Lazy evaluation for expensive debug output
- OpenTelemetry trace correlation

Basic usage:
    from community_service.infra.logging import set_log_context
    import logging

    logger = logging.getLogger(__name__)

    set_log_context(request_id="abc-123")
    logger.info("Listing answers")  # Includes request_id

    from community_service.infra.logging import get_lazy_logger

    lazy_logger = get_lazy_logger(__name__)
    lazy_logger.debug(lambda: f"Window: {describe(window)}")  # Only runs if DEBUG enabled
"""

from community_service.infra.logging.config import configure_logging, setup_logging, shutdown
from community_service.infra.logging.context import (
    ContextInjectingFilter,
    clear_log_context,
    get_log_context,
    set_log_context,
)
from community_service.infra.logging.formatters import JSONFormatter
from community_service.infra.logging.lazy import LazyLoggerAdapter, get_lazy_logger

__all__ = [
    "ContextInjectingFilter",
    "JSONFormatter",
    "LazyLoggerAdapter",
    "clear_log_context",
    "configure_logging",
    "get_lazy_logger",
    "get_log_context",
    "set_log_context",
    "setup_logging",
    "shutdown",
]
