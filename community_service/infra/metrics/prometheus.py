"""Prometheus registry and pagination metrics."""

from __future__ import annotations

from prometheus_client import CollectorRegistry, Counter, Gauge, Histogram

# Custom registry so tests and the /metrics endpoint see only our collectors
REGISTRY = CollectorRegistry()

# Rows returned per page; upper buckets cover the unpaginated escape hatch
PAGE_SIZE_BUCKETS = (
    0,
    1,
    5,
    10,
    20,
    30,
    50,
    100,
    250,
    1000,
)

pagination_requests_total = Counter(
    "pagination_requests_total",
    "Total list requests served, by resource and pagination mode",
    ["resource", "mode"],  # mode: offset, cursor, all
    registry=REGISTRY,
)

pagination_cursor_fallback_total = Counter(
    "pagination_cursor_fallback_total",
    "Cursor parameters that failed to decode and fell back to offset mode",
    ["resource"],
    registry=REGISTRY,
)

pagination_page_size = Histogram(
    "pagination_page_size",
    "Number of rows returned per list request",
    ["resource"],
    buckets=PAGE_SIZE_BUCKETS,
    registry=REGISTRY,
)

application_info = Gauge(
    "application_info",
    "Application build information (always 1)",
    ["version", "service", "environment"],
    registry=REGISTRY,
)
