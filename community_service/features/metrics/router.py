"""Prometheus metrics endpoint.

Endpoints:
    GET /metrics - Prometheus scrape endpoint

Metrics Exposed:
    Pagination:
        - pagination_requests_total{resource, mode} - List requests by mode
        - pagination_cursor_fallback_total{resource} - Undecodable cursors
        - pagination_page_size{resource} - Rows returned per request

    Errors:
        - errors_total{error_type, endpoint, status_code}
        - exceptions_unhandled_total{exception_type, endpoint}
        - validation_errors_total{endpoint, field}

    Application Info:
        - application_info{version, service, environment}

Example Prometheus Configuration:
    ```yaml
    scrape_configs:
      - job_name: 'community-service'
        static_configs:
          - targets: ['localhost:8000']
        metrics_path: '/metrics'
    ```
"""

from __future__ import annotations

from fastapi import APIRouter, Response
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

from community_service.infra.metrics.prometheus import REGISTRY

router = APIRouter(tags=["observability"])


@router.get("/metrics", include_in_schema=False)
async def metrics() -> Response:
    """Expose the service registry in Prometheus text format."""
    return Response(
        content=generate_latest(REGISTRY),
        media_type=CONTENT_TYPE_LATEST,
        headers={"Cache-Control": "no-cache, no-store, must-revalidate"},
    )
