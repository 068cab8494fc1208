"""Unit tests for the RFC 7807 exception handlers."""
from __future__ import annotations

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from pydantic import BaseModel

from community_service.app.exception_handlers import configure_exception_handlers
from community_service.app.middleware import RequestIDMiddleware
from community_service.core.exceptions import BadRequestException
from community_service.infra.metrics.prometheus import REGISTRY


class _Strict(BaseModel):
    count: int


def _build_app() -> FastAPI:
    app = FastAPI()
    configure_exception_handlers(app)
    app.add_middleware(RequestIDMiddleware)

    @app.get("/items/{item_id}")
    async def get_item(item_id: int) -> dict[str, int]:
        return {"item_id": item_id}

    @app.get("/bad/{thing_id}")
    async def bad(thing_id: str) -> dict[str, str]:
        raise BadRequestException(detail="Not allowed", type="not-allowed", extra={"thing_id": thing_id})

    @app.get("/model")
    async def model() -> dict[str, int]:
        return {"count": _Strict(count="many").count}  # type: ignore[arg-type]

    @app.get("/boom")
    async def boom() -> dict[str, str]:
        raise RuntimeError("secret internals")

    return app


@pytest.fixture
async def handler_client():
    transport = ASGITransport(app=_build_app(), raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


async def test_app_exception_becomes_problem_detail(handler_client):
    before = REGISTRY.get_sample_value(
        "errors_total",
        {"error_type": "not-allowed", "endpoint": "/bad/{thing_id}", "status_code": "400"},
    ) or 0.0

    response = await handler_client.get("/bad/abc", headers={"X-Request-ID": "req-7"})

    assert response.status_code == 400
    assert response.headers["content-type"].startswith("application/problem+json")
    assert response.json() == {
        "type": "not-allowed",
        "title": "Bad Request",
        "status": 400,
        "detail": "Not allowed",
        "instance": "/bad/abc",
        "thing_id": "abc",
        "request_id": "req-7",
    }
    after = REGISTRY.get_sample_value(
        "errors_total",
        {"error_type": "not-allowed", "endpoint": "/bad/{thing_id}", "status_code": "400"},
    )
    assert after == before + 1


async def test_request_validation_lists_fields(handler_client):
    response = await handler_client.get("/items/abc")

    assert response.status_code == 422
    body = response.json()
    assert body["type"] == "validation-error"
    assert body["errors"][0]["field"] == "path.item_id"
    assert body["errors"][0]["value"] == "abc"


async def test_pydantic_validation_outside_request(handler_client):
    response = await handler_client.get("/model")

    assert response.status_code == 422
    body = response.json()
    assert body["type"] == "validation-error"
    assert body["errors"][0]["field"] == "count"


async def test_unexpected_exception_hides_details(handler_client):
    response = await handler_client.get("/boom")

    assert response.status_code == 500
    body = response.json()
    assert body["type"] == "internal-error"
    assert body["title"] == "Internal Server Error"
    assert "secret" not in body["detail"]
    assert body["request_id"]
