"""Unit tests for the request ID middleware and middleware wiring."""
from __future__ import annotations

import uuid

import pytest
from fastapi import FastAPI, Request
from httpx import ASGITransport, AsyncClient

from community_service.app.middleware import RequestIDMiddleware, configure_middleware
from community_service.core.settings import Settings
from community_service.core.settings.app import AppSettings
from community_service.infra.logging import get_log_context


def _build_app() -> FastAPI:
    app = FastAPI()
    app.add_middleware(RequestIDMiddleware)

    @app.get("/echo")
    async def echo(request: Request) -> dict[str, object]:
        return {"state": request.state.request_id, "context": get_log_context()}

    return app


@pytest.fixture
async def echo_client():
    transport = ASGITransport(app=_build_app())
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


async def test_incoming_header_is_reused(echo_client):
    response = await echo_client.get("/echo", headers={"X-Request-ID": "req-42"})

    assert response.headers["x-request-id"] == "req-42"
    body = response.json()
    assert body["state"] == "req-42"
    assert body["context"]["request_id"] == "req-42"


async def test_missing_header_generates_uuid(echo_client):
    response = await echo_client.get("/echo")

    request_id = response.headers["x-request-id"]
    assert uuid.UUID(request_id).version == 4
    assert response.json()["state"] == request_id


async def test_context_is_cleared_after_response(echo_client):
    await echo_client.get("/echo", headers={"X-Request-ID": "req-1"})

    assert "request_id" not in get_log_context()


def test_cors_only_added_when_origins_configured():
    plain = FastAPI()
    configure_middleware(plain, Settings(app=AppSettings()))

    with_cors = FastAPI()
    configure_middleware(
        with_cors, Settings(app=AppSettings(cors_origins=["https://forum.example"]))
    )

    plain_names = [m.cls.__name__ for m in plain.user_middleware]
    cors_names = [m.cls.__name__ for m in with_cors.user_middleware]
    assert plain_names == ["RequestIDMiddleware"]
    assert cors_names == ["RequestIDMiddleware", "CORSMiddleware"]
