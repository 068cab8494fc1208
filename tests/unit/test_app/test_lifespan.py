"""Unit tests for database startup in the application lifespan."""
from __future__ import annotations

import pytest
from sqlalchemy.exc import OperationalError

from community_service.app import lifespan
from community_service.core.settings import clear_all_caches
from community_service.infra.database import session


async def _unreachable() -> None:
    raise OperationalError("SELECT 1", {}, Exception("connection refused"))


async def test_fallback_database_failure_is_degraded(monkeypatch, caplog):
    monkeypatch.setenv("DB_ENABLED", "false")
    clear_all_caches()
    monkeypatch.setattr(session, "init_database", _unreachable)

    with caplog.at_level("WARNING", logger="community_service.app.lifespan"):
        await lifespan._startup_database()

    assert "degraded mode" in caplog.text


async def test_configured_database_failure_aborts_startup(monkeypatch):
    monkeypatch.setenv("DB_ENABLED", "true")
    clear_all_caches()
    monkeypatch.setattr(session, "init_database", _unreachable)

    with pytest.raises(OperationalError):
        await lifespan._startup_database()


async def test_successful_startup(monkeypatch):
    calls = []

    async def _ok() -> None:
        calls.append("init")

    monkeypatch.setattr(session, "init_database", _ok)

    await lifespan._startup_database()

    assert calls == ["init"]
