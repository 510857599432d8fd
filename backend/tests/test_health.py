"""
PetPal Backend — Health Check Tests
=====================================

What:  /health reports database reachability, version and uptime.
"""

import pytest
from sqlalchemy.ext.asyncio import create_async_engine

from petpal import __version__
from petpal.routes import health


class TestHealth:
    @pytest.mark.asyncio
    async def test_healthy(self, test_client, db_engine, monkeypatch):
        monkeypatch.setattr(health, "engine", db_engine)

        response = await test_client.get("/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["database"] == "connected"
        assert body["version"] == __version__
        assert body["uptime_seconds"] >= 0
        assert "X-Request-ID" in response.headers

    @pytest.mark.asyncio
    async def test_unreachable_database(self, test_client, tmp_path, monkeypatch):
        broken = create_async_engine(f"sqlite+aiosqlite:///{tmp_path}/missing/dir/db.sqlite")
        monkeypatch.setattr(health, "engine", broken)

        response = await test_client.get("/health")

        assert response.status_code == 503
        assert response.json()["status"] == "unhealthy"
        await broken.dispose()

    @pytest.mark.asyncio
    async def test_request_id_echoed(self, test_client, db_engine, monkeypatch):
        monkeypatch.setattr(health, "engine", db_engine)
        response = await test_client.get("/health", headers={"X-Request-ID": "abc123"})
        assert response.headers["X-Request-ID"] == "abc123"
