import pytest

pytestmark = pytest.mark.asyncio


async def test_root(client):
    response = await client.get("/")

    assert response.json() == {"status": "ok", "message": "FitSnap API"}


async def test_health(client, monkeypatch):
    monkeypatch.setenv("BACKEND_BUILT_AT", "2026-10-01T00:00:00Z")

    response = await client.get("/api/health")

    assert response.json() == {"status": "ok", "built_at": "2026-10-01T00:00:00Z"}


async def test_ready(client):
    response = await client.get("/api/health/ready")

    assert response.status_code == 200
    assert response.json() == {"status": "ok", "database": "connected"}
