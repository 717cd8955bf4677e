"""Health probes — liveness always 200, readiness follows the store."""

import instance_api.infrastructure.instance_store as store_module


async def test_liveness_is_200(client):
    res = await client.get("/api/health/")
    assert res.status_code == 200
    assert res.json()["status"] == "healthy"


async def test_ready_when_store_healthy(client, store, monkeypatch):
    monkeypatch.setattr(store_module, "store", store)
    res = await client.get("/api/health/ready")
    assert res.status_code == 200
    assert res.json()["checks"]["store"] == "healthy"


async def test_not_ready_without_store(client, monkeypatch):
    monkeypatch.setattr(store_module, "store", None)
    res = await client.get("/api/health/ready")
    assert res.status_code == 503
    assert res.json()["reason"] == "store_unavailable"


async def test_not_ready_when_store_unhealthy(client, store, monkeypatch):
    async def unhealthy():
        return False

    monkeypatch.setattr(store, "health_check", unhealthy)
    monkeypatch.setattr(store_module, "store", store)
    res = await client.get("/api/health/ready")
    assert res.status_code == 503
