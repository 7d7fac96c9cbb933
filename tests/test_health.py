"""
Health endpoint tests using pytest-asyncio and httpx.AsyncClient.
"""

import pytest


@pytest.mark.asyncio
async def test_health_endpoint(test_client):
    """Test the health check endpoint returns expected structure."""
    response = await test_client.get("/geospatial/health")

    assert response.status_code == 200
    data = response.json()

    assert "status" in data
    assert "uptime" in data
    assert "checks" in data
    assert isinstance(data["checks"], dict)

    # Status should be "ok" or "degraded"
    assert data["status"] in ["ok", "degraded"]


@pytest.mark.asyncio
async def test_health_reports_collection_sizes(test_client, admin_headers):
    await test_client.post(
        "/geospatial/regions/create",
        json={"w_name": "Kersa", "w_code": "W-01"},
        headers=admin_headers,
    )

    response = await test_client.get("/health")

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ok"
    assert data["checks"]["database"] == "ok"
    assert data["collections"] == {"regions": 1, "configs": 0, "requests": 0}


@pytest.mark.asyncio
async def test_entity_routes_require_principal(test_client):
    response = await test_client.get("/geospatial/regions/paginate")

    assert response.status_code == 401


@pytest.mark.asyncio
async def test_unknown_principal_is_rejected(test_client):
    response = await test_client.get(
        "/geospatial/regions/paginate",
        headers={"X-User-Id": "8d0b7c1e-3f4a-4c5b-9e6d-1a2b3c4d5e6f"},
    )

    assert response.status_code == 401
    assert response.json()["error"]["message"] == "User not found"
