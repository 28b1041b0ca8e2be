"""Health & readiness probes."""

from httpx import ASGITransport, AsyncClient

from product_api.main import API_VERSION, create_app


async def test_health_is_200(client):
    res = await client.get("/api/health")
    assert res.status_code == 200
    assert res.json() == {
        "status": "healthy", "service": "product-api", "version": API_VERSION,
    }


async def test_ready_with_database(client):
    res = await client.get("/api/health/ready")
    assert res.status_code == 200
    assert res.json()["checks"]["database"] == "healthy"


async def test_ready_without_database_is_503(settings):
    app = create_app(settings)
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        res = await c.get("/api/health/ready")
    assert res.status_code == 503
    assert res.json()["reason"] == "database_unavailable"


async def test_unknown_route_uses_error_envelope(client):
    res = await client.get("/api/nope")
    assert res.status_code == 404
    assert res.json() == {"error": "Not Found"}


async def test_wrong_method_uses_error_envelope(client):
    res = await client.put("/api/health")
    assert res.status_code == 405
    assert res.json() == {"error": "Method Not Allowed"}
    assert "GET" in res.headers["allow"]
