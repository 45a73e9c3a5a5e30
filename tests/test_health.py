"""Smoke tests for health and app wiring."""

from httpx import AsyncClient

from taskboard import __version__


async def test_health_returns_ok(client: AsyncClient) -> None:
    """GET /api/health returns 200, status ok and the version."""
    response = await client.get("/api/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok", "version": __version__}


async def test_request_id_is_generated(client: AsyncClient) -> None:
    response = await client.get("/api/health")
    assert response.headers.get("X-Request-ID")


async def test_request_id_is_forwarded(client: AsyncClient) -> None:
    response = await client.get("/api/health", headers={"X-Request-ID": "trace-abc"})
    assert response.headers["X-Request-ID"] == "trace-abc"


async def test_unknown_route_uses_error_shape(client: AsyncClient) -> None:
    response = await client.get("/api/nope")
    assert response.status_code == 404
    assert response.json() == {"message": "Not Found"}
