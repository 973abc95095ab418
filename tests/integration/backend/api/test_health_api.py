"""Integration tests for health endpoints."""

from unittest.mock import AsyncMock, patch

from httpx import AsyncClient


async def test_liveness_always_healthy(client: AsyncClient) -> None:
    """GET /health should always return 200."""
    response = await client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "healthy"}


async def test_readiness_healthy_database(client: AsyncClient) -> None:
    """GET /health/ready should report the database check."""
    check = AsyncMock(return_value={"status": "healthy", "latency_ms": 1})
    with patch("menu_planner.backend.api.health.check_database", check):
        response = await client.get("/health/ready")

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"
    assert data["checks"]["database"]["status"] == "healthy"


async def test_readiness_unhealthy_database(client: AsyncClient) -> None:
    """GET /health/ready should answer 503 when the database is down."""
    check = AsyncMock(return_value={"status": "unhealthy", "error": "connection refused"})
    with patch("menu_planner.backend.api.health.check_database", check):
        response = await client.get("/health/ready")

    assert response.status_code == 503
    assert response.json()["detail"]["checks"]["database"]["error"] == "connection refused"
