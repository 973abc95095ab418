"""Request id and timing headers as seen by an HTTP client of the full app."""

from httpx import AsyncClient


async def test_request_id_is_generated(client: AsyncClient):
    response = await client.get("/health")

    assert response.status_code == 200
    assert len(response.headers["X-Request-ID"]) == 36


async def test_request_id_is_echoed(client: AsyncClient):
    response = await client.get("/health", headers={"X-Request-ID": "weekly-plan-7"})

    assert response.headers["X-Request-ID"] == "weekly-plan-7"


async def test_response_time_header(client: AsyncClient):
    response = await client.get("/health")

    elapsed = response.headers["X-Response-Time"]
    assert elapsed.endswith("ms")
    assert elapsed.removesuffix("ms").isdigit()


async def test_headers_present_on_unauthorized(client: AsyncClient):
    response = await client.get("/api/v1/dishes")

    assert response.status_code == 401
    assert "X-Response-Time" in response.headers
    assert "X-Request-ID" in response.headers


async def test_error_envelope_carries_request_id(client: AsyncClient, auth_headers):
    response = await client.get(
        "/api/v1/menus/no-such-menu",
        headers={"X-Request-ID": "lookup-missing-menu", **auth_headers},
    )

    assert response.status_code == 404
    assert response.json()["metadata"]["request_id"] == "lookup-missing-menu"


async def test_list_envelope_carries_request_id(client: AsyncClient, auth_headers):
    response = await client.get("/api/v1/dishes", headers={"X-Request-ID": "list-dishes", **auth_headers})

    assert response.status_code == 200
    assert response.json()["metadata"]["request_id"] == "list-dishes"
