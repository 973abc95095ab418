"""
Integration fixtures: the real FastAPI app over httpx, backed by the
per-test database session from the root conftest.
"""

from collections.abc import AsyncGenerator
from typing import Any

import httpx
import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from menu_planner.backend.core.database import get_db_session
from menu_planner.backend.models import User


@pytest.fixture
async def client(db_session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """
    Client for the app with every request sharing ``db_session``.

    Data written through the API is visible to the test and rolled back
    with the session.
    """
    from menu_planner.backend.main import create_app

    async def _shared_session() -> AsyncGenerator[AsyncSession, None]:
        yield db_session

    app = create_app()
    app.dependency_overrides[get_db_session] = _shared_session
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as test_client:
        yield test_client
    app.dependency_overrides.clear()


class ApiAssertions:
    """Checks for the success/error envelope."""

    @staticmethod
    def _envelope(response: httpx.Response, status: int) -> dict[str, Any]:
        assert response.status_code == status, f"{status} expected, got {response.status_code}: {response.text}"
        return response.json()

    @classmethod
    def assert_success(cls, response: httpx.Response, expected_status: int = 200) -> dict[str, Any]:
        body = cls._envelope(response, expected_status)
        assert body["success"] is True, body
        assert body["error"] is None, body
        return body

    @classmethod
    def assert_error(
        cls,
        response: httpx.Response,
        expected_status: int,
        expected_code: str | None = None,
    ) -> dict[str, Any]:
        body = cls._envelope(response, expected_status)
        assert body["success"] is False, body
        assert body["error"], body
        if expected_code is not None:
            assert body["error"]["code"] == expected_code, body["error"]
        return body

    @classmethod
    def assert_validation_error(cls, response: httpx.Response, field: str | None = None) -> dict[str, Any]:
        """422 envelope; with ``field``, one offending location must end in it."""
        body = cls.assert_error(response, 422, "VAL_REQUEST_INVALID")
        if field is not None:
            locations = [item["field"] for item in body["error"]["details"]["validation_errors"]]
            assert any(location.split(".")[-1] == field for location in locations), locations
        return body


@pytest.fixture
def api() -> ApiAssertions:
    return ApiAssertions()


def _bearer(user: User) -> dict[str, str]:
    from menu_planner.backend.core.security import issue_session_token

    return {"Authorization": f"Bearer {issue_session_token(user.id, user.email)}"}


@pytest.fixture
def auth_headers(user: User) -> dict[str, str]:
    """Signed-in headers for cook@example.com."""
    return _bearer(user)


@pytest.fixture
async def other_auth_headers(db_session: AsyncSession) -> dict[str, str]:
    """Signed-in headers for a second account that owns nothing."""
    stranger = User(email="other@example.com", hashed_password="x", is_verified=True)
    db_session.add(stranger)
    await db_session.flush()
    return _bearer(stranger)


def multilingual(en: str, es: str | None = None, ca: str | None = None) -> dict[str, str]:
    """Name in all three locales; missing translations reuse the English text."""
    return {"en": en, "es": es or en, "ca": ca or en}


@pytest.fixture
def create_dish(client: AsyncClient, auth_headers: dict[str, str], api: ApiAssertions):
    """``await create_dish("Paella", "second")`` returns the created dish."""

    async def _create(name: str, dish_type: str, **names: str) -> dict[str, Any]:
        response = await client.post(
            "/api/v1/dishes",
            json={"name": multilingual(name, **names), "type": dish_type},
            headers=auth_headers,
        )
        return api.assert_success(response, expected_status=201)["data"]

    return _create


@pytest.fixture
def create_menu(client: AsyncClient, auth_headers: dict[str, str], api: ApiAssertions):
    """``await create_menu("Summer")`` returns the created menu."""

    async def _create(name: str, description: dict[str, str] | None = None) -> dict[str, Any]:
        body: dict[str, Any] = {"name": multilingual(name)}
        if description is not None:
            body["description"] = description
        response = await client.post("/api/v1/menus", json=body, headers=auth_headers)
        return api.assert_success(response, expected_status=201)["data"]

    return _create
