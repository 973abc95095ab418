"""
Unit Test Fixtures.

Fixtures for unit tests - all external dependencies are mocked.
Unit tests should be fast and isolated, never touching real databases.
"""

from datetime import date, datetime
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest


# =============================================================================
# Database Mock Fixtures
# =============================================================================


@pytest.fixture
def mock_db_session() -> AsyncMock:
    """
    Mock database session for unit tests.

    Usage:
        def test_service(mock_db_session: AsyncMock):
            service = DishService(mock_db_session)
            service.repo = AsyncMock()
    """
    session = AsyncMock()
    session.add = MagicMock()
    return session


# =============================================================================
# Config Mock Fixtures
# =============================================================================


@pytest.fixture
def mock_app_config() -> SimpleNamespace:
    """
    Attribute-style stand-in for AppConfig with test values.

    Usage:
        def test_with_config(mock_app_config):
            with patch("module.get_app_config", return_value=mock_app_config):
                ...
    """
    return SimpleNamespace(
        application=SimpleNamespace(
            name="Menu Planner Test",
            version="0.0.0",
            environment="test",
            api_prefix="/api/v1",
            server=SimpleNamespace(host="127.0.0.1", port=8000),
        ),
        features=SimpleNamespace(
            auth_require_email_verification=False,
            api_detailed_errors=True,
            api_request_logging=False,
        ),
        security=SimpleNamespace(
            jwt=SimpleNamespace(algorithm="HS256", access_token_expire_minutes=30, audience="menu-planner-test"),
            password=SimpleNamespace(min_length=6),
        ),
    )


# =============================================================================
# Record Fixtures
# =============================================================================


@pytest.fixture
def make_plan():
    """
    Build plan-like records for resolver and service tests.

    Only the attributes the planner reads are set.
    """

    def _make(
        plan_id: str,
        day: date | datetime | str,
        menu_id: str | None = "M1",
        first_course_id: str | None = None,
        second_course_id: str | None = None,
        dessert_id: str | None = None,
        created_at: datetime = datetime(2024, 5, 1, 9, 0),
    ) -> SimpleNamespace:
        return SimpleNamespace(
            id=plan_id,
            date=day,
            menu_id=menu_id,
            first_course_id=first_course_id,
            second_course_id=second_course_id,
            dessert_id=dessert_id,
            created_at=created_at,
            updated_at=created_at,
        )

    return _make
