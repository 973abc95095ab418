"""
Unit Tests for Base Service.

Tests database error translation and the shared validation helpers.
"""

from unittest.mock import AsyncMock

import pytest
from sqlalchemy.exc import IntegrityError, OperationalError

from menu_planner.backend.core.exceptions import ConflictError, DatabaseError, ValidationError
from menu_planner.backend.services.base import BaseService


@pytest.fixture
def service():
    return BaseService(AsyncMock())


def test_session_is_exposed():
    session = AsyncMock()

    assert BaseService(session).session is session


class TestExecuteDbOperation:
    """Tests for _execute_db_operation."""

    async def test_returns_result(self, service):
        async def load():
            return {"id": "dish-1"}

        assert await service._execute_db_operation("get_dish", load()) == {"id": "dish-1"}

    async def test_unique_violation_becomes_conflict(self, service):
        async def insert():
            raise IntegrityError("INSERT", {}, Exception("UNIQUE constraint failed: users.email"))

        with pytest.raises(ConflictError, match="already exists"):
            await service._execute_db_operation("create_user", insert())

    async def test_other_integrity_error_becomes_database_error(self, service):
        async def insert():
            raise IntegrityError("INSERT", {}, Exception("NOT NULL constraint failed"))

        with pytest.raises(DatabaseError, match="constraint violation: create_dish"):
            await service._execute_db_operation("create_dish", insert())

    async def test_sqlalchemy_error_becomes_database_error(self, service):
        async def query():
            raise OperationalError("SELECT", {}, Exception("database is locked"))

        with pytest.raises(DatabaseError, match="operation failed: list_menus"):
            await service._execute_db_operation("list_menus", query())

    async def test_application_errors_pass_through(self, service):
        async def lookup():
            raise ValidationError("Please select a date and menu type")

        with pytest.raises(ValidationError):
            await service._execute_db_operation("save_daily_menu", lookup())


class TestValidation:
    """Tests for the validation helpers."""

    def test_required_reports_every_missing_field(self, service):
        with pytest.raises(ValidationError) as exc_info:
            service._validate_required(
                {"date": None, "menu_id": "  ", "dessert_id": "d-1"},
                ["date", "menu_id", "dessert_id"],
                message="Please select a date and menu type",
            )

        assert exc_info.value.message == "Please select a date and menu type"
        assert exc_info.value.details == {"missing_fields": ["date", "menu_id"]}

    def test_required_passes_when_present(self, service):
        service._validate_required({"date": "2024-06-01", "menu_id": "m-1"}, ["date", "menu_id"])

    def test_string_length_bounds(self, service):
        with pytest.raises(ValidationError, match="password too short"):
            service._validate_string_length("abc", "password", min_length=6)
        with pytest.raises(ValidationError, match="username too long"):
            service._validate_string_length("x" * 51, "username", max_length=50)

        service._validate_string_length("secret123", "password", min_length=6, max_length=128)
