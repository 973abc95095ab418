"""Unit tests for AuthService with a mocked user repository."""

from types import SimpleNamespace
from unittest.mock import AsyncMock, patch

import pytest

from menu_planner.backend.core.exceptions import (
    AuthenticationError,
    ConflictError,
    NotFoundError,
    ValidationError,
)
from menu_planner.backend.core.security import hash_password, verify_password
from menu_planner.backend.services.auth import AuthService


@pytest.fixture
def service(mock_db_session, mock_app_config):
    service = AuthService(mock_db_session)
    service.repo = AsyncMock()
    with patch("menu_planner.backend.services.auth.get_app_config", return_value=mock_app_config):
        yield service


@pytest.fixture
def stored_user():
    return SimpleNamespace(
        id="user-1",
        email="cook@example.com",
        hashed_password=hash_password("secret123"),
        is_verified=True,
        username=None,
    )


class TestSignUp:
    """Tests for sign_up."""

    async def test_stores_hashed_lowercase_email(self, service):
        service.repo.exists_by_email.return_value = False
        service.repo.create.side_effect = lambda **fields: SimpleNamespace(id="user-1", **fields)

        user, pending = await service.sign_up("Cook@Example.com", "secret123")

        assert pending is False
        assert user.email == "cook@example.com"
        assert user.is_verified is True
        assert verify_password("secret123", user.hashed_password)

    async def test_pending_verification(self, service, mock_app_config):
        mock_app_config.features.auth_require_email_verification = True
        service.repo.exists_by_email.return_value = False
        service.repo.create.side_effect = lambda **fields: SimpleNamespace(id="user-1", **fields)

        user, pending = await service.sign_up("cook@example.com", "secret123")

        assert pending is True
        assert user.is_verified is False

    async def test_duplicate_email(self, service):
        service.repo.exists_by_email.return_value = True

        with pytest.raises(ConflictError, match="already registered"):
            await service.sign_up("cook@example.com", "secret123")

        service.repo.create.assert_not_awaited()

    async def test_short_password(self, service):
        with pytest.raises(ValidationError, match="password too short"):
            await service.sign_up("cook@example.com", "abc")


class TestSignIn:
    """Tests for sign_in."""

    async def test_returns_token(self, service, stored_user):
        service.repo.get_by_email.return_value = stored_user

        with patch("menu_planner.backend.services.auth.issue_session_token", return_value="token") as mock_token:
            token, user = await service.sign_in("cook@example.com", "secret123")

        assert token == "token"
        assert user is stored_user
        mock_token.assert_called_once_with("user-1", "cook@example.com")

    async def test_wrong_password(self, service, stored_user):
        service.repo.get_by_email.return_value = stored_user

        with pytest.raises(AuthenticationError, match="Invalid login credentials"):
            await service.sign_in("cook@example.com", "wrong-pass")

    async def test_unknown_email(self, service):
        service.repo.get_by_email.return_value = None

        with pytest.raises(AuthenticationError, match="Invalid login credentials"):
            await service.sign_in("nobody@example.com", "secret123")

    async def test_unverified(self, service, stored_user):
        stored_user.is_verified = False
        service.repo.get_by_email.return_value = stored_user

        with pytest.raises(AuthenticationError, match="Email not confirmed"):
            await service.sign_in("cook@example.com", "secret123")


class TestVerifyUser:
    """Tests for verify_user."""

    async def test_marks_verified(self, service, stored_user):
        stored_user.is_verified = False
        service.repo.get_by_email.return_value = stored_user
        service.repo.update_instance.return_value = stored_user

        await service.verify_user("cook@example.com")

        service.repo.update_instance.assert_awaited_once_with(stored_user, is_verified=True)

    async def test_already_verified(self, service, stored_user):
        service.repo.get_by_email.return_value = stored_user

        assert await service.verify_user("cook@example.com") is stored_user
        service.repo.update_instance.assert_not_awaited()

    async def test_unknown_email(self, service):
        service.repo.get_by_email.return_value = None

        with pytest.raises(NotFoundError, match="User not found"):
            await service.verify_user("nobody@example.com")


async def test_empty_username_clears_profile(service, stored_user):
    service.repo.update_instance.return_value = stored_user

    await service.update_profile(stored_user, {"username": ""})

    service.repo.update_instance.assert_awaited_once_with(stored_user, username=None)


async def test_profile_update_touches_only_given_fields(service, stored_user):
    service.repo.update_instance.return_value = stored_user

    await service.update_profile(stored_user, {"avatar_url": "https://cdn.example.com/chef.png"})

    service.repo.update_instance.assert_awaited_once_with(
        stored_user, avatar_url="https://cdn.example.com/chef.png"
    )
