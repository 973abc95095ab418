"""
Auth Service.

Email/password accounts: sign-up, sign-in, session lookup and the
profile (username and avatar URL).
"""

from sqlalchemy.ext.asyncio import AsyncSession

from menu_planner.backend.core.config import get_app_config
from menu_planner.backend.core.exceptions import AuthenticationError, ConflictError, NotFoundError
from menu_planner.backend.core.security import hash_password, issue_session_token, verify_password
from menu_planner.backend.models.user import User
from menu_planner.backend.repositories.user import UserRepository
from menu_planner.backend.services.base import BaseService


class AuthService(BaseService):
    """
    Service for account management.

    When the auth_require_email_verification feature is on, new accounts
    start unverified and cannot sign in until verified.
    """

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session)
        self.repo = UserRepository(session)

    async def sign_up(self, email: str, password: str) -> tuple[User, bool]:
        """
        Register a new account.

        Returns:
            Tuple of (user, pending_verification)

        Raises:
            ValidationError: If the password is too short
            ConflictError: If the email is already registered
        """
        app_config = get_app_config()
        self._validate_string_length(
            password,
            "password",
            min_length=app_config.security.password.min_length,
        )

        email = email.lower()
        if await self.repo.exists_by_email(email):
            raise ConflictError("Email already registered")

        pending = app_config.features.auth_require_email_verification
        self._log_operation("Signing up user", pending_verification=pending)

        user = await self._execute_db_operation(
            "sign_up",
            self.repo.create(
                email=email,
                hashed_password=hash_password(password),
                is_verified=not pending,
            ),
        )
        return user, pending

    async def sign_in(self, email: str, password: str) -> tuple[str, User]:
        """
        Check credentials and open a session.

        Returns:
            Tuple of (access token, user)

        Raises:
            AuthenticationError: If the credentials are wrong or the
                email is not confirmed yet
        """
        user = await self.repo.get_by_email(email)
        if user is None or not verify_password(password, user.hashed_password):
            self._logger.warning("Sign-in rejected", extra={"reason": "invalid_credentials"})
            raise AuthenticationError("Invalid login credentials")

        if not user.is_verified:
            raise AuthenticationError("Email not confirmed")

        token = issue_session_token(user.id, user.email)
        self._log_operation("User signed in", user_id=user.id)
        return token, user

    async def get_user(self, user_id: str) -> User | None:
        """Look up the session user, or None when the account is gone."""
        return await self.repo.get_by_id_or_none(user_id)

    async def verify_user(self, email: str) -> User:
        """
        Mark an account as verified so it can sign in.

        Raises:
            NotFoundError: If no account has this email
        """
        user = await self.repo.get_by_email(email)
        if user is None:
            raise NotFoundError("User not found")
        if user.is_verified:
            return user

        self._log_operation("Verifying user", user_id=user.id)
        return await self._execute_db_operation(
            "verify_user",
            self.repo.update_instance(user, is_verified=True),
        )

    async def update_profile(self, user: User, changes: dict[str, str | None]) -> User:
        """
        Change profile fields. Only the given keys change; an empty value
        clears the field.
        """
        self._log_operation("Updating profile", user_id=user.id, fields=sorted(changes))
        return await self._execute_db_operation(
            "update_profile",
            self.repo.update_instance(user, **{key: value or None for key, value in changes.items()}),
        )
