"""
User Repository.

Data access layer for user accounts.
"""

from sqlalchemy import func, select

from menu_planner.backend.models.user import User
from menu_planner.backend.repositories.base import BaseRepository


class UserRepository(BaseRepository[User]):
    """Repository for User model."""

    model = User

    async def get_by_email(self, email: str) -> User | None:
        """Find a user by email, ignoring case."""
        result = await self.session.execute(
            select(User).where(func.lower(User.email) == email.lower())
        )
        return result.scalar_one_or_none()

    async def exists_by_email(self, email: str) -> bool:
        """Check whether an email is already registered."""
        return await self.get_by_email(email) is not None
