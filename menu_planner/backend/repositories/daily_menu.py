"""
Daily Menu Repository.

Data access layer for daily menus. Plans are listed by date, newest
first, rather than by creation time.
"""

from datetime import date

from menu_planner.backend.models.daily_menu import DailyMenu
from menu_planner.backend.repositories.base import UserScopedRepository


class DailyMenuRepository(UserScopedRepository[DailyMenu]):
    """Repository for DailyMenu model."""

    model = DailyMenu

    async def list_for_user(self, user_id: str) -> list[DailyMenu]:
        """All of the user's plans, latest date first."""
        return await self.list_in_range(user_id)

    async def list_in_range(
        self,
        user_id: str,
        date_from: date | None = None,
        date_to: date | None = None,
    ) -> list[DailyMenu]:
        """
        Get the user's plans between two days (both inclusive).

        Args:
            user_id: Owner of the plans
            date_from: First day to include, unbounded when None
            date_to: Last day to include, unbounded when None

        Returns:
            Plans ordered by date descending
        """
        query = self._owned_by(user_id)
        if date_from is not None:
            query = query.where(DailyMenu.date >= date_from)
        if date_to is not None:
            query = query.where(DailyMenu.date <= date_to)

        result = await self.session.execute(
            query.order_by(DailyMenu.date.desc(), DailyMenu.created_at.desc())
        )
        return list(result.scalars().all())
