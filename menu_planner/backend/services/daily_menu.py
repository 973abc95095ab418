"""
Daily Menu Service.

Business logic for the daily planner: resolving a date to its plan,
building the pre-filled form, and saving a plan as an upsert keyed by
calendar day.
"""

from datetime import date

from sqlalchemy.ext.asyncio import AsyncSession

from menu_planner.backend.core.utils import utc_now
from menu_planner.backend.models.daily_menu import DailyMenu
from menu_planner.backend.repositories.daily_menu import DailyMenuRepository
from menu_planner.backend.schemas.daily_menu import DailyMenuSave
from menu_planner.backend.services.base import BaseService
from menu_planner.backend.services.resolver import (
    CourseSelection,
    DailyMenuForm,
    dates_with_menus,
    find_daily_menu,
    load_form,
    merge_daily_menu,
)

MISSING_INFORMATION = "Please select a date and menu type"


class DailyMenuService(BaseService):
    """
    Service for daily menu business logic.

    At most one plan exists per user and calendar day. This is kept by
    save_daily_menu, which always looks the day up before writing.
    """

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session)
        self.repo = DailyMenuRepository(session)

    async def list_daily_menus(
        self,
        user_id: str,
        date_from: date | None = None,
        date_to: date | None = None,
    ) -> list[DailyMenu]:
        """List the user's plans, latest date first."""
        return await self.repo.list_in_range(user_id, date_from=date_from, date_to=date_to)

    async def get_daily_menu(self, user_id: str, daily_menu_id: str) -> DailyMenu:
        """
        Get one of the user's plans.

        Raises:
            NotFoundError: If the plan does not exist
        """
        return await self.repo.get_for_user(daily_menu_id, user_id)

    async def find_for_date(self, user_id: str, day: date) -> DailyMenu | None:
        """Return the plan for a calendar day, or None."""
        daily_menus = await self.repo.list_for_user(user_id)
        return find_daily_menu(daily_menus, day)

    async def get_form(self, user_id: str, day: date) -> DailyMenuForm:
        """
        Build the planner form for a day.

        A planned day yields its id and selections; an unplanned day
        yields empty selections.
        """
        daily_menus = await self.repo.list_for_user(user_id)
        form = load_form(daily_menus, day)
        self._log_debug("Daily menu form loaded", date=str(form.date), exists=form.exists)
        return form

    async def get_planned_dates(self, user_id: str) -> list[str]:
        """Sorted day keys that already have a plan."""
        daily_menus = await self.repo.list_for_user(user_id)
        return sorted(dates_with_menus(daily_menus))

    async def save_daily_menu(
        self,
        user_id: str,
        data: DailyMenuSave,
    ) -> tuple[DailyMenu, bool]:
        """
        Save the plan for a day: update it if the day is planned, insert otherwise.

        An existing plan keeps its id and created_at; the menu, the three
        courses and updated_at are overwritten. Database failures are
        logged and raised as DatabaseError without retrying.

        Args:
            user_id: Owner of the plan
            data: Selected day and course choices

        Returns:
            Tuple of (stored plan, True if it was created)

        Raises:
            ValidationError: If the date or the menu is missing
            DatabaseError: If the write fails
        """
        self._validate_required(
            {"date": data.date, "menu_id": data.menu_id},
            ["date", "menu_id"],
            message=MISSING_INFORMATION,
        )

        day = data.date
        selection = CourseSelection(
            menu_id=data.menu_id,
            first_course_id=data.first_course_id,
            second_course_id=data.second_course_id,
            dessert_id=data.dessert_id,
        )

        existing = await self.find_for_date(user_id, day)
        fields = merge_daily_menu(existing, day, selection, now=utc_now())

        if existing is not None:
            self._log_operation("Updating daily menu", daily_menu_id=existing.id, date=str(day))
            fields.pop("id")
            fields.pop("created_at")
            daily_menu = await self._execute_db_operation(
                "update_daily_menu",
                self.repo.update_instance(existing, **fields),
            )
            return daily_menu, False

        self._log_operation("Creating daily menu", daily_menu_id=fields["id"], date=str(day))
        daily_menu = await self._execute_db_operation(
            "create_daily_menu",
            self.repo.create(user_id=user_id, **fields),
        )
        return daily_menu, True

    async def delete_daily_menu(self, user_id: str, daily_menu_id: str) -> None:
        """
        Delete one of the user's plans.

        Raises:
            NotFoundError: If the plan does not exist
        """
        daily_menu = await self.repo.get_for_user(daily_menu_id, user_id)
        self._log_operation("Deleting daily menu", daily_menu_id=daily_menu_id)

        await self._execute_db_operation(
            "delete_daily_menu",
            self.repo.delete_instance(daily_menu),
        )
