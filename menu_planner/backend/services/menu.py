"""
Menu Service.

Business logic layer for menus.
"""

from collections.abc import Iterable
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from menu_planner.backend.core.utils import contains_casefold
from menu_planner.backend.models.menu import Menu
from menu_planner.backend.repositories.menu import MenuRepository
from menu_planner.backend.schemas.i18n import LANGUAGES, OptionalMultilingualText
from menu_planner.backend.schemas.menu import MenuCreate, MenuUpdate
from menu_planner.backend.services.base import BaseService
from menu_planner.backend.services.dish import name_columns


def description_columns(description: OptionalMultilingualText | None) -> dict[str, str | None]:
    """Spread an optional description into description_<lang> columns."""
    if description is None:
        return {f"description_{lang}": None for lang in LANGUAGES}
    return {f"description_{lang}": getattr(description, lang) for lang in LANGUAGES}


def filter_menus(menus: Iterable[Menu], query: str | None) -> list[Menu]:
    """Keep menus whose name or description matches the query in any locale."""
    if not query:
        return list(menus)

    def matches(menu: Menu) -> bool:
        fields = (
            menu.name_en, menu.name_es, menu.name_ca,
            menu.description_en, menu.description_es, menu.description_ca,
        )
        return any(contains_casefold(value, query) for value in fields)

    return [menu for menu in menus if matches(menu)]


class MenuService(BaseService):
    """Service for menu business logic."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session)
        self.repo = MenuRepository(session)

    async def create_menu(self, user_id: str, data: MenuCreate) -> Menu:
        """Create a new menu."""
        self._log_operation("Creating menu", user_id=user_id)

        menu = await self._execute_db_operation(
            "create_menu",
            self.repo.create(
                user_id=user_id,
                **name_columns(data.name),
                **description_columns(data.description),
            ),
        )

        self._log_debug("Menu created", menu_id=menu.id)
        return menu

    async def get_menu(self, user_id: str, menu_id: str) -> Menu:
        """
        Get one of the user's menus.

        Raises:
            NotFoundError: If menu not found
        """
        return await self.repo.get_for_user(menu_id, user_id)

    async def list_menus(self, user_id: str, query: str | None = None) -> list[Menu]:
        """List the user's menus newest first, optionally filtered by search text."""
        menus = await self.repo.list_for_user(user_id)
        return filter_menus(menus, query)

    async def update_menu(self, user_id: str, menu_id: str, data: MenuUpdate) -> Menu:
        """
        Update an existing menu.

        Only fields present in the request change. An explicit null
        description clears every locale.

        Raises:
            NotFoundError: If menu not found
        """
        menu = await self.repo.get_for_user(menu_id, user_id)
        provided = data.model_fields_set

        update_data: dict[str, Any] = {}
        if "name" in provided and data.name is not None:
            update_data.update(name_columns(data.name))
        if "description" in provided:
            update_data.update(description_columns(data.description))

        if not update_data:
            return menu

        self._log_operation(
            "Updating menu",
            menu_id=menu_id,
            fields=sorted(update_data.keys()),
        )

        return await self._execute_db_operation(
            "update_menu",
            self.repo.update_instance(menu, **update_data),
        )

    async def delete_menu(self, user_id: str, menu_id: str) -> None:
        """
        Delete a menu. Daily menus tagged with it keep the dangling id.

        Raises:
            NotFoundError: If menu not found
        """
        menu = await self.repo.get_for_user(menu_id, user_id)
        self._log_operation("Deleting menu", menu_id=menu_id)

        await self._execute_db_operation(
            "delete_menu",
            self.repo.delete_instance(menu),
        )
