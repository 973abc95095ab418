"""
Dish Service.

Business logic layer for dishes. Orchestrates the repository,
flattens multilingual names into columns, and implements search.
"""

from collections.abc import Iterable
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from menu_planner.backend.core.utils import contains_casefold
from menu_planner.backend.models.dish import Dish, DishType
from menu_planner.backend.repositories.dish import DishRepository
from menu_planner.backend.schemas.dish import DishCreate, DishUpdate
from menu_planner.backend.schemas.i18n import MultilingualText
from menu_planner.backend.services.base import BaseService


def name_columns(name: MultilingualText | dict[str, str]) -> dict[str, str]:
    """Spread a multilingual name into its name_<lang> columns."""
    if isinstance(name, MultilingualText):
        name = name.model_dump()
    return {f"name_{lang}": value for lang, value in name.items()}


def filter_dishes(dishes: Iterable[Dish], query: str | None) -> list[Dish]:
    """Keep dishes whose name matches the query in any locale."""
    if not query:
        return list(dishes)
    return [
        dish for dish in dishes
        if any(contains_casefold(value, query) for value in (dish.name_en, dish.name_es, dish.name_ca))
    ]


class DishService(BaseService):
    """
    Service for dish business logic.

    Handles dish creation, updates, listing and deletion for a single
    user. Deleting a dish never touches daily menus that reference it.
    """

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session)
        self.repo = DishRepository(session)

    async def create_dish(self, user_id: str, data: DishCreate) -> Dish:
        """
        Create a new dish.

        Args:
            user_id: Owner of the dish
            data: Dish creation data

        Returns:
            Created dish
        """
        self._log_operation("Creating dish", user_id=user_id, dish_type=data.type.value)

        dish = await self._execute_db_operation(
            "create_dish",
            self.repo.create(
                user_id=user_id,
                type=data.type.value,
                **name_columns(data.name),
            ),
        )

        self._log_debug("Dish created", dish_id=dish.id)
        return dish

    async def get_dish(self, user_id: str, dish_id: str) -> Dish:
        """
        Get one of the user's dishes.

        Raises:
            NotFoundError: If dish not found
        """
        return await self.repo.get_for_user(dish_id, user_id)

    async def list_dishes(
        self,
        user_id: str,
        dish_type: DishType | None = None,
        query: str | None = None,
    ) -> list[Dish]:
        """
        List the user's dishes, newest first.

        Args:
            user_id: Owner of the dishes
            dish_type: Only dishes of this course when given
            query: Case-insensitive substring matched against every locale

        Returns:
            List of dishes
        """
        if dish_type is not None:
            dishes = await self.repo.list_by_type(user_id, dish_type.value)
        else:
            dishes = await self.repo.list_for_user(user_id)
        return filter_dishes(dishes, query)

    async def update_dish(self, user_id: str, dish_id: str, data: DishUpdate) -> Dish:
        """
        Update an existing dish. The identifier is preserved.

        Raises:
            NotFoundError: If dish not found
        """
        dish = await self.repo.get_for_user(dish_id, user_id)

        update_data: dict[str, Any] = {}
        if data.name is not None:
            update_data.update(name_columns(data.name))
        if data.type is not None:
            update_data["type"] = data.type.value

        if not update_data:
            return dish

        self._log_operation(
            "Updating dish",
            dish_id=dish_id,
            fields=sorted(update_data.keys()),
        )

        return await self._execute_db_operation(
            "update_dish",
            self.repo.update_instance(dish, **update_data),
        )

    async def delete_dish(self, user_id: str, dish_id: str) -> None:
        """
        Delete a dish. Daily menus referencing it keep the dangling id.

        Raises:
            NotFoundError: If dish not found
        """
        dish = await self.repo.get_for_user(dish_id, user_id)
        self._log_operation("Deleting dish", dish_id=dish_id)

        await self._execute_db_operation(
            "delete_dish",
            self.repo.delete_instance(dish),
        )
