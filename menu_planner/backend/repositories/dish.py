"""
Dish Repository.

User-scoped access to dishes, plus the per-course listing that feeds
the planner's first course, second course and dessert selectors.
"""

from menu_planner.backend.models.dish import Dish
from menu_planner.backend.repositories.base import UserScopedRepository


class DishRepository(UserScopedRepository[Dish]):
    model = Dish

    async def list_by_type(self, user_id: str, dish_type: str) -> list[Dish]:
        """
        The user's dishes of one course, newest first.

        Args:
            user_id: Owner of the dishes
            dish_type: first, second or dessert
        """
        result = await self.session.execute(
            self._owned_by(user_id)
            .where(Dish.type == dish_type)
            .order_by(Dish.created_at.desc())
        )
        return list(result.scalars().all())
