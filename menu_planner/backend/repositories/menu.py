"""
Menu Repository.

Data access layer for menus.
"""

from menu_planner.backend.models.menu import Menu
from menu_planner.backend.repositories.base import UserScopedRepository


class MenuRepository(UserScopedRepository[Menu]):
    """Repository for Menu model. Standard user-scoped CRUD only."""

    model = Menu
