# Database models package. Importing it registers every table on Base.metadata.
from menu_planner.backend.models.base import Base
from menu_planner.backend.models.daily_menu import DailyMenu
from menu_planner.backend.models.dish import Dish, DishType
from menu_planner.backend.models.menu import Menu
from menu_planner.backend.models.user import User

__all__ = [
    "Base",
    "DailyMenu",
    "Dish",
    "DishType",
    "Menu",
    "User",
]
