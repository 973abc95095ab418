"""Unit tests for DishService and MenuService with mocked repositories."""

from types import SimpleNamespace
from unittest.mock import AsyncMock

import pytest

from menu_planner.backend.models.dish import DishType
from menu_planner.backend.schemas.dish import DishCreate, DishUpdate
from menu_planner.backend.schemas.menu import MenuCreate, MenuUpdate
from menu_planner.backend.services.dish import DishService, filter_dishes, name_columns
from menu_planner.backend.services.menu import MenuService, description_columns, filter_menus

PAELLA = {"en": "Paella", "es": "Paella", "ca": "Paella"}


def _dish(dish_id, en, es, ca):
    return SimpleNamespace(id=dish_id, name_en=en, name_es=es, name_ca=ca)


def _menu(menu_id, name, description=None):
    description = description or {}
    return SimpleNamespace(
        id=menu_id,
        name_en=name,
        name_es=name,
        name_ca=name,
        description_en=description.get("en"),
        description_es=description.get("es"),
        description_ca=description.get("ca"),
    )


def test_name_columns():
    assert name_columns(PAELLA) == {"name_en": "Paella", "name_es": "Paella", "name_ca": "Paella"}


def test_description_columns_clear_all_locales():
    assert description_columns(None) == {
        "description_en": None,
        "description_es": None,
        "description_ca": None,
    }


def test_filter_dishes_matches_any_locale():
    dishes = [
        _dish("1", "Lentil soup", "Sopa de lentejas", "Sopa de llenties"),
        _dish("2", "Cream caramel", "Flan", "Flam"),
    ]

    assert [d.id for d in filter_dishes(dishes, "LLENTIES")] == ["1"]
    assert [d.id for d in filter_dishes(dishes, "flan")] == ["2"]
    assert filter_dishes(dishes, "") == dishes


def test_filter_menus_includes_descriptions():
    menus = [
        _menu("1", "Weekday", {"en": "Quick lunches"}),
        _menu("2", "Sunday"),
    ]

    assert [m.id for m in filter_menus(menus, "lunch")] == ["1"]
    assert [m.id for m in filter_menus(menus, "sun")] == ["2"]


class TestDishService:
    """Tests for DishService."""

    @pytest.fixture
    def service(self, mock_db_session):
        service = DishService(mock_db_session)
        service.repo = AsyncMock()
        return service

    async def test_create_flattens_names(self, service):
        service.repo.create.return_value = SimpleNamespace(id="dish-1")

        await service.create_dish("user-1", DishCreate(name=PAELLA, type="second"))

        service.repo.create.assert_awaited_once_with(
            user_id="user-1",
            type="second",
            name_en="Paella",
            name_es="Paella",
            name_ca="Paella",
        )

    async def test_list_by_type_uses_type_query(self, service):
        service.repo.list_by_type.return_value = []

        await service.list_dishes("user-1", dish_type=DishType.DESSERT)

        service.repo.list_by_type.assert_awaited_once_with("user-1", "dessert")
        service.repo.list_for_user.assert_not_awaited()

    async def test_update_without_changes_skips_write(self, service):
        dish = _dish("dish-1", "Paella", "Paella", "Paella")
        service.repo.get_for_user.return_value = dish

        result = await service.update_dish("user-1", "dish-1", DishUpdate())

        assert result is dish
        service.repo.update_instance.assert_not_awaited()

    async def test_update_type_only(self, service):
        dish = _dish("dish-1", "Paella", "Paella", "Paella")
        service.repo.get_for_user.return_value = dish
        service.repo.update_instance.return_value = dish

        await service.update_dish("user-1", "dish-1", DishUpdate(type="first"))

        service.repo.update_instance.assert_awaited_once_with(dish, type="first")


class TestMenuService:
    """Tests for MenuService."""

    @pytest.fixture
    def service(self, mock_db_session):
        service = MenuService(mock_db_session)
        service.repo = AsyncMock()
        return service

    async def test_create_without_description(self, service):
        service.repo.create.return_value = SimpleNamespace(id="menu-1")

        await service.create_menu("user-1", MenuCreate(name=PAELLA))

        kwargs = service.repo.create.await_args.kwargs
        assert kwargs["description_en"] is None
        assert kwargs["name_ca"] == "Paella"

    async def test_rename_keeps_description(self, service):
        menu = _menu("menu-1", "Weekday", {"en": "Quick lunches"})
        service.repo.get_for_user.return_value = menu
        service.repo.update_instance.return_value = menu

        await service.update_menu("user-1", "menu-1", MenuUpdate(name=PAELLA))

        kwargs = service.repo.update_instance.await_args.kwargs
        assert set(kwargs) == {"name_en", "name_es", "name_ca"}

    async def test_explicit_null_clears_description(self, service):
        menu = _menu("menu-1", "Weekday", {"en": "Quick lunches"})
        service.repo.get_for_user.return_value = menu
        service.repo.update_instance.return_value = menu

        await service.update_menu("user-1", "menu-1", MenuUpdate(description=None))

        service.repo.update_instance.assert_awaited_once_with(
            menu,
            description_en=None,
            description_es=None,
            description_ca=None,
        )
