"""
Local JSON Store.

File-backed fallback for dishes, menus and daily menus. Each collection
is one JSON array in its own file, named after its collection key
(``dishes``, ``menus``, ``dailyMenus``), and is always read and written
whole.

Records use camelCase field names (``createdAt``, ``menuId``,
``firstCourse``, ...) with dates and timestamps as ISO 8601 strings.
A collection file that cannot be parsed is logged and treated as empty.

Usage:
    from menu_planner.backend.storage.local import LocalStore

    store = LocalStore.from_config()
    dish = store.create_dish(DishCreate(name=..., type=DishType.SECOND))
    daily_menu, created = store.save_daily_menu(DailyMenuSave(...))
"""

import datetime as dt
import json
import os
from collections.abc import Iterable
from pathlib import Path
from typing import Any, TypeVar

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, field_validator
from pydantic import ValidationError as PydanticValidationError
from pydantic.alias_generators import to_camel

from menu_planner.backend.core.config import find_project_root, get_app_config
from menu_planner.backend.core.config_schema import StorageKeysSchema
from menu_planner.backend.core.exceptions import NotFoundError, StorageError, ValidationError
from menu_planner.backend.core.logging import get_logger, log_with_source
from menu_planner.backend.core.utils import contains_casefold, new_id, utc_now
from menu_planner.backend.models.dish import DishType
from menu_planner.backend.schemas.daily_menu import DailyMenuSave
from menu_planner.backend.schemas.dish import DishCreate, DishUpdate
from menu_planner.backend.schemas.i18n import MultilingualText, OptionalMultilingualText
from menu_planner.backend.schemas.menu import MenuCreate, MenuUpdate
from menu_planner.backend.services.daily_menu import MISSING_INFORMATION
from menu_planner.backend.services.resolver import (
    CourseSelection,
    DailyMenuForm,
    dates_with_menus,
    find_daily_menu,
    load_form,
    merge_daily_menu,
    to_calendar_day,
)

logger = get_logger(__name__)


class LocalRecord(BaseModel):
    """Fields shared by every locally stored record."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    id: str
    created_at: dt.datetime
    updated_at: dt.datetime

    @field_validator("created_at", "updated_at")
    @classmethod
    def _naive_utc(cls, value: dt.datetime) -> dt.datetime:
        # Timestamps are kept naive UTC, like utc_now().
        if value.tzinfo is not None:
            return value.astimezone(dt.timezone.utc).replace(tzinfo=None)
        return value


class LocalDish(LocalRecord):
    name: MultilingualText
    type: DishType


class LocalMenu(LocalRecord):
    name: MultilingualText
    description: OptionalMultilingualText | None = None


class LocalDailyMenu(LocalRecord):
    date: dt.date
    menu_id: str | None = None
    first_course_id: str | None = Field(default=None, alias="firstCourse")
    second_course_id: str | None = Field(default=None, alias="secondCourse")
    dessert_id: str | None = Field(default=None, alias="dessert")

    @field_validator("date", mode="before")
    @classmethod
    def _calendar_day(cls, value: Any) -> Any:
        # Older files store the full timestamp of the selected day.
        if isinstance(value, str):
            return to_calendar_day(value)
        return value


RecordT = TypeVar("RecordT", bound=LocalRecord)


def _newest_first(records: Iterable[RecordT]) -> list[RecordT]:
    return sorted(records, key=lambda record: record.created_at, reverse=True)


def _find(records: list[RecordT], record_id: str, label: str) -> RecordT:
    for record in records:
        if record.id == record_id:
            return record
    raise NotFoundError(f"{label} not found: {record_id}")


class LocalStore:
    """
    JSON file store with the same operations as the database services.

    Not safe for concurrent writers; the last write of a collection wins.
    """

    def __init__(self, directory: Path | str, keys: StorageKeysSchema | None = None) -> None:
        self.directory = Path(directory)
        self.keys = keys or StorageKeysSchema(
            dishes="dishes",
            menus="menus",
            daily_menus="dailyMenus",
        )

    @classmethod
    def from_config(cls) -> "LocalStore":
        """Build the store from storage.yaml, relative to the project root."""
        storage = get_app_config().storage
        directory = Path(storage.local_dir)
        if not directory.is_absolute():
            directory = find_project_root() / directory
        return cls(directory, storage.keys)

    # -------------------------------------------------------------------------
    # Collection I/O
    # -------------------------------------------------------------------------

    def path_for(self, key: str) -> Path:
        """File holding the collection stored under ``key``."""
        return self.directory / f"{key}.json"

    def read_collection(self, key: str, model: type[RecordT]) -> list[RecordT]:
        """
        Read a whole collection.

        A missing file is an empty collection. A file that is not a JSON
        array of valid records is logged and also read as empty.
        """
        path = self.path_for(key)
        if not path.exists():
            return []

        try:
            raw = json.loads(path.read_text(encoding="utf-8"))
            return TypeAdapter(list[model]).validate_python(raw)
        except (json.JSONDecodeError, PydanticValidationError, UnicodeDecodeError) as e:
            log_with_source(
                logger,
                "storage",
                "error",
                "Discarding unreadable collection",
                key=key,
                path=str(path),
                error=str(e),
            )
            return []

    def write_collection(self, key: str, records: Iterable[LocalRecord]) -> None:
        """
        Replace a whole collection.

        Raises:
            StorageError: If the file cannot be written
        """
        path = self.path_for(key)
        payload = [record.model_dump(mode="json", by_alias=True) for record in records]
        tmp_path = path.with_suffix(".json.tmp")

        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            tmp_path.write_text(json.dumps(payload, ensure_ascii=False, indent=2), encoding="utf-8")
            os.replace(tmp_path, path)
        except OSError as e:
            log_with_source(
                logger,
                "storage",
                "error",
                "Failed to write collection",
                key=key,
                path=str(path),
                error=str(e),
            )
            raise StorageError(f"Could not save {key}")

        log_with_source(logger, "storage", "debug", "Collection written", key=key, count=len(payload))

    # -------------------------------------------------------------------------
    # Dishes
    # -------------------------------------------------------------------------

    def list_dishes(
        self,
        dish_type: DishType | None = None,
        query: str | None = None,
    ) -> list[LocalDish]:
        """List dishes newest first, optionally by course and search text."""
        dishes = self.read_collection(self.keys.dishes, LocalDish)
        if dish_type is not None:
            dishes = [dish for dish in dishes if dish.type == dish_type]
        if query:
            dishes = [
                dish for dish in dishes
                if any(contains_casefold(value, query) for value in dish.name.values())
            ]
        return _newest_first(dishes)

    def get_dish(self, dish_id: str) -> LocalDish:
        return _find(self.read_collection(self.keys.dishes, LocalDish), dish_id, "Dish")

    def create_dish(self, data: DishCreate) -> LocalDish:
        now = utc_now()
        dish = LocalDish(id=new_id(), name=data.name, type=data.type, created_at=now, updated_at=now)
        dishes = self.read_collection(self.keys.dishes, LocalDish)
        self.write_collection(self.keys.dishes, [*dishes, dish])
        log_with_source(logger, "storage", "info", "Dish created", dish_id=dish.id)
        return dish

    def update_dish(self, dish_id: str, data: DishUpdate) -> LocalDish:
        """
        Update a dish. Only provided fields change.

        Raises:
            NotFoundError: If the dish does not exist
        """
        dishes = self.read_collection(self.keys.dishes, LocalDish)
        dish = _find(dishes, dish_id, "Dish")

        changes: dict[str, Any] = {"updated_at": utc_now()}
        if data.name is not None:
            changes["name"] = data.name
        if data.type is not None:
            changes["type"] = data.type
        updated = dish.model_copy(update=changes)

        self.write_collection(
            self.keys.dishes,
            [updated if item.id == dish_id else item for item in dishes],
        )
        log_with_source(logger, "storage", "info", "Dish updated", dish_id=dish_id)
        return updated

    def delete_dish(self, dish_id: str) -> None:
        """
        Delete a dish. Daily menus that reference it are left as they are.

        Raises:
            NotFoundError: If the dish does not exist
        """
        dishes = self.read_collection(self.keys.dishes, LocalDish)
        _find(dishes, dish_id, "Dish")
        self.write_collection(self.keys.dishes, [item for item in dishes if item.id != dish_id])
        log_with_source(logger, "storage", "info", "Dish deleted", dish_id=dish_id)

    # -------------------------------------------------------------------------
    # Menus
    # -------------------------------------------------------------------------

    def list_menus(self, query: str | None = None) -> list[LocalMenu]:
        """List menus newest first, matching names and descriptions."""
        menus = self.read_collection(self.keys.menus, LocalMenu)
        if query:
            menus = [
                menu for menu in menus
                if any(
                    contains_casefold(value, query)
                    for value in [
                        *menu.name.values(),
                        *(menu.description.values() if menu.description else []),
                    ]
                )
            ]
        return _newest_first(menus)

    def get_menu(self, menu_id: str) -> LocalMenu:
        return _find(self.read_collection(self.keys.menus, LocalMenu), menu_id, "Menu")

    def create_menu(self, data: MenuCreate) -> LocalMenu:
        now = utc_now()
        menu = LocalMenu(
            id=new_id(),
            name=data.name,
            description=data.description,
            created_at=now,
            updated_at=now,
        )
        menus = self.read_collection(self.keys.menus, LocalMenu)
        self.write_collection(self.keys.menus, [*menus, menu])
        log_with_source(logger, "storage", "info", "Menu created", menu_id=menu.id)
        return menu

    def update_menu(self, menu_id: str, data: MenuUpdate) -> LocalMenu:
        """
        Update a menu. An explicit null description clears it.

        Raises:
            NotFoundError: If the menu does not exist
        """
        menus = self.read_collection(self.keys.menus, LocalMenu)
        menu = _find(menus, menu_id, "Menu")

        changes: dict[str, Any] = {"updated_at": utc_now()}
        if data.name is not None:
            changes["name"] = data.name
        if "description" in data.model_fields_set:
            changes["description"] = data.description
        updated = menu.model_copy(update=changes)

        self.write_collection(
            self.keys.menus,
            [updated if item.id == menu_id else item for item in menus],
        )
        log_with_source(logger, "storage", "info", "Menu updated", menu_id=menu_id)
        return updated

    def delete_menu(self, menu_id: str) -> None:
        """
        Delete a menu. Daily menus tagged with it are left as they are.

        Raises:
            NotFoundError: If the menu does not exist
        """
        menus = self.read_collection(self.keys.menus, LocalMenu)
        _find(menus, menu_id, "Menu")
        self.write_collection(self.keys.menus, [item for item in menus if item.id != menu_id])
        log_with_source(logger, "storage", "info", "Menu deleted", menu_id=menu_id)

    # -------------------------------------------------------------------------
    # Daily menus
    # -------------------------------------------------------------------------

    def list_daily_menus(
        self,
        date_from: dt.date | None = None,
        date_to: dt.date | None = None,
    ) -> list[LocalDailyMenu]:
        """List plans latest date first, optionally within a date range."""
        daily_menus = self.read_collection(self.keys.daily_menus, LocalDailyMenu)
        if date_from is not None:
            daily_menus = [item for item in daily_menus if item.date >= date_from]
        if date_to is not None:
            daily_menus = [item for item in daily_menus if item.date <= date_to]
        return sorted(daily_menus, key=lambda item: (item.date, item.created_at), reverse=True)

    def get_daily_menu(self, daily_menu_id: str) -> LocalDailyMenu:
        daily_menus = self.read_collection(self.keys.daily_menus, LocalDailyMenu)
        return _find(daily_menus, daily_menu_id, "Daily menu")

    def find_for_date(self, day: dt.date | dt.datetime | str) -> LocalDailyMenu | None:
        return find_daily_menu(self.read_collection(self.keys.daily_menus, LocalDailyMenu), day)

    def get_form(self, day: dt.date | dt.datetime | str) -> DailyMenuForm:
        return load_form(self.read_collection(self.keys.daily_menus, LocalDailyMenu), day)

    def get_planned_dates(self) -> list[str]:
        return sorted(dates_with_menus(self.read_collection(self.keys.daily_menus, LocalDailyMenu)))

    def save_daily_menu(self, data: DailyMenuSave) -> tuple[LocalDailyMenu, bool]:
        """
        Save the plan for a day: update it if the day is planned, insert otherwise.

        Returns:
            Tuple of (stored plan, True if it was created)

        Raises:
            ValidationError: If the date or the menu is missing
            StorageError: If the collection cannot be written
        """
        missing = [
            name for name in ("date", "menu_id")
            if getattr(data, name) is None or not str(getattr(data, name)).strip()
        ]
        if missing:
            raise ValidationError(MISSING_INFORMATION, details={"missing_fields": missing})

        daily_menus = self.read_collection(self.keys.daily_menus, LocalDailyMenu)
        existing = find_daily_menu(daily_menus, data.date)
        selection = CourseSelection(
            menu_id=data.menu_id,
            first_course_id=data.first_course_id,
            second_course_id=data.second_course_id,
            dessert_id=data.dessert_id,
        )
        saved = LocalDailyMenu(**merge_daily_menu(existing, data.date, selection, now=utc_now()))

        if existing is not None:
            records = [saved if item.id == existing.id else item for item in daily_menus]
        else:
            records = [*daily_menus, saved]
        self.write_collection(self.keys.daily_menus, records)

        log_with_source(
            logger,
            "storage",
            "info",
            "Daily menu updated" if existing is not None else "Daily menu created",
            daily_menu_id=saved.id,
            date=str(saved.date),
        )
        return saved, existing is None

    def delete_daily_menu(self, daily_menu_id: str) -> None:
        """
        Delete a plan.

        Raises:
            NotFoundError: If the plan does not exist
        """
        daily_menus = self.read_collection(self.keys.daily_menus, LocalDailyMenu)
        _find(daily_menus, daily_menu_id, "Daily menu")
        self.write_collection(
            self.keys.daily_menus,
            [item for item in daily_menus if item.id != daily_menu_id],
        )
        log_with_source(logger, "storage", "info", "Daily menu deleted", daily_menu_id=daily_menu_id)
