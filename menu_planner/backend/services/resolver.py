"""
Daily Menu Resolver.

Maps a selected calendar date onto the daily menu already planned for
it, builds the pre-filled form for that date, and merges a new course
selection into the record to persist.

Dates are compared by calendar day only: both sides are normalized to a
``YYYY-MM-DD`` key taken from the value's own wall clock, so time of day
and timezone offset never affect a match. The lookup is a linear scan
over the user's plans.

These functions only read attributes (``id``, ``date``, ``menu_id``,
course ids, ``created_at``), so they work the same for ORM rows and for
records from the local JSON store.
"""

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Protocol, TypeVar

from menu_planner.backend.core.utils import new_id

DAY_KEY_FORMAT = "%Y-%m-%d"


class DatedRecord(Protocol):
    """Anything carrying a calendar date."""

    date: Any


RecordT = TypeVar("RecordT", bound=DatedRecord)

DateLike = date | datetime | str


def to_calendar_day(value: DateLike) -> date:
    """
    Reduce a date, datetime or ISO 8601 string to its calendar day.

    Raises:
        ValueError: If a string is not an ISO 8601 date or datetime
        TypeError: If the value is not a supported type
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        text = value.strip()
        if text.endswith(("Z", "z")):
            text = text[:-1] + "+00:00"
        return datetime.fromisoformat(text).date()
    raise TypeError(f"Unsupported date value: {value!r}")


def day_key(value: DateLike) -> str:
    """Normalize a date-like value to its ``YYYY-MM-DD`` day key."""
    return to_calendar_day(value).strftime(DAY_KEY_FORMAT)


def find_daily_menu(
    daily_menus: Iterable[RecordT],
    candidate: DateLike | None,
) -> RecordT | None:
    """
    Find the daily menu planned for the candidate's calendar day.

    Returns:
        The first record whose date falls on the same day, or None when
        there is no candidate or nothing is planned for that day
    """
    if candidate is None:
        return None

    wanted = day_key(candidate)
    for record in daily_menus:
        if day_key(record.date) == wanted:
            return record
    return None


def dates_with_menus(daily_menus: Iterable[DatedRecord]) -> set[str]:
    """Day keys that already carry a plan (calendar highlighting)."""
    return {day_key(record.date) for record in daily_menus}


@dataclass(frozen=True)
class CourseSelection:
    """Menu and dish choices for one day."""

    menu_id: str | None = None
    first_course_id: str | None = None
    second_course_id: str | None = None
    dessert_id: str | None = None

    @classmethod
    def from_record(cls, record: Any) -> "CourseSelection":
        return cls(
            menu_id=record.menu_id,
            first_course_id=record.first_course_id,
            second_course_id=record.second_course_id,
            dessert_id=record.dessert_id,
        )


@dataclass(frozen=True)
class DailyMenuForm:
    """
    Form state for a selected date.

    ``id`` is the identifier of the plan being edited, or None when the
    date has no plan yet and the selections start empty.
    """

    date: date
    id: str | None
    selection: CourseSelection

    @property
    def exists(self) -> bool:
        return self.id is not None


def load_form(daily_menus: Iterable[Any], candidate: DateLike) -> DailyMenuForm:
    """Build the pre-filled form for a date from the existing plans."""
    day = to_calendar_day(candidate)
    existing = find_daily_menu(daily_menus, day)
    if existing is None:
        return DailyMenuForm(date=day, id=None, selection=CourseSelection())
    return DailyMenuForm(
        date=day,
        id=existing.id,
        selection=CourseSelection.from_record(existing),
    )


def merge_daily_menu(
    existing: Any | None,
    day: date,
    selection: CourseSelection,
    now: datetime,
    id_factory: Callable[[], str] = new_id,
) -> dict[str, Any]:
    """
    Merge a selection into the record to persist for ``day``.

    An existing plan keeps its identifier and creation time; everything
    else is overwritten. Without one, a fresh identifier is generated.

    Returns:
        Field values for the persisted record
    """
    return {
        "id": existing.id if existing is not None else id_factory(),
        "date": day,
        "menu_id": selection.menu_id,
        "first_course_id": selection.first_course_id,
        "second_course_id": selection.second_course_id,
        "dessert_id": selection.dessert_id,
        "created_at": existing.created_at if existing is not None else now,
        "updated_at": now,
    }
