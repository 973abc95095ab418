"""
Daily Menu Schemas.

Pydantic schemas for the daily planner: saving a plan for a date,
the pre-filled form for a date, and plan responses.
"""

import datetime as dt
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from menu_planner.backend.services.resolver import DailyMenuForm, to_calendar_day


class DailyMenuSave(BaseModel):
    """
    Schema for saving the plan of one date.

    ``date`` and ``menu_id`` are optional here so that a missing value
    is reported by the planner as missing information, not as a
    malformed request.
    """

    date: dt.date | None = Field(default=None, description="Calendar day to plan", examples=["2024-06-01"])
    menu_id: str | None = Field(default=None, max_length=36, description="Menu tagging the day")
    first_course_id: str | None = Field(default=None, max_length=36, description="First course dish")
    second_course_id: str | None = Field(default=None, max_length=36, description="Second course dish")
    dessert_id: str | None = Field(default=None, max_length=36, description="Dessert dish")

    @field_validator("date", mode="before")
    @classmethod
    def _calendar_day(cls, value: Any) -> Any:
        # Datetimes and ISO timestamps are accepted; only the day is kept.
        if not isinstance(value, (dt.date, str)):
            return value
        try:
            return to_calendar_day(value)
        except ValueError:
            return value


class DailyMenuResponse(BaseModel):
    """Schema for daily menu in API responses."""

    id: str = Field(description="Daily menu unique identifier")
    date: dt.date = Field(description="Planned calendar day")
    menu_id: str | None = Field(description="Menu tagging the day")
    first_course_id: str | None = Field(description="First course dish")
    second_course_id: str | None = Field(description="Second course dish")
    dessert_id: str | None = Field(description="Dessert dish")
    created_at: dt.datetime = Field(description="Creation timestamp")
    updated_at: dt.datetime = Field(description="Last update timestamp")

    model_config = ConfigDict(from_attributes=True)


class DailyMenuSaveResult(BaseModel):
    """Outcome of an upsert: the stored plan and whether it was new."""

    daily_menu: DailyMenuResponse
    action: Literal["created", "updated"]


class DailyMenuFormResponse(BaseModel):
    """Pre-filled planner form for a date."""

    date: dt.date
    id: str | None = Field(description="Plan being edited, null when the day is unplanned")
    exists: bool
    menu_id: str | None
    first_course_id: str | None
    second_course_id: str | None
    dessert_id: str | None

    @classmethod
    def from_form(cls, form: DailyMenuForm) -> "DailyMenuFormResponse":
        return cls(
            date=form.date,
            id=form.id,
            exists=form.exists,
            menu_id=form.selection.menu_id,
            first_course_id=form.selection.first_course_id,
            second_course_id=form.selection.second_course_id,
            dessert_id=form.selection.dessert_id,
        )
