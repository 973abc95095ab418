"""
Daily Menu Model.

Assignment of one menu plus up to three dishes to a calendar date.

The menu and dish references are plain id columns without foreign keys:
deleting a dish or menu leaves the reference in place. At most one row
per user and date is kept by the upsert in DailyMenuService, not by a
database constraint.
"""

import datetime as dt

from sqlalchemy import Date, String
from sqlalchemy.orm import Mapped, mapped_column

from menu_planner.backend.models.base import Base, TimestampMixin, UserOwnedMixin, UUIDMixin


class DailyMenu(UUIDMixin, TimestampMixin, UserOwnedMixin, Base):
    """Daily menu database model."""

    __tablename__ = "daily_menus"

    date: Mapped[dt.date] = mapped_column(
        Date,
        nullable=False,
        index=True,
    )
    menu_id: Mapped[str | None] = mapped_column(String(36), nullable=True)
    first_course_id: Mapped[str | None] = mapped_column(String(36), nullable=True)
    second_course_id: Mapped[str | None] = mapped_column(String(36), nullable=True)
    dessert_id: Mapped[str | None] = mapped_column(String(36), nullable=True)

    def __repr__(self) -> str:
        return f"<DailyMenu(id={self.id}, date={self.date}, menu_id={self.menu_id})>"
