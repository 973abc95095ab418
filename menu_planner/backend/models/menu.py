"""
Menu Model.

A named, optionally described tag for a daily plan. It does not hold
a list of dishes; daily menus pick their dishes independently.
"""

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column

from menu_planner.backend.models.base import Base, TimestampMixin, UserOwnedMixin, UUIDMixin


class Menu(UUIDMixin, TimestampMixin, UserOwnedMixin, Base):
    """Menu database model."""

    __tablename__ = "menus"

    name_en: Mapped[str] = mapped_column(String(255), nullable=False)
    name_es: Mapped[str] = mapped_column(String(255), nullable=False)
    name_ca: Mapped[str] = mapped_column(String(255), nullable=False)
    description_en: Mapped[str | None] = mapped_column(Text, nullable=True)
    description_es: Mapped[str | None] = mapped_column(Text, nullable=True)
    description_ca: Mapped[str | None] = mapped_column(Text, nullable=True)

    @property
    def name(self) -> dict[str, str]:
        return {"en": self.name_en, "es": self.name_es, "ca": self.name_ca}

    @property
    def description(self) -> dict[str, str | None] | None:
        values = {
            "en": self.description_en,
            "es": self.description_es,
            "ca": self.description_ca,
        }
        if all(value is None for value in values.values()):
            return None
        return values

    def __repr__(self) -> str:
        return f"<Menu(id={self.id}, name_en={self.name_en!r})>"
