"""
Dish Model.

A named food item in one course category, localized into English,
Spanish and Catalan. Names are stored as one column per locale.
"""

from enum import Enum

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from menu_planner.backend.models.base import Base, TimestampMixin, UserOwnedMixin, UUIDMixin


class DishType(str, Enum):
    """Course category of a dish."""

    FIRST = "first"
    SECOND = "second"
    DESSERT = "dessert"


class Dish(UUIDMixin, TimestampMixin, UserOwnedMixin, Base):
    """Dish database model."""

    __tablename__ = "dishes"

    name_en: Mapped[str] = mapped_column(String(255), nullable=False)
    name_es: Mapped[str] = mapped_column(String(255), nullable=False)
    name_ca: Mapped[str] = mapped_column(String(255), nullable=False)
    type: Mapped[str] = mapped_column(
        String(16),
        nullable=False,
        index=True,
    )

    @property
    def name(self) -> dict[str, str]:
        return {"en": self.name_en, "es": self.name_es, "ca": self.name_ca}

    def __repr__(self) -> str:
        return f"<Dish(id={self.id}, name_en={self.name_en!r}, type={self.type})>"
