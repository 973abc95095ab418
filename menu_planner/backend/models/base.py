"""
Declarative base and the column mixins shared by the planner tables.

Every row has a UUID string id and creation/update timestamps (naive UTC).
Dishes, menus and daily menus also carry the owning user's id.
"""

from datetime import datetime

from sqlalchemy import DateTime, MetaData, String
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from menu_planner.backend.core.utils import new_id, utc_now

# Stable constraint names so the generated DDL is the same on every backend
NAMING_CONVENTION = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "pk": "pk_%(table_name)s",
}


class Base(DeclarativeBase):
    metadata = MetaData(naming_convention=NAMING_CONVENTION)


class UUIDMixin:
    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)


class TimestampMixin:
    created_at: Mapped[datetime] = mapped_column(DateTime, default=utc_now, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, default=utc_now, onupdate=utc_now, nullable=False
    )


class UserOwnedMixin:
    """Row visible only to the account whose id is in ``user_id``."""

    user_id: Mapped[str] = mapped_column(String(36), nullable=False, index=True)
