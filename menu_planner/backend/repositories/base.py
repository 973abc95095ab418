"""
Base Repositories.

``BaseRepository`` holds the session and the writes every table shares.
``UserScopedRepository`` adds reads that always filter on the owner, so
a dish, menu or daily menu belonging to another account behaves exactly
like one that does not exist.

Usage:
    class DishRepository(UserScopedRepository[Dish]):
        model = Dish
"""

from typing import Any, Generic, TypeVar

from sqlalchemy import Select, select
from sqlalchemy.ext.asyncio import AsyncSession

from menu_planner.backend.core.exceptions import NotFoundError
from menu_planner.backend.models.base import Base

ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    model: type[ModelType]

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def get_by_id_or_none(self, id: str) -> ModelType | None:
        return await self.session.get(self.model, id)

    async def create(self, **fields: Any) -> ModelType:
        """Insert a row and return it with server defaults loaded."""
        instance = self.model(**fields)
        self.session.add(instance)
        await self.session.flush()
        await self.session.refresh(instance)
        return instance

    async def update_instance(self, instance: ModelType, **fields: Any) -> ModelType:
        """
        Set the given columns on a loaded row and flush.

        Keys that are not attributes of the model are ignored.
        """
        for key, value in fields.items():
            if hasattr(instance, key):
                setattr(instance, key, value)
        await self.session.flush()
        await self.session.refresh(instance)
        return instance

    async def delete_instance(self, instance: ModelType) -> None:
        await self.session.delete(instance)
        await self.session.flush()


class UserScopedRepository(BaseRepository[ModelType]):
    """Reads restricted to rows whose ``user_id`` matches the caller."""

    def _owned_by(self, user_id: str) -> Select[tuple[ModelType]]:
        return select(self.model).where(self.model.user_id == user_id)

    async def get_for_user(self, id: str, user_id: str) -> ModelType:
        """
        Raises:
            NotFoundError: If the row is missing or owned by another user
        """
        result = await self.session.execute(self._owned_by(user_id).where(self.model.id == id))
        instance = result.scalar_one_or_none()
        if instance is None:
            raise NotFoundError(f"{self.model.__name__} not found")
        return instance

    async def list_for_user(self, user_id: str) -> list[ModelType]:
        """The user's rows, most recently created first."""
        result = await self.session.execute(
            self._owned_by(user_id).order_by(self.model.created_at.desc())
        )
        return list(result.scalars().all())
