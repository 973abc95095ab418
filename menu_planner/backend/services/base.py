"""
Base Service.

Shared plumbing for the dish, menu, daily menu and auth services: the
request's session, a logger named after the concrete service module,
translation of SQLAlchemy failures into application errors, and input
checks that report every offending field at once.

Usage:
    class DishService(BaseService):
        def __init__(self, session: AsyncSession) -> None:
            super().__init__(session)
            self.repo = DishRepository(session)
"""

from collections.abc import Awaitable
from typing import Any, TypeVar

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from menu_planner.backend.core.exceptions import ConflictError, DatabaseError, ValidationError
from menu_planner.backend.core.logging import get_logger

T = TypeVar("T")


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _is_unique_violation(error: IntegrityError) -> bool:
    message = str(error.orig).lower()
    return "unique" in message or "duplicate" in message


class BaseService:
    """Parent of every database-backed service. Subclasses attach their repositories."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session
        self._logger = get_logger(type(self).__module__)

    @property
    def session(self) -> AsyncSession:
        return self._session

    async def _execute_db_operation(self, operation: str, coro: Awaitable[T]) -> T:
        """
        Await a repository call and translate database failures.

        Failures are logged and raised once; nothing is retried.
        Application errors raised inside ``coro`` pass through untouched.

        Raises:
            ConflictError: On a unique constraint violation (e.g. email taken)
            DatabaseError: On any other database failure
        """
        try:
            return await coro
        except IntegrityError as e:
            self._logger.warning(
                "Database integrity error",
                extra={"operation": operation, "error": str(e.orig)},
            )
            if _is_unique_violation(e):
                raise ConflictError("Resource already exists")
            raise DatabaseError(f"Database constraint violation: {operation}")
        except SQLAlchemyError as e:
            self._logger.error(
                "Database error",
                extra={"operation": operation, "error": str(e)},
            )
            raise DatabaseError(f"Database operation failed: {operation}")

    def _validate_required(
        self,
        fields: dict[str, Any],
        field_names: list[str],
        message: str = "Required fields missing",
    ) -> None:
        """
        Reject missing or blank values, naming all of them in ``missing_fields``.

        Raises:
            ValidationError: If any listed field is None or whitespace
        """
        missing = [name for name in field_names if _is_blank(fields.get(name))]
        if missing:
            raise ValidationError(message, details={"missing_fields": missing})

    def _validate_string_length(
        self,
        value: str,
        field_name: str,
        min_length: int | None = None,
        max_length: int | None = None,
    ) -> None:
        """
        Raises:
            ValidationError: If ``value`` is shorter or longer than allowed
        """
        if min_length is not None and len(value) < min_length:
            raise ValidationError(
                f"{field_name} too short",
                details={field_name: f"Minimum length is {min_length}"},
            )
        if max_length is not None and len(value) > max_length:
            raise ValidationError(
                f"{field_name} too long",
                details={field_name: f"Maximum length is {max_length}"},
            )

    def _log_operation(self, operation: str, **context: Any) -> None:
        self._logger.info(operation, extra={"service": type(self).__name__, **context})

    def _log_debug(self, message: str, **context: Any) -> None:
        self._logger.debug(message, extra={"service": type(self).__name__, **context})
