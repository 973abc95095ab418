"""
Custom Exceptions.

Each application error carries a stable error code and the HTTP status
the API answers with. Services and the local store raise these; the
exception handlers turn them into the error envelope.
"""

from typing import Any


class ApplicationError(Exception):
    """Base exception for all application errors."""

    default_code = "SYS_INTERNAL_ERROR"
    default_message = "Internal error"
    status_code = 500

    def __init__(
        self,
        message: str | None = None,
        code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.message = message or self.default_message
        self.code = code or self.default_code
        self.details = details or {}
        super().__init__(self.message)


class NotFoundError(ApplicationError):
    """A dish, menu, plan or user does not exist for the caller."""

    default_code = "RES_NOT_FOUND"
    default_message = "Resource not found"
    status_code = 404


class ValidationError(ApplicationError):
    """Input is well-formed but not acceptable (e.g. no menu selected)."""

    default_code = "VAL_VALIDATION_ERROR"
    default_message = "Validation failed"
    status_code = 400


class AuthenticationError(ApplicationError):
    default_code = "AUTH_UNAUTHORIZED"
    default_message = "Authentication required"
    status_code = 401


class ConflictError(ApplicationError):
    default_code = "RES_CONFLICT"
    default_message = "Resource conflict"
    status_code = 409


class DatabaseError(ApplicationError):
    """The database rejected or failed an operation. Nothing was retried."""

    default_code = "SYS_DATABASE_ERROR"
    default_message = "Database error"
    status_code = 503


class StorageError(ApplicationError):
    """The local JSON store could not write a collection."""

    default_code = "SYS_STORAGE_ERROR"
    default_message = "Local storage error"
    status_code = 500
