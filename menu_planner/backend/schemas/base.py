"""
Response Envelope Schemas.

Every endpoint except 204 deletes answers with the same envelope:
``{"success", "data", "error", "metadata"}``. List endpoints also report
how many items they returned in ``metadata.count``.
"""

from datetime import datetime
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field

from menu_planner.backend.core.utils import utc_now

DataT = TypeVar("DataT")


class ResponseMetadata(BaseModel):
    """Request correlation and timing for one response."""

    timestamp: datetime = Field(default_factory=utc_now)
    request_id: str | None = None
    count: int | None = Field(default=None, description="Number of items in a list response")


class ErrorDetail(BaseModel):
    """Machine-readable code plus a message safe to show the user."""

    code: str = Field(examples=["VAL_VALIDATION_ERROR"])
    message: str = Field(examples=["Please select a date and menu type"])
    details: dict[str, Any] | None = None


class ApiResponse(BaseModel, Generic[DataT]):
    """Successful response carrying ``data``."""

    success: bool = True
    data: DataT | None = None
    error: ErrorDetail | None = None
    metadata: ResponseMetadata = Field(default_factory=ResponseMetadata)

    model_config = ConfigDict(from_attributes=True)

    @classmethod
    def listing(cls, items: list[Any], request_id: str | None) -> "ApiResponse[Any]":
        """Wrap a list and record its length in the metadata."""
        return cls(data=items, metadata=ResponseMetadata(request_id=request_id, count=len(items)))


class ErrorResponse(BaseModel):
    """Failed response: ``data`` is always null."""

    success: bool = False
    data: None = None
    error: ErrorDetail
    metadata: ResponseMetadata = Field(default_factory=ResponseMetadata)
