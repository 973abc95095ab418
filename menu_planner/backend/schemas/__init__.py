# Pydantic schemas package
from menu_planner.backend.schemas.base import (
    ApiResponse,
    ErrorDetail,
    ErrorResponse,
    ResponseMetadata,
)
from menu_planner.backend.schemas.i18n import MultilingualText, OptionalMultilingualText

__all__ = [
    "ApiResponse",
    "ErrorDetail",
    "ErrorResponse",
    "MultilingualText",
    "OptionalMultilingualText",
    "ResponseMetadata",
]
