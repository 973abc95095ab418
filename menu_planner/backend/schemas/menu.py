"""
Menu Schemas.

Pydantic schemas for menu API request/response validation.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from menu_planner.backend.schemas.i18n import MultilingualText, OptionalMultilingualText


class MenuCreate(BaseModel):
    """Schema for creating a new menu."""

    name: MultilingualText = Field(..., description="Menu name in every locale")
    description: OptionalMultilingualText | None = Field(
        default=None,
        description="Optional description per locale",
    )


class MenuUpdate(BaseModel):
    """Schema for updating an existing menu."""

    name: MultilingualText | None = Field(default=None, description="Menu name in every locale")
    description: OptionalMultilingualText | None = Field(
        default=None,
        description="Description per locale; send null to clear it",
    )


class MenuResponse(BaseModel):
    """Schema for menu in API responses."""

    id: str = Field(description="Menu unique identifier")
    name: MultilingualText = Field(description="Menu name in every locale")
    description: OptionalMultilingualText | None = Field(description="Description per locale")
    created_at: datetime = Field(description="Creation timestamp")
    updated_at: datetime = Field(description="Last update timestamp")

    model_config = ConfigDict(from_attributes=True)
