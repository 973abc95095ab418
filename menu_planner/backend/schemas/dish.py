"""
Dish Schemas.

Pydantic schemas for dish API request/response validation.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from menu_planner.backend.models.dish import DishType
from menu_planner.backend.schemas.i18n import MultilingualText


class DishCreate(BaseModel):
    """Schema for creating a new dish."""

    name: MultilingualText = Field(..., description="Dish name in every locale")
    type: DishType = Field(..., description="Course category", examples=["second"])


class DishUpdate(BaseModel):
    """Schema for updating an existing dish."""

    name: MultilingualText | None = Field(default=None, description="Dish name in every locale")
    type: DishType | None = Field(default=None, description="Course category")


class DishResponse(BaseModel):
    """Schema for dish in API responses."""

    id: str = Field(description="Dish unique identifier")
    name: MultilingualText = Field(description="Dish name in every locale")
    type: DishType = Field(description="Course category")
    created_at: datetime = Field(description="Creation timestamp")
    updated_at: datetime = Field(description="Last update timestamp")

    model_config = ConfigDict(from_attributes=True)
