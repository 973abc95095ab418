"""
Daily Menus API Endpoints.

Planner endpoints: list plans, load the form for a date, save a plan
for a date (upsert), and delete a plan.
"""

import datetime as dt

from fastapi import APIRouter, Query, Response

from menu_planner.backend.core.dependencies import CurrentUser, DbSession, RequestId
from menu_planner.backend.core.exceptions import ValidationError
from menu_planner.backend.schemas.base import ApiResponse, ResponseMetadata
from menu_planner.backend.schemas.daily_menu import (
    DailyMenuFormResponse,
    DailyMenuResponse,
    DailyMenuSave,
    DailyMenuSaveResult,
)
from menu_planner.backend.services.daily_menu import DailyMenuService
from menu_planner.backend.services.resolver import to_calendar_day

router = APIRouter()


def _parse_day(value: str) -> dt.date:
    try:
        return to_calendar_day(value)
    except ValueError:
        raise ValidationError("Invalid date", details={"date": value})


@router.get(
    "",
    response_model=ApiResponse[list[DailyMenuResponse]],
    summary="List daily menus",
    description="List plans latest date first, optionally within a date range.",
)
async def list_daily_menus(
    user: CurrentUser,
    db: DbSession,
    request_id: RequestId,
    date_from: dt.date | None = Query(default=None, description="First day to include"),
    date_to: dt.date | None = Query(default=None, description="Last day to include"),
) -> ApiResponse[list[DailyMenuResponse]]:
    """List daily menus."""
    service = DailyMenuService(db)
    daily_menus = await service.list_daily_menus(user.id, date_from=date_from, date_to=date_to)
    return ApiResponse.listing([DailyMenuResponse.model_validate(item) for item in daily_menus], request_id)


@router.get(
    "/dates",
    response_model=ApiResponse[list[str]],
    summary="Planned dates",
    description="Days (YYYY-MM-DD) that already have a plan, for calendar highlighting.",
)
async def list_planned_dates(
    user: CurrentUser,
    db: DbSession,
    request_id: RequestId,
) -> ApiResponse[list[str]]:
    """List planned days."""
    service = DailyMenuService(db)
    dates = await service.get_planned_dates(user.id)
    return ApiResponse.listing(dates, request_id)


@router.get(
    "/form",
    response_model=ApiResponse[DailyMenuFormResponse],
    summary="Planner form for a date",
    description=(
        "Resolve a date (time of day and offset are ignored) to its plan. "
        "A planned day returns its selections; an unplanned day returns empty ones."
    ),
)
async def get_daily_menu_form(
    user: CurrentUser,
    db: DbSession,
    request_id: RequestId,
    date: str = Query(..., min_length=10, max_length=40, description="ISO date or datetime"),
) -> ApiResponse[DailyMenuFormResponse]:
    """Load the form for a date."""
    service = DailyMenuService(db)
    form = await service.get_form(user.id, _parse_day(date))
    return ApiResponse(
        data=DailyMenuFormResponse.from_form(form),
        metadata=ResponseMetadata(request_id=request_id),
    )


@router.put(
    "",
    response_model=ApiResponse[DailyMenuSaveResult],
    summary="Save the plan for a date",
    description=(
        "Upsert keyed by calendar day: updates the day's plan when it exists "
        "(id and created_at kept), inserts a new one otherwise."
    ),
)
async def save_daily_menu(
    data: DailyMenuSave,
    user: CurrentUser,
    db: DbSession,
    request_id: RequestId,
    response: Response,
) -> ApiResponse[DailyMenuSaveResult]:
    """Save a daily menu."""
    service = DailyMenuService(db)
    daily_menu, created = await service.save_daily_menu(user.id, data)
    response.status_code = 201 if created else 200
    return ApiResponse(
        data=DailyMenuSaveResult(
            daily_menu=DailyMenuResponse.model_validate(daily_menu),
            action="created" if created else "updated",
        ),
        metadata=ResponseMetadata(request_id=request_id),
    )


@router.get(
    "/{daily_menu_id}",
    response_model=ApiResponse[DailyMenuResponse],
    summary="Get a daily menu",
)
async def get_daily_menu(
    daily_menu_id: str,
    user: CurrentUser,
    db: DbSession,
    request_id: RequestId,
) -> ApiResponse[DailyMenuResponse]:
    """Get a daily menu by ID."""
    service = DailyMenuService(db)
    daily_menu = await service.get_daily_menu(user.id, daily_menu_id)
    return ApiResponse(
        data=DailyMenuResponse.model_validate(daily_menu),
        metadata=ResponseMetadata(request_id=request_id),
    )


@router.delete(
    "/{daily_menu_id}",
    status_code=204,
    summary="Delete a daily menu",
)
async def delete_daily_menu(
    daily_menu_id: str,
    user: CurrentUser,
    db: DbSession,
) -> None:
    """Delete a daily menu."""
    service = DailyMenuService(db)
    await service.delete_daily_menu(user.id, daily_menu_id)
