"""
Dishes API Endpoints.

REST API endpoints for dish management.
"""

from fastapi import APIRouter, Query

from menu_planner.backend.core.dependencies import CurrentUser, DbSession, RequestId
from menu_planner.backend.models.dish import DishType
from menu_planner.backend.schemas.base import ApiResponse, ResponseMetadata
from menu_planner.backend.schemas.dish import DishCreate, DishResponse, DishUpdate
from menu_planner.backend.services.dish import DishService

router = APIRouter()


@router.post(
    "",
    response_model=ApiResponse[DishResponse],
    status_code=201,
    summary="Create a dish",
    description="Create a new dish with a name in every locale and a course type.",
)
async def create_dish(
    data: DishCreate,
    user: CurrentUser,
    db: DbSession,
    request_id: RequestId,
) -> ApiResponse[DishResponse]:
    """Create a new dish."""
    service = DishService(db)
    dish = await service.create_dish(user.id, data)
    return ApiResponse(
        data=DishResponse.model_validate(dish),
        metadata=ResponseMetadata(request_id=request_id),
    )


@router.get(
    "",
    response_model=ApiResponse[list[DishResponse]],
    summary="List dishes",
    description="List dishes newest first, optionally by course and search text.",
)
async def list_dishes(
    user: CurrentUser,
    db: DbSession,
    request_id: RequestId,
    type: DishType | None = Query(
        default=None,
        description="Only dishes of this course",
    ),
    q: str | None = Query(
        default=None,
        max_length=100,
        description="Case-insensitive search over every locale",
    ),
) -> ApiResponse[list[DishResponse]]:
    """List dishes."""
    service = DishService(db)
    dishes = await service.list_dishes(user.id, dish_type=type, query=q)
    return ApiResponse.listing([DishResponse.model_validate(dish) for dish in dishes], request_id)


@router.get(
    "/{dish_id}",
    response_model=ApiResponse[DishResponse],
    summary="Get a dish",
)
async def get_dish(
    dish_id: str,
    user: CurrentUser,
    db: DbSession,
    request_id: RequestId,
) -> ApiResponse[DishResponse]:
    """Get a dish by ID."""
    service = DishService(db)
    dish = await service.get_dish(user.id, dish_id)
    return ApiResponse(
        data=DishResponse.model_validate(dish),
        metadata=ResponseMetadata(request_id=request_id),
    )


@router.patch(
    "/{dish_id}",
    response_model=ApiResponse[DishResponse],
    summary="Update a dish",
    description="Update an existing dish. Only provided fields are updated.",
)
async def update_dish(
    dish_id: str,
    data: DishUpdate,
    user: CurrentUser,
    db: DbSession,
    request_id: RequestId,
) -> ApiResponse[DishResponse]:
    """Update a dish."""
    service = DishService(db)
    dish = await service.update_dish(user.id, dish_id, data)
    return ApiResponse(
        data=DishResponse.model_validate(dish),
        metadata=ResponseMetadata(request_id=request_id),
    )


@router.delete(
    "/{dish_id}",
    status_code=204,
    summary="Delete a dish",
    description="Permanently delete a dish. Daily menus that reference it are left as they are.",
)
async def delete_dish(
    dish_id: str,
    user: CurrentUser,
    db: DbSession,
) -> None:
    """Delete a dish."""
    service = DishService(db)
    await service.delete_dish(user.id, dish_id)
