"""
Menus API Endpoints.

REST API endpoints for menu management.
"""

from fastapi import APIRouter, Query

from menu_planner.backend.core.dependencies import CurrentUser, DbSession, RequestId
from menu_planner.backend.schemas.base import ApiResponse, ResponseMetadata
from menu_planner.backend.schemas.menu import MenuCreate, MenuResponse, MenuUpdate
from menu_planner.backend.services.menu import MenuService

router = APIRouter()


@router.post(
    "",
    response_model=ApiResponse[MenuResponse],
    status_code=201,
    summary="Create a menu",
)
async def create_menu(
    data: MenuCreate,
    user: CurrentUser,
    db: DbSession,
    request_id: RequestId,
) -> ApiResponse[MenuResponse]:
    """Create a new menu."""
    service = MenuService(db)
    menu = await service.create_menu(user.id, data)
    return ApiResponse(
        data=MenuResponse.model_validate(menu),
        metadata=ResponseMetadata(request_id=request_id),
    )


@router.get(
    "",
    response_model=ApiResponse[list[MenuResponse]],
    summary="List menus",
    description="List menus newest first, optionally filtered by name or description.",
)
async def list_menus(
    user: CurrentUser,
    db: DbSession,
    request_id: RequestId,
    q: str | None = Query(
        default=None,
        max_length=100,
        description="Case-insensitive search over names and descriptions",
    ),
) -> ApiResponse[list[MenuResponse]]:
    """List menus."""
    service = MenuService(db)
    menus = await service.list_menus(user.id, query=q)
    return ApiResponse.listing([MenuResponse.model_validate(menu) for menu in menus], request_id)


@router.get(
    "/{menu_id}",
    response_model=ApiResponse[MenuResponse],
    summary="Get a menu",
)
async def get_menu(
    menu_id: str,
    user: CurrentUser,
    db: DbSession,
    request_id: RequestId,
) -> ApiResponse[MenuResponse]:
    """Get a menu by ID."""
    service = MenuService(db)
    menu = await service.get_menu(user.id, menu_id)
    return ApiResponse(
        data=MenuResponse.model_validate(menu),
        metadata=ResponseMetadata(request_id=request_id),
    )


@router.patch(
    "/{menu_id}",
    response_model=ApiResponse[MenuResponse],
    summary="Update a menu",
    description="Update an existing menu. Only provided fields are updated.",
)
async def update_menu(
    menu_id: str,
    data: MenuUpdate,
    user: CurrentUser,
    db: DbSession,
    request_id: RequestId,
) -> ApiResponse[MenuResponse]:
    """Update a menu."""
    service = MenuService(db)
    menu = await service.update_menu(user.id, menu_id, data)
    return ApiResponse(
        data=MenuResponse.model_validate(menu),
        metadata=ResponseMetadata(request_id=request_id),
    )


@router.delete(
    "/{menu_id}",
    status_code=204,
    summary="Delete a menu",
    description="Permanently delete a menu. Daily menus tagged with it are left as they are.",
)
async def delete_menu(
    menu_id: str,
    user: CurrentUser,
    db: DbSession,
) -> None:
    """Delete a menu."""
    service = MenuService(db)
    await service.delete_menu(user.id, menu_id)
