"""
API Version 1 Router.

Aggregates all v1 endpoint routers.
"""

from fastapi import APIRouter

from menu_planner.backend.api.v1.endpoints import auth, daily_menus, dishes, menus

router = APIRouter()

router.include_router(auth.router, prefix="/auth", tags=["auth"])
router.include_router(dishes.router, prefix="/dishes", tags=["dishes"])
router.include_router(menus.router, prefix="/menus", tags=["menus"])
router.include_router(daily_menus.router, prefix="/daily-menus", tags=["daily-menus"])
