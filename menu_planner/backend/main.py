"""
FastAPI application for the menu planner.

Run with ``python cli.py server start`` or
``uvicorn menu_planner.backend.main:app``. The app is built on first
access so importing this module never reads configuration.
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from menu_planner.backend.api import health
from menu_planner.backend.api.v1 import router as api_v1_router
from menu_planner.backend.core.config import get_app_config, get_settings
from menu_planner.backend.core.database import dispose_engine
from menu_planner.backend.core.exception_handlers import register_exception_handlers
from menu_planner.backend.core.logging import get_logger, setup_logging
from menu_planner.backend.core.middleware import RequestContextMiddleware

logger = get_logger(__name__)

_app: FastAPI | None = None


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    app_config = get_app_config()
    setup_logging(level=app_config.logging.level)

    # Fail at startup, not at first sign-in, when JWT_SECRET is missing
    get_settings()

    logger.info(
        "Menu planner API starting",
        extra={
            "version": app_config.application.version,
            "env": app_config.application.environment,
            "api_prefix": app_config.application.api_prefix,
        },
    )
    try:
        yield
    finally:
        await dispose_engine()
        logger.info("Menu planner API stopped")


def create_app() -> FastAPI:
    """
    Build the application: middleware, error envelope, health probes and
    the /api/v1 routers for auth, dishes, menus and daily menus.
    """
    app_config = get_app_config()
    application = app_config.application

    # Interactive docs only in debug deployments
    docs_enabled = application.debug
    app = FastAPI(
        title=application.name,
        description=application.description,
        version=application.version,
        docs_url="/docs" if docs_enabled else None,
        redoc_url="/redoc" if docs_enabled else None,
        lifespan=lifespan,
    )

    if app_config.features.api_request_logging:
        app.add_middleware(RequestContextMiddleware)
    if application.cors.origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=application.cors.origins,
            allow_credentials=True,
            allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
            allow_headers=["Authorization", "Content-Type", "X-Request-ID", "X-Frontend-ID"],
            expose_headers=["X-Request-ID", "X-Response-Time"],
        )

    register_exception_handlers(app)
    app.include_router(health.router, tags=["health"])
    app.include_router(api_v1_router, prefix=application.api_prefix)
    return app


def get_app() -> FastAPI:
    global _app
    if _app is None:
        _app = create_app()
    return _app


def __getattr__(name: str) -> FastAPI:
    # uvicorn resolves "menu_planner.backend.main:app" through this hook
    if name == "app":
        return get_app()
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
