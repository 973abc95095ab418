"""
Health probes, mounted outside the versioned API prefix.

    GET /health        the process is up
    GET /health/ready  the database answers a trivial query
"""

import asyncio
import time
from typing import Any

from fastapi import APIRouter, HTTPException
from sqlalchemy import text

from menu_planner.backend.core.logging import get_logger
from menu_planner.backend.core.utils import utc_now

router = APIRouter()
logger = get_logger(__name__)

READY_TIMEOUT_SECONDS = 5


async def check_database() -> dict[str, Any]:
    """Run ``SELECT 1`` and report ``healthy`` with latency, or ``unhealthy`` with the error."""
    from menu_planner.backend.core.database import get_session_factory

    started = time.perf_counter()
    try:
        async with get_session_factory()() as session:
            await session.execute(text("SELECT 1"))
    except Exception as e:
        logger.warning("Database health check failed", extra={"error": str(e)})
        return {"status": "unhealthy", "error": str(e)}
    return {"status": "healthy", "latency_ms": int((time.perf_counter() - started) * 1000)}


@router.get("/health")
async def health_check() -> dict[str, str]:
    return {"status": "healthy"}


@router.get("/health/ready")
async def readiness_check() -> dict[str, Any]:
    """
    Answer 200 when the database is reachable within READY_TIMEOUT_SECONDS,
    503 with the failing check otherwise.
    """
    try:
        database = await asyncio.wait_for(check_database(), timeout=READY_TIMEOUT_SECONDS)
    except asyncio.TimeoutError:
        database = {"status": "unhealthy", "error": "timed out"}

    report = {
        "status": database["status"],
        "checks": {"database": database},
        "timestamp": utc_now().isoformat(),
    }
    if database["status"] != "healthy":
        logger.warning("Readiness check failed", extra={"checks": report["checks"]})
        raise HTTPException(status_code=503, detail=report)
    return report
