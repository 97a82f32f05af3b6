"""
Health check endpoints.
"""

import time

import aiosqlite
from fastapi import APIRouter

from repairshop import __version__
from repairshop.application.dto.responses import HealthResponse
from repairshop.config import get_logger
from repairshop.core.exceptions import StorageError

logger = get_logger(__name__)

router = APIRouter(prefix="/api/health", tags=["health"])

# Track startup time
_start_time = time.time()


@router.get("", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Service status, uptime and database reachability."""
    from repairshop.infrastructure.storage.sqlite import get_connection

    database = True
    try:
        async with get_connection() as conn:
            await conn.execute("SELECT 1")
    except (aiosqlite.Error, StorageError, OSError) as e:
        logger.warning("health_database_unreachable", error=str(e))
        database = False

    return HealthResponse(
        status="healthy" if database else "degraded",
        version=__version__,
        uptime_seconds=time.time() - _start_time,
        database=database,
    )
