"""
Petora Backend - Health Check Route
====================================

What:  Liveness and dependency status for monitors and container probes.
How:   Pings MongoDB. The service is "healthy" only when the database answers.

    healthy:    database reachable  (HTTP 200)
    unhealthy:  database unreachable (HTTP 200, body says so)
"""

import logging
import time

from fastapi import APIRouter, Depends

from petora import __version__
from petora.database import MongoDatabase
from petora.dependencies import get_database
from petora.schemas.common import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

_start_time = time.time()


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
)
async def health_check(database: MongoDatabase = Depends(get_database)) -> HealthResponse:
    if await database.ping():
        db_status = "connected"
        overall = "healthy"
    else:
        db_status = "disconnected"
        overall = "unhealthy"
        logger.warning("Health check: database unreachable")

    return HealthResponse(
        status=overall,
        version=__version__,
        database=db_status,
        uptime_seconds=round(time.time() - _start_time, 2),
    )
