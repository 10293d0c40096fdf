"""
DevConnector Backend — Health Check Route
===========================================

What:  Health check endpoint for monitoring and load balancer probes.
How:   Pings MongoDB and reports the result with the service version and
       uptime.
Who:   Called by Docker health checks, load balancers and monitoring.

Status levels:
    - healthy:   MongoDB answered the ping (HTTP 200)
    - unhealthy: MongoDB unreachable (HTTP 503)
"""

import logging
import time

from fastapi import APIRouter, Depends, Response

from devconnector import __version__
from devconnector.database import Database, get_database
from devconnector.schemas.common import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

_start_time = time.time()


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
)
async def health_check(
    response: Response,
    database: Database = Depends(get_database),
) -> HealthResponse:
    db_status = "connected"
    overall = "healthy"

    try:
        await database.ping()
    except Exception as e:
        db_status = "disconnected"
        overall = "unhealthy"
        response.status_code = 503
        logger.warning("Health check: MongoDB unreachable: %s", str(e))

    return HealthResponse(
        status=overall,
        version=__version__,
        database=db_status,
        uptime_seconds=round(time.time() - _start_time, 2),
    )
