"""
Verse Graph API — Health Check Route
======================================

What:  Health check endpoint for monitoring and load balancer checks.
How:   Pings ArangoDB with a version request and reports aggregate status.
Who:   Called by Docker health checks, load balancers, and monitoring systems.

Status levels:
    - healthy:   ArangoDB answered
    - unhealthy: ArangoDB unreachable (or no database handle configured)
"""

import logging
import time

from fastapi import APIRouter, Request

from verse_graph import __version__
from verse_graph.database import ping
from verse_graph.schemas.record import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

_start_time = time.time()


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
    description=(
        "Returns the health status of the backend service and its ArangoDB "
        "connection. Used by Docker health checks and load balancers."
    ),
)
def health_check(request: Request) -> HealthResponse:
    """
    Check the health of the service and its database.

    The database handle is read from `app.state.database`, set by the
    application factory. A factory built with injected stores and no handle
    reports the database as disconnected.
    """
    database = getattr(request.app.state, "database", None)
    db_status = "connected"
    overall = "healthy"

    if database is None or not ping(database):
        db_status = "disconnected"
        overall = "unhealthy"
        logger.warning("Health check: database unreachable")

    return HealthResponse(
        status=overall,
        version=__version__,
        database=db_status,
        uptime_seconds=round(time.time() - _start_time, 2),
    )
