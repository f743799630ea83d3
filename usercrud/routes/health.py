"""
UserCRUD - Health Check Route
==============================

What:  GET /health reports whether the application can reach MongoDB.
Who:   Container health checks and anyone debugging a hanging deployment.

Status levels:
    - healthy:   MongoDB answered a ping (HTTP 200)
    - unhealthy: MongoDB unreachable or not connected (HTTP 503)
"""

import logging
import time

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from usercrud import __version__
from usercrud.schemas.health import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

_start_time = time.time()


@router.get("/health", response_model=HealthResponse, summary="Service health check")
async def health_check(request: Request) -> JSONResponse:
    """
    Ping the database and return the aggregate status.

    Reads the store directly from app.state rather than through
    `get_record_store`, so a missing store reports "disconnected" instead of
    raising.
    """
    store = getattr(request.app.state, "record_store", None)

    database = "disconnected"
    if store is not None and await store.ping():
        database = "connected"
    else:
        logger.warning("Health check: database unreachable")

    healthy = database == "connected"
    body = HealthResponse(
        status="healthy" if healthy else "unhealthy",
        version=__version__,
        database=database,
        uptime_seconds=round(time.time() - _start_time, 2),
    )
    return JSONResponse(status_code=200 if healthy else 503, content=body.model_dump())
