"""
Author API: Health Check Route
================================

What:  Health check endpoint for monitoring and load balancer probes.
How:   Probes the database with ``SELECT 1`` and reports uptime.

Status levels:
    - healthy:   Database reachable (HTTP 200)
    - unhealthy: Database unreachable (HTTP 503)
"""

import time

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from author_api import __version__
from author_api.schemas.author import HealthResponse

router = APIRouter(tags=["Health"])


@router.get(
    "/health",
    response_model=HealthResponse,
    responses={503: {"description": "Database unreachable", "model": HealthResponse}},
    summary="Service health check",
)
async def health_check(request: Request):
    database = request.app.state.database
    connected = await database.ping()

    body = HealthResponse(
        status="healthy" if connected else "unhealthy",
        version=__version__,
        database="connected" if connected else "disconnected",
        uptime_seconds=round(time.time() - request.app.state.started_at, 2),
    )
    if not connected:
        return JSONResponse(status_code=503, content=body.model_dump())
    return body
