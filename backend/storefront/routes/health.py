"""
Storefront Backend: Health Check Route
=======================================

What:  Liveness greeting and a health probe for monitoring.
How:   Runs SELECT 1 through the gateway; reports the running request total
       and uptime.

Status levels:
    - healthy:   database reachable (HTTP 200)
    - unhealthy: database unreachable (HTTP 503)
"""

import logging
import time

from fastapi import APIRouter, Depends, Response
from fastapi.responses import PlainTextResponse

from storefront import __version__
from storefront.exceptions import DatabaseError
from storefront.middleware.logging import request_counter
from storefront.schemas.common import HealthResponse
from storefront.services.gateway import PersistenceGateway, get_gateway

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

_start_time = time.time()


@router.get("/", response_class=PlainTextResponse, summary="Greeting")
async def root() -> str:
    return "Hello, World!"


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
)
async def health_check(
    response: Response,
    gateway: PersistenceGateway = Depends(get_gateway),
) -> HealthResponse:
    db_status = "connected"
    overall = "healthy"

    try:
        await gateway.ping()
    except DatabaseError as e:
        db_status = "disconnected"
        overall = "unhealthy"
        response.status_code = 503
        logger.warning("Health check: database unreachable: %s", e.context)

    return HealthResponse(
        status=overall,
        version=__version__,
        database=db_status,
        total_requests=request_counter.value,
        uptime_seconds=round(time.time() - _start_time, 2),
    )
