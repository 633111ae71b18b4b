"""
Precisely Documents: Health Check Route
========================================

What:  GET /health for container probes and load balancers.
How:   Runs `SELECT 1` on the application's engine and reports the result
       with version and uptime (since `app.state.started_at`), inside the
       standard envelope.

Status levels:
    healthy:    database answered (HTTP 200)
    unhealthy:  database unreachable (HTTP 503)
"""

import logging
import time

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from sqlalchemy import text

from precisely import __version__
from precisely.responses import envelope_response
from precisely.schemas.response import Envelope, HealthStatus

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

@router.get(
    "/health",
    response_model=Envelope,
    summary="Service health check",
)
async def health_check(request: Request) -> JSONResponse:
    db_status = "connected"
    overall = "healthy"

    try:
        async with request.app.state.engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
    except Exception as e:
        db_status = "disconnected"
        overall = "unhealthy"
        logger.warning("Health check: database unreachable: %s", str(e))

    payload = HealthStatus(
        status=overall,
        version=__version__,
        database=db_status,
        uptime_seconds=round(time.time() - request.app.state.started_at, 2),
    )
    if overall == "healthy":
        return envelope_response(200, data=payload)
    return envelope_response(503, data=payload, error="database unreachable")
