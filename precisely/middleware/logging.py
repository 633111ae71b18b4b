"""
Precisely Documents: Access Logging Middleware
===============================================

What:  One structured log line per HTTP request.
How:   Times the downstream call and logs method, path, status, duration,
       request id and client address on the `precisely.access` logger.

Log levels by status:
    5xx → ERROR
    4xx → WARNING
    else → INFO

Request bodies are never logged.
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from precisely.middleware.request_id import request_id_var

logger = logging.getLogger("precisely.access")

# Probed every few seconds by orchestrators
UNLOGGED_PATHS = frozenset({"/health"})


def level_for_status(status: int) -> int:
    """Maps an HTTP status to the level its access line is logged at."""
    if status >= 500:
        return logging.ERROR
    if status >= 400:
        return logging.WARNING
    return logging.INFO


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Logs each request's outcome and latency."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        path = request.url.path
        if path in UNLOGGED_PATHS:
            return await call_next(request)

        start_time = time.perf_counter()
        response = await call_next(request)
        duration_ms = (time.perf_counter() - start_time) * 1000

        client_ip = request.client.host if request.client else "unknown"
        rid = request_id_var.get("")
        status = response.status_code

        logger.log(
            level_for_status(status),
            "%s %s %d %.1fms [%s] from %s",
            request.method,
            path,
            status,
            duration_ms,
            rid,
            client_ip,
            extra={
                "request_id": rid,
                "method": request.method,
                "path": path,
                "status": status,
                "duration_ms": round(duration_ms, 2),
                "client_ip": client_ip,
            },
        )
        return response
