"""
Precisely Documents: Response Envelope Schemas
===============================================

What:  The uniform JSON wrapper every HTTP reply uses, plus the payload of
       the health endpoint.

Envelope shape:
    {
        "code": 404,
        "status": false,
        "data": null,
        "error": "document with ID '7' was not found"
    }

    `code` always equals the HTTP status. `status` is true for 2xx replies.
    `error` is the empty string on success.
"""

from typing import Any

from pydantic import BaseModel, Field


class Envelope(BaseModel):
    """Uniform response wrapper."""

    code: int = Field(description="HTTP status code of this reply")
    status: bool = Field(description="True when the request succeeded")
    data: Any = Field(default=None, description="Payload, or null")
    error: str = Field(default="", description="Error message, or empty string")


class HealthStatus(BaseModel):
    """Payload of GET /health."""

    status: str = Field(description="healthy or unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="connected or disconnected")
    uptime_seconds: float = Field(description="Seconds since the app started")
