"""Builds envelope-wrapped JSON responses."""

from typing import Any, Optional

from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from precisely.schemas.response import Envelope


def envelope_response(
    code: int,
    data: Any = None,
    error: Optional[str] = None,
    headers: Optional[dict] = None,
) -> JSONResponse:
    """
    Wraps `data` (or `error`) in the envelope and sets the HTTP status to `code`.

    `data` may be a pydantic model, a list of them, or plain JSON values.
    """
    envelope = Envelope(
        code=code,
        status=200 <= code < 300,
        data=jsonable_encoder(data),
        error=error or "",
    )
    return JSONResponse(
        status_code=code,
        content=envelope.model_dump(),
        headers=headers,
    )
