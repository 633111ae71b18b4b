"""
Precisely Documents: FastAPI Application Factory
=================================================

What:  Assembles the application: logging, middleware, error handlers,
       routes, and the engine → repository → service object graph.
How:   `create_app()` builds each collaborator once and stores it on
       `app.state`; routes receive the service through a dependency. Tests
       pass their own service (or engine) instead of patching globals.
Who:   uvicorn (`uvicorn precisely.main:app`), `python -m precisely`, tests.

Application Architecture:
    ┌──────────────────────────────────────────────────────┐
    │                    FastAPI App                       │
    │                                                      │
    │  Middleware:   Request ID → Access Logging           │
    │                                                      │
    │  Routes:       /documents (CRUD)     /health         │
    │                                                      │
    │  Error Handlers (the only error → status mapping):   │
    │    RequestValidationError     → 400                  │
    │    INVALID_TITLE/SIGNEE       → 422                  │
    │    NOT_FOUND                  → 404                  │
    │    PERSISTENCE_FAILURE        → 500                  │
    │    anything else              → 500                  │
    └──────────────────────────────────────────────────────┘
"""

import logging
import sys
import time
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Dict, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncEngine
from starlette.exceptions import HTTPException as StarletteHTTPException

from precisely import __version__
from precisely.config import Settings, get_settings
from precisely.database import build_engine, build_session_factory, dispose_engine
from precisely.exceptions import ErrorKind, PreciselyError
from precisely.middleware.logging import RequestLoggingMiddleware
from precisely.middleware.request_id import RequestIDMiddleware, request_id_var
from precisely.repositories.document_repository import SqlDocumentRepository
from precisely.responses import envelope_response
from precisely.routes import documents, health
from precisely.services.document_service import DocumentService

logger = logging.getLogger(__name__)

STATUS_BY_KIND: Dict[ErrorKind, int] = {
    ErrorKind.INVALID_TITLE: 422,
    ErrorKind.INVALID_SIGNEE: 422,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.PERSISTENCE_FAILURE: 500,
}


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging(settings: Settings) -> None:
    """
    Configure the root logger once, at startup.

    Format: 2024-01-15T12:00:00 [INFO] precisely.services.document_service: ...
    """
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    for noisy in ("uvicorn.access", "sqlalchemy.engine", "httpcore", "httpx"):
        logging.getLogger(noisy).setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Startup: configure logging, stamp `started_at`, announce the address.
    Shutdown: dispose the engine, closing pooled connections.
    """
    settings: Settings = app.state.settings
    setup_logging(settings)
    app.state.started_at = time.time()
    logger.info("Precisely Documents %s starting up", __version__)
    logger.info("Server ready at http://%s:%d", settings.backend_host, settings.backend_port)

    yield

    logger.info("Precisely Documents shutting down...")
    await dispose_engine(app.state.engine)
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def describe_request_error(exc: RequestValidationError) -> str:
    """One-line summary of why FastAPI rejected the request."""
    parts = []
    for err in exc.errors():
        location = ".".join(str(p) for p in err.get("loc", ()))
        parts.append(f"{location}: {err.get('msg', 'invalid')}")
    return "malformed request: " + "; ".join(parts)


def register_exception_handlers(app: FastAPI) -> None:
    """
    Register the handlers that turn failures into envelopes.

    Domain errors are matched on `kind`, never on message text. Responses
    carry only the error message; context and tracebacks go to the logs.
    """

    @app.exception_handler(RequestValidationError)
    async def handle_malformed_request(request: Request, exc: RequestValidationError):
        """Undecodable JSON, wrong field types, or a non-integer path id."""
        message = describe_request_error(exc)
        logger.warning("[%s] %s", request_id_var.get(""), message)
        return envelope_response(400, error=message)

    @app.exception_handler(PreciselyError)
    async def handle_domain_error(request: Request, exc: PreciselyError):
        code = STATUS_BY_KIND.get(exc.kind, 500)
        rid = request_id_var.get("")
        if code >= 500:
            logger.error("[%s] %s: %s | Context: %s", rid, exc.kind.value, exc.message, exc.context)
        else:
            logger.warning("[%s] %s: %s", rid, exc.kind.value, exc.message)
        return envelope_response(code, error=exc.message)

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(request: Request, exc: StarletteHTTPException):
        """Unknown routes and disallowed methods, wrapped like everything else."""
        return envelope_response(exc.status_code, error=str(exc.detail), headers=exc.headers)

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
        rid = request_id_var.get("")
        logger.error("[%s] Unexpected error: %s", rid, str(exc), exc_info=True)
        return envelope_response(500, error="An unexpected error occurred.")


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(
    settings: Optional[Settings] = None,
    service: Optional[DocumentService] = None,
    engine: Optional[AsyncEngine] = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        settings: Configuration; read from the environment when omitted.
        service:  Document service to serve; built over `engine` when omitted.
        engine:   Database engine; built from `settings` when omitted.
                  Disposed on shutdown and probed by /health.

    Returns:
        A configured FastAPI instance.
    """
    settings = settings or get_settings()
    if engine is None:
        engine = build_engine(settings)
    if service is None:
        repository = SqlDocumentRepository(build_session_factory(engine))
        service = DocumentService(repository)

    app = FastAPI(
        title="Precisely Documents API",
        description="Create, read, update and delete signed documents.",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.engine = engine
    app.state.document_service = service
    app.state.started_at = time.time()

    # Last added runs first: Request ID wraps Access Logging
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)

    app.include_router(documents.router)
    app.include_router(health.router)

    return app


app = create_app()
