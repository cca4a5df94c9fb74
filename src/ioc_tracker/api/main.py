"""
FastAPI Application
===================

App factory for the ioc-tracker HTTP service: lifespan (schema creation
and engine disposal), request logging, error mapping and /health.

Run with ``ioc-tracker`` (console script) or ``uvicorn ioc_tracker.api.main:app``.
"""

import time
from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator
from uuid import uuid4

import uvicorn
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from ioc_tracker import __version__
from ioc_tracker.api.routes import entries_router, upload_router
from ioc_tracker.config.settings import get_settings
from ioc_tracker.db.connection import close_database, init_database
from ioc_tracker.db.connection import health_check as db_health_check
from ioc_tracker.schemas.responses import HealthCheckResponse
from ioc_tracker.utils.errors import IndicatorTrackerError
from ioc_tracker.utils.logger import (
    SERVICE_NAME,
    bind_request_context,
    clear_request_context,
    configure_logging,
    get_logger,
)

configure_logging()
logger = get_logger(__name__)

API_PREFIX = "/api"


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Create the entries table on start-up; dispose the engine on shutdown."""
    settings = get_settings()
    logger.info(
        "Service starting",
        version=__version__,
        environment=settings.environment,
        port=settings.port,
    )

    try:
        await init_database(settings)
    except IndicatorTrackerError as e:
        # /health reports "degraded" until the database is reachable
        logger.error("Database unavailable at start-up", error=e.message, details=e.details)

    yield

    await close_database()
    logger.info("Service stopped")


def _validation_message(exc: RequestValidationError) -> str:
    """Flatten pydantic errors into one readable line."""
    parts = []
    for error in exc.errors():
        location = ".".join(str(item) for item in error.get("loc", ()) if item != "body")
        parts.append(f"{location}: {error.get('msg')}" if location else str(error.get("msg")))
    return "; ".join(parts) or "Invalid request"


async def _log_api_requests(request: Request, call_next: Any) -> Any:
    """
    Time each request and tag it with a correlation id.

    The id is bound into the structlog context so every event logged while
    handling the request carries it. Only /api traffic is logged; all
    responses get X-Request-ID and X-Process-Time headers.
    """
    request_id = request.headers.get("X-Request-ID") or uuid4().hex
    bind_request_context(request_id=request_id)
    started = time.perf_counter()

    try:
        response = await call_next(request)
        elapsed = time.perf_counter() - started
        response.headers["X-Request-ID"] = request_id
        response.headers["X-Process-Time"] = f"{elapsed:.4f}"

        if request.url.path.startswith(API_PREFIX):
            logger.info(
                "API request",
                method=request.method,
                path=request.url.path,
                status_code=response.status_code,
                duration_ms=round(elapsed * 1000, 2),
            )
        return response
    finally:
        clear_request_context()


def _register_error_handlers(app: FastAPI) -> None:
    """Map application, validation and unexpected errors to JSON bodies."""

    @app.exception_handler(IndicatorTrackerError)
    async def tracker_error_handler(request: Request, exc: IndicatorTrackerError) -> JSONResponse:
        # Errors that reach here are client mistakes: bad extension, oversize
        logger.warning(
            "Request rejected",
            error_type=type(exc).__name__,
            message=exc.message,
            details=exc.details,
        )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={
                "error": type(exc).__name__,
                "message": exc.message,
                "details": exc.details,
            },
        )

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        message = _validation_message(exc)
        logger.info("Invalid request", path=request.url.path, message=message)
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": "ValidationError", "message": message},
        )

    @app.exception_handler(Exception)
    async def unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error", error_type=type(exc).__name__, path=request.url.path)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "InternalServerError", "message": "Internal Server Error"},
        )


def _register_health(app: FastAPI) -> None:
    @app.get(
        "/health",
        tags=["Health"],
        summary="Service and database health",
        response_model=HealthCheckResponse,
    )
    async def health() -> HealthCheckResponse:
        """``healthy`` when the database answers, ``degraded`` otherwise."""
        database = await db_health_check()
        return HealthCheckResponse(
            status="healthy" if database.get("status") == "healthy" else "degraded",
            version=__version__,
            service=SERVICE_NAME,
            checks={"database": database},
        )


def create_app() -> FastAPI:
    """
    Build the FastAPI application.

    Returns:
        App with CORS, request logging, error handlers, /health and the
        /api routers mounted
    """
    settings = get_settings()

    app = FastAPI(
        title="IOC Tracker API",
        description=(
            "Indicator tracking service: upload spreadsheets of IP addresses "
            "and hashes, search them, and view per-category counts."
        ),
        version=__version__,
        docs_url="/docs" if settings.is_development else None,
        redoc_url=None,
        openapi_url="/openapi.json" if settings.is_development else None,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )
    app.middleware("http")(_log_api_requests)

    _register_error_handlers(app)
    _register_health(app)

    app.include_router(entries_router, prefix=API_PREFIX, tags=["Entries"])
    app.include_router(upload_router, prefix=API_PREFIX, tags=["Upload"])

    return app


def run() -> None:
    """Console-script entry point: serve the app with uvicorn."""
    settings = get_settings()
    uvicorn.run(
        "ioc_tracker.api.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


app = create_app()
