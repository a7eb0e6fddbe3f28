"""
Main entrypoint for the Salon Booking API.

This module assembles the FastAPI application: logging, CORS, the
JSON error handlers and the versioned routers.  ``create_app`` builds
and configures the app, which is then instantiated at module import
time as ``app``, so it can be served directly::

    uvicorn salon_booking_api.app.main:app --reload

The MongoDB connection is opened on startup and closed on shutdown
unless a ready-made ``MongoGateway`` is passed to ``create_app``, in
which case the caller owns its lifecycle.
"""

import logging
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pymongo.errors import PyMongoError
from starlette.exceptions import HTTPException as StarletteHTTPException

from .api.v1.router import router as v1_router
from .core.config import settings
from .core.db import MongoGateway
from .core.exceptions import SalonError
from .core.logging_config import setup_logging

logger = logging.getLogger(__name__)


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def _validation_message(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid request"
    first = errors[0]
    location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    message = first.get("msg", "Invalid request")
    return f"{location}: {message}" if location else message


def register_exception_handlers(app: FastAPI) -> None:
    """Render every failure as ``{"error": "<message>"}``."""

    @app.exception_handler(SalonError)
    async def salon_error_handler(request: Request, exc: SalonError) -> JSONResponse:
        return JSONResponse(status_code=exc.status_code, content={"error": exc.message, **exc.details})

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        return _error(exc.status_code, str(exc.detail))

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        return _error(status.HTTP_400_BAD_REQUEST, _validation_message(exc))

    @app.exception_handler(Exception)
    async def unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, str(exc) or exc.__class__.__name__)


def create_app(gateway: Optional[MongoGateway] = None) -> FastAPI:
    """Create and configure a FastAPI application.

    Parameters
    ----------
    gateway : Optional[MongoGateway]
        Database handle to serve requests from.  When omitted, one is
        connected from ``settings`` at startup and closed at shutdown.

    Returns
    -------
    FastAPI
        A configured FastAPI application instance.
    """
    # Initialise logging before anything else so that startup can log.
    setup_logging(settings.log_level, settings.log_file or None)

    app = FastAPI(title=settings.project_name, version=settings.api_version, debug=settings.debug)
    app.state.db = gateway

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials="*" not in settings.cors_origins,
        allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization", "Accept", "Origin", "X-Requested-With"],
    )

    register_exception_handlers(app)
    app.include_router(v1_router, prefix="/api")

    @app.get("/health", tags=["health"])
    def health() -> dict:
        if app.state.db is None:
            return {"status": "ok", "database": "not initialised"}
        try:
            app.state.db.ping()
            database = "ok"
        except Exception as exc:
            logger.warning("Health check could not reach MongoDB: %s", exc)
            database = "unavailable"
        return {"status": "ok", "database": database}

    @app.on_event("startup")
    async def startup_event() -> None:
        if app.state.db is not None:
            return
        db = MongoGateway.connect(settings)
        try:
            db.ensure_indexes()
        except PyMongoError as exc:
            # The server may come up after the API; queries will retry
            # server selection on their own.
            logger.warning("Could not ensure MongoDB indexes: %s", exc)
        app.state.db = db
        app.state.owns_db = True

    @app.on_event("shutdown")
    async def shutdown_event() -> None:
        if getattr(app.state, "owns_db", False):
            app.state.db.close()
            app.state.db = None
            app.state.owns_db = False

    return app


# Create the application instance at import time so that tools such as
# uvicorn can discover it without calling create_app manually.
app = create_app()
