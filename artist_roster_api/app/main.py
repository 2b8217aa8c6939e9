"""
Main entrypoint for the Artist Roster API.

This module assembles the FastAPI application: logging, CORS, exception
handlers for the service-layer errors and the ``/api`` router.
``create_app`` builds an app around a ``Settings`` instance (the
environment-derived one by default) and a module-level ``app`` is
created at import time so the API can be served with::

    uvicorn artist_roster_api.app.main:app --reload
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .api.router import router as api_router
from .core.config import Settings, settings as default_settings
from .core.db import get_connection, init_db
from .core.errors import AuthError, ServiceError
from .core.logging_config import setup_logging
from .services.session_service import SessionService

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Apply migrations on startup and sweep stale sessions."""
    settings: Settings = app.state.settings
    init_db(settings.database_url)
    if settings.auth_mode == "session":
        conn = get_connection(settings.database_url)
        try:
            await SessionService(conn, settings.session_expire_minutes * 60).purge_expired()
        finally:
            conn.close()
    logger.info(
        "%s %s started (auth mode: %s)",
        settings.project_name,
        settings.api_version,
        settings.auth_mode,
    )
    yield
    logger.info("%s stopped", settings.project_name)


async def service_error_handler(request: Request, exc: ServiceError) -> JSONResponse:
    headers = None
    if isinstance(exc, AuthError) and request.app.state.settings.auth_mode == "token":
        headers = {"WWW-Authenticate": "Bearer"}
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message}, headers=headers)


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Report malformed request bodies as 400 with a readable message."""
    problems = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
        problems.append(f"{location}: {error.get('msg')}" if location else str(error.get("msg")))
    logger.info("Rejected %s %s: %s", request.method, request.url.path, "; ".join(problems))
    return JSONResponse(status_code=400, content={"detail": "; ".join(problems) or "Invalid request"})


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error("Unhandled exception on %s %s", request.method, request.url.path, exc_info=exc)
    return JSONResponse(status_code=500, content={"detail": "Internal server error"})


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Create and configure a FastAPI application.

    Parameters
    ----------
    settings : Optional[Settings]
        Configuration for this app instance.  Defaults to the settings
        read from the environment at import time.

    Returns
    -------
    FastAPI
        A configured application.  The database is migrated when the
        app starts (lifespan), not here.
    """
    settings = settings or default_settings
    # Logging first so that everything below can log.
    setup_logging(settings.log_level, settings.log_file or None)

    app = FastAPI(
        title=settings.project_name,
        version=settings.api_version,
        debug=settings.debug,
        lifespan=lifespan,
    )
    app.state.settings = settings

    if settings.cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.cors_origins,
            allow_credentials=True,
            allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
            allow_headers=["Content-Type", "Authorization"],
        )

    app.add_exception_handler(ServiceError, service_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)

    app.include_router(api_router, prefix="/api")

    @app.get("/health", tags=["system"])
    async def health_check() -> dict:
        return {"status": "ok", "version": settings.api_version}

    return app


app = create_app()
