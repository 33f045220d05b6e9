"""
Author API: FastAPI Application Factory
=========================================

What:  Creates and configures the FastAPI application instance.
How:   ``create_app(settings)`` builds the Database, registers middleware,
       exception handlers and routers, and stores shared collaborators on
       ``app.state`` for the request dependencies.
Who:   uvicorn (``uvicorn author_api.main:create_app --factory``), the
       ``author-api`` console script, and the test suite.

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware:  RequestID → RequestLogging            │
    │                                                     │
    │  Routes:      /authors, /authors/{id}, /health      │
    │                                                     │
    │  Exception Handlers:                                │
    │  ┌──────────────────────────────────────────────┐  │
    │  │ Validation→400 │ NotFound→404 │ Storage→500  │  │
    │  └──────────────────────────────────────────────┘  │
    └─────────────────────────────────────────────────────┘

app.state:
    settings    Settings used to build the app
    database    Database (engine + session factory)
    logger      Application logger handed to services
    started_at  Creation timestamp for /health uptime
"""

import logging
import sys
import time
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from author_api import __version__
from author_api.config import Settings
from author_api.database import Database
from author_api.exceptions import AuthorApiError, ValidationError
from author_api.middleware.logging import RequestLoggingMiddleware
from author_api.middleware.request_id import RequestIDMiddleware, request_id_var
from author_api.routes import authors, health

APP_LOGGER = "author_api"


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging(level: str = "INFO") -> None:
    """
    Configure the root logger.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s

    Called by the console entry point before uvicorn starts and again by the
    lifespan handler, so ``uvicorn --factory`` launches get the same format.
    """
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # Third-party libraries that log every request or statement
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Startup:
        1. Configure logging from settings
        2. Log the (password-redacted) database URL and listen address
    Shutdown:
        1. Dispose the database engine
    """
    settings: Settings = app.state.settings
    logger: logging.Logger = app.state.logger

    setup_logging(settings.log_level)
    logger.info("Author API %s starting up", __version__)
    logger.info("Database: %s", settings.redacted_database_url())
    logger.info("Listening on %s:%d", settings.server.host, settings.server.port)

    yield

    logger.info("Author API shutting down...")
    await app.state.database.dispose()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def _error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def _describe_validation_error(exc: RequestValidationError) -> ValidationError:
    """Collapse FastAPI's error list into one ValidationError (first failure wins)."""
    errors = exc.errors()
    if not errors:
        return ValidationError()
    first = errors[0]
    # loc = (source, field, ...); a JSON syntax error carries a byte offset instead
    field = None
    if first.get("type") != "json_invalid":
        field = ".".join(str(part) for part in first.get("loc", ())[1:]) or None
    message = first.get("msg", "Validation failed")
    if field:
        message = f"{field}: {message}"
    return ValidationError(message=message, field=field, context={"errors": len(errors)})


def register_exception_handlers(app: FastAPI, logger: logging.Logger) -> None:
    """
    Map exceptions to ``{"error": <message>}`` responses.

    Handler hierarchy:
        RequestValidationError  → 400 (converted to ValidationError)
        AuthorApiError subclasses → their ``status_code``
        Exception (fallback)    → 500, generic message, traceback logged
    """

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError):
        return await handle_app_error(request, _describe_validation_error(exc))

    @app.exception_handler(AuthorApiError)
    async def handle_app_error(request: Request, exc: AuthorApiError):
        # StorageError is logged with its traceback by the service that raised it
        if isinstance(exc, ValidationError):
            rid = request_id_var.get("")
            logger.warning("[%s] Validation error: %s", rid, exc.message)
        return _error_response(exc.status_code, exc.message)

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        rid = request_id_var.get("")
        logger.error("[%s] Unexpected error: %s", rid, str(exc), exc_info=exc)
        return _error_response(500, "An unexpected error occurred")


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(
    settings: Optional[Settings] = None,
    database: Optional[Database] = None,
    logger: Optional[logging.Logger] = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        settings: Configuration; loaded from YAML/env when omitted
        database: Pre-built Database; built from ``settings.database`` when omitted
        logger:   Application logger; ``logging.getLogger("author_api")`` by default
    """
    settings = settings or Settings()
    logger = logger or logging.getLogger(APP_LOGGER)
    database = database or Database(settings.database, logger=logger.getChild("database"))

    app = FastAPI(
        title="Author API",
        description="CRUD API over a single author resource.",
        version=__version__,
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.database = database
    app.state.logger = logger
    app.state.started_at = time.time()

    # Middleware executes in reverse order of addition: RequestID runs first
    app.add_middleware(RequestLoggingMiddleware, logger=logger.getChild("access"))
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app, logger)

    app.include_router(authors.router)
    app.include_router(health.router)

    return app
