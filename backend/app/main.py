"""
Exercise Tracker Backend — FastAPI Application Factory
=======================================================

What:  Creates and configures the FastAPI application instance.
How:   create_app() returns a configured FastAPI instance; run() serves it
       with uvicorn on the configured host and port.
Who:   uvicorn (`uvicorn app.main:app`) or the `exercise-tracker` script.

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware: Request ID → Logging → CORS → Errors   │
    │                                                     │
    │  Routes:                                            │
    │    /exercises/...   /users/...   /health            │
    │    /api-docs (Swagger UI)   /redoc   /openapi.json  │
    │                                                     │
    │  Exception Handlers: every failure → 400            │
    │    body: "Error: <message>"                         │
    └─────────────────────────────────────────────────────┘

Lifecycle:
    Startup:  configure logging, create missing tables, log the address
    Shutdown: dispose the database engine
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from app import __version__
from app.config import settings
from app.database import create_tables, dispose_engine
from app.exceptions import (
    ExerciseTrackerError,
    NotFoundError,
    PersistenceError,
    ValidationError,
)
from app.middleware.errors import UnexpectedErrorMiddleware, error_response
from app.middleware.logging import RequestLoggingMiddleware
from app.middleware.request_id import RequestIDMiddleware, request_id_var
from app.routes import exercises, health, users
from app.services.coercion import describe_validation_errors

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure logging for the entire application.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s
    Called once during startup, before anything else logs.
    """
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # Reduce noise from third-party libraries
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Startup: logging, then the first database round-trip (table creation).
    A database that is down at startup is logged, not fatal: the server keeps
    answering and each request reports the persistence failure.

    Shutdown: dispose the engine so pooled connections are closed.
    """
    setup_logging()
    logger.info("Exercise Tracker Backend starting up...")

    try:
        await create_tables()
        logger.info("Database connection established successfully")
    except Exception as e:
        logger.error("Could not initialize the database: %s", str(e))

    logger.info("Server is running on port: %d", settings.port)
    logger.info("API docs: http://%s:%d/api-docs", settings.host, settings.port)

    yield

    logger.info("Exercise Tracker Backend shutting down...")
    await dispose_engine()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def register_exception_handlers(app: FastAPI) -> None:
    """
    Register global exception handlers.

    Handler mapping (all → 400 "Error: ..."):
        ValidationError         input missing / uncoercible / malformed id
        NotFoundError           delete or update matched nothing
        PersistenceError        database call failed
        RequestValidationError  body is not valid JSON or not an object

    Anything else is caught by UnexpectedErrorMiddleware, inside CORS and
    request id, rather than by an Exception handler here.

    Logging levels still tell the causes apart server-side.
    """

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        rid = request_id_var.get("")
        logger.warning("[%s] Validation error: %s", rid, exc.message)
        return error_response(exc.message)

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        rid = request_id_var.get("")
        logger.info("[%s] Not found: %s", rid, exc.message)
        return error_response(exc.message)

    @app.exception_handler(PersistenceError)
    async def handle_persistence_error(request: Request, exc: PersistenceError):
        rid = request_id_var.get("")
        logger.error("[%s] Persistence error: %s | Context: %s", rid, exc.message, exc.context)
        return error_response(exc.message)

    @app.exception_handler(ExerciseTrackerError)
    async def handle_app_error(request: Request, exc: ExerciseTrackerError):
        rid = request_id_var.get("")
        logger.error("[%s] Application error: %s", rid, exc.message)
        return error_response(exc.message)

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError):
        rid = request_id_var.get("")
        message = describe_validation_errors(exc.errors())
        logger.warning("[%s] Invalid request: %s", rid, message)
        return error_response(message)


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        title="Exercise Tracker API",
        description="Exercise log and user records, with interactive documentation.",
        version=__version__,
        docs_url="/api-docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # Middleware executes in REVERSE order of addition:
    # RequestID → Logging → CORS → UnexpectedError → route
    app.add_middleware(UnexpectedErrorMiddleware)
    wildcard = settings.cors_origins_list == ["*"]
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=not wildcard,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)

    app.include_router(exercises.router)
    app.include_router(users.router)
    app.include_router(health.router)

    return app


app = create_app()


def run() -> None:
    """Console entry point: serve the app on settings.host:settings.port."""
    uvicorn.run(
        "app.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    run()
