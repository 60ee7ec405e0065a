"""
Todo API - FastAPI Application Factory
=======================================

What:  Creates and configures the FastAPI application instance.
How:   Factory pattern: create_app() returns a configured FastAPI instance
       with its own engine and session factory on `app.state`.
Who:   uvicorn (`uvicorn todo_api.main:app` or the `todo-api` console script)
       and the test suite, which builds one app per test.

Application Architecture:
    Middleware:  RequestID -> RequestLogging
    Routes:      /todo_list  /todo/{id}  /add_todo  /update_todo/{id}  /delete_todo/{id}
    Errors:      RequestValidationError/ValidationError -> 400
                 NotFoundError -> 404
                 DatabaseError / anything else -> 500

Lifecycle:
    Startup:   configure logging, open the store and ensure the todos table.
               A store that cannot be opened aborts startup (non-zero exit).
    Shutdown:  dispose the engine (close pooled connections).
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import PlainTextResponse

from todo_api import __version__
from todo_api.config import Settings, settings as default_settings
from todo_api.database import (
    build_engine,
    build_session_factory,
    dispose_engine,
    init_store,
)
from todo_api.exceptions import (
    DatabaseError,
    NotFoundError,
    StoreInitError,
    TodoAPIError,
    ValidationError,
)
from todo_api.middleware.logging import RequestLoggingMiddleware
from todo_api.middleware.request_id import RequestIDMiddleware, request_id_var
from todo_api.routes import todos

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging(settings: Settings) -> None:
    """
    Configure logging for the entire application.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s
    """
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # RequestLoggingMiddleware writes the access log
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("aiosqlite").setLevel(logging.WARNING)
    if settings.log_level != "DEBUG":
        logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    settings: Settings = app.state.settings

    setup_logging(settings)
    logger.info("Todo API %s starting up...", __version__)

    try:
        await init_store(app.state.engine)
    except StoreInitError as e:
        logger.critical("%s", e.message)
        logger.critical("Fix the database location and restart the server.")
        await dispose_engine(app.state.engine)
        raise

    logger.info("Server ready at http://%s:%d", settings.backend_host, settings.backend_port)

    yield

    logger.info("Todo API shutting down...")
    await dispose_engine(app.state.engine)
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def validation_error_from(exc: RequestValidationError) -> ValidationError:
    """Summarize FastAPI's field errors; `field` is the first failing location."""
    parts = []
    field = None
    for error in exc.errors():
        location = ".".join(str(p) for p in error.get("loc", ()))
        field = field or location or None
        parts.append(f"{location}: {error.get('msg', 'invalid value')}")
    return ValidationError(message="Invalid request: " + "; ".join(parts), field=field)


def register_exception_handlers(app: FastAPI) -> None:
    """
    Map exceptions to plain-text HTTP responses.

    Handler hierarchy:
        RequestValidationError -> 400 (FastAPI would answer 422)
        ValidationError        -> 400
        NotFoundError          -> 404, message names the id
        DatabaseError          -> 500, generic message
        TodoAPIError (base)    -> 500
        Exception (fallback)   -> 500

    Internal details (driver messages, SQL) are logged, never returned.
    """

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        rid = request_id_var.get("")
        logger.warning("[%s] Validation error on %s: %s", rid, exc.field or "request", exc.message)
        return PlainTextResponse(exc.message, status_code=400)

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation_error(request: Request, exc: RequestValidationError):
        return await handle_validation_error(request, validation_error_from(exc))

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        return PlainTextResponse(exc.message, status_code=404)

    @app.exception_handler(DatabaseError)
    async def handle_database_error(request: Request, exc: DatabaseError):
        rid = request_id_var.get("")
        logger.error("[%s] Database error: %s | Context: %s", rid, exc.message, exc.context)
        return PlainTextResponse(
            "An internal error occurred. Please try again later.",
            status_code=500,
        )

    @app.exception_handler(TodoAPIError)
    async def handle_app_error(request: Request, exc: TodoAPIError):
        rid = request_id_var.get("")
        logger.error("[%s] %s: %s | Context: %s", rid, type(exc).__name__, exc.message, exc.context)
        return PlainTextResponse(
            "An internal error occurred. Please try again later.",
            status_code=500,
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        rid = request_id_var.get("")
        logger.error("[%s] Unexpected error: %s", rid, str(exc), exc_info=True)
        return PlainTextResponse(
            "An unexpected error occurred. Please try again later.",
            status_code=500,
        )


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        settings: Configuration to build the app with. Defaults to the
                  environment-derived singleton; tests pass their own to get
                  an isolated store.
    """
    settings = settings or default_settings

    app = FastAPI(
        title="Todo API",
        description="CRUD over a single todo resource stored in SQLite.",
        version=__version__,
        lifespan=lifespan,
    )

    engine = build_engine(settings)
    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = build_session_factory(engine)

    # Middleware executes in REVERSE order of addition:
    # RequestID runs first, then RequestLogging.
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)

    app.include_router(todos.router)

    return app


app = create_app()


def run() -> None:
    """Process entry point: serve the module-level app until signalled."""
    import uvicorn

    uvicorn.run(
        app,
        host=default_settings.backend_host,
        port=default_settings.backend_port,
        log_level=default_settings.log_level.lower(),
    )
