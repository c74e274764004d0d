"""
Notes App Backend - FastAPI Application Factory
=================================================

What:  Creates and configures the FastAPI application instance.
How:   create_app() builds the Database and NoteService, wires middleware,
       exception handlers and routes, and returns the app.
Who:   uvicorn (`uvicorn notes_app.main:app` or `python -m notes_app`), tests.

Lifecycle:
    Startup:
    1. Configure logging
    2. Ensure the notes table exists; if the database is unreachable, log
       and let startup fail so the process exits non-zero
    Shutdown:
    1. Close the database pool

Error Contract:
    Every error body is {"error": "<message>"}.
        ValidationError / bad JSON        → 400
        NotFoundError / non-integer id    → 404
        DatabaseError                     → 500 (fixed per-operation message)
        anything else                     → 500 "Internal server error"
"""

import logging
import sys
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncGenerator, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from notes_app import __version__
from notes_app.config import Settings, settings as default_settings
from notes_app.database import Database
from notes_app.exceptions import (
    DatabaseError,
    DatabaseUnavailableError,
    NotFoundError,
    ValidationError,
)
from notes_app.middleware.logging import RequestLoggingMiddleware
from notes_app.middleware.request_id import RequestIDMiddleware, request_id_var
from notes_app.routes import health, notes
from notes_app.routes.notes import REQUIRED_FIELDS_MESSAGE
from notes_app.services.note_service import NoteService

logger = logging.getLogger(__name__)

INVALID_JSON_MESSAGE = "Invalid JSON body"


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging(level: str = "INFO") -> None:
    """
    Configure the root logger once at startup.

    Format: 2024-01-15T12:00:00 [INFO] notes_app.services.note_service: ...
    Output goes to stdout, which Docker collects.
    """
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # Our access middleware replaces uvicorn's; SQL echo only in DEBUG
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    if level != "DEBUG":
        logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Startup: logging, then schema. Shutdown: close the pool.

    A DatabaseUnavailableError from ensure_schema() is fatal. It is logged
    and re-raised; uvicorn reports the failed startup and exits with a
    non-zero status instead of serving without a database.
    """
    app_settings: Settings = app.state.settings
    database: Database = app.state.database

    setup_logging(app_settings.log_level)
    logger.info("Notes App %s starting up...", __version__)

    try:
        await database.ensure_schema()
    except DatabaseUnavailableError as e:
        logger.critical("Database connection failed, aborting startup: %s", e.message)
        await database.close()
        raise

    logger.info("Server ready at http://%s:%d", app_settings.host, app_settings.port)

    yield

    logger.info("Notes App shutting down...")
    await database.close()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def error_response(status_code: int, message: str, headers: Optional[dict] = None) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message}, headers=headers)


def register_exception_handlers(app: FastAPI) -> None:
    """
    Map exceptions to `{"error": message}` responses.

    Handler hierarchy:
        RequestValidationError  → 400 (body) / 404 (path id)
        ValidationError         → 400
        NotFoundError           → 404
        DatabaseError           → 500, detail logged server-side only
        StarletteHTTPException  → its own status (unknown route, 405, ...)
        Exception (fallback)    → 500
    """

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation_error(request: Request, exc: RequestValidationError):
        """
        FastAPI's own parsing failed before the handler ran.

        Unparseable JSON gets its own message. Any other body problem
        (missing body, non-string title/content) is reported like a missing
        field. Note ids are parsed by the routes themselves, so anything
        left over can only concern the path and cannot match a note.
        """
        errors = exc.errors()
        if any(err.get("type") == "json_invalid" for err in errors):
            logger.warning("[%s] Malformed JSON body on %s", request_id_var.get(""), request.url.path)
            return error_response(400, INVALID_JSON_MESSAGE)
        if any(err.get("loc", ("",))[0] == "body" for err in errors):
            return error_response(400, REQUIRED_FIELDS_MESSAGE)
        return error_response(404, "Note not found")

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        logger.warning("[%s] Validation error: %s", request_id_var.get(""), exc.message)
        return error_response(400, exc.message)

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        return error_response(404, exc.message)

    @app.exception_handler(DatabaseError)
    async def handle_database_error(request: Request, exc: DatabaseError):
        """The message is the fixed operation text; context never leaves the server."""
        rid = request_id_var.get("")
        logger.error("[%s] Database error: %s | Context: %s", rid, exc.message, exc.context)
        return error_response(500, exc.message)

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(request: Request, exc: StarletteHTTPException):
        return error_response(exc.status_code, str(exc.detail), headers=getattr(exc, "headers", None))

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        logger.error(
            "[%s] Unexpected error: %s",
            request_id_var.get(""),
            exc,
            exc_info=True,
        )
        return error_response(500, "Internal server error")


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(
    settings: Optional[Settings] = None,
    database: Optional[Database] = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        settings: Defaults to the process-wide singleton.
        database: Defaults to a Database built from `settings`. Tests pass
                  their own (e.g. a temporary SQLite file).

    The Database and the NoteService that wraps it are stored on app.state
    and reach the routes through FastAPI dependencies.
    """
    app_settings = settings or default_settings
    db = database or Database.from_settings(app_settings)

    app = FastAPI(
        title="Notes App API",
        description="Minimal note-taking service: create, list, update and delete notes.",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    app.state.settings = app_settings
    app.state.database = db
    app.state.note_service = NoteService(db)

    # ── Register Middleware ───────────────────────────────────────────────
    # Executes in reverse order of addition: RequestID → Logging → CORS
    origins = app_settings.cors_origins_list
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials="*" not in origins,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # ── Register Exception Handlers ───────────────────────────────────────
    register_exception_handlers(app)

    # ── Register Routes ───────────────────────────────────────────────────
    app.include_router(notes.router)
    app.include_router(health.router)

    # Frontend last so API routes take precedence over files
    static_dir = Path(app_settings.static_dir)
    if static_dir.is_dir():
        app.mount("/", StaticFiles(directory=static_dir, html=True), name="static")
        logger.debug("Serving static files from %s", static_dir.resolve())

    return app


# uvicorn expects `notes_app.main:app` to be importable
app = create_app()
