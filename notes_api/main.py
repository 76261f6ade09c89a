"""
Notes API — FastAPI Application Factory
========================================

What:  Creates and configures the FastAPI application instance and runs it.
How:   Factory pattern: create_app() returns a configured FastAPI instance;
       run() serves it with uvicorn on HOST:PORT (default 0.0.0.0:8006).
Who:   uvicorn (`uvicorn notes_api.main:app`), the `notes-api` console
       script and `python -m notes_api`.

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware Chain:                                  │
    │  CORS → Request ID → Logging → Deadline (20s)       │
    │                                                     │
    │  Routes:                                            │
    │  GET /health   GET /notes   GET|PUT|DELETE /note/id │
    │  POST /note    POST /save/id                        │
    │                                                     │
    │  Exception Handlers:                                │
    │  BadRequest→400 │ Unauthorized→401 │ NotFound→404   │
    │  Store/Upstream/Config/Transport/Invariant→500      │
    └─────────────────────────────────────────────────────┘

Lifecycle:
    Startup:
    1. Initialize logging
    2. Create the Motor client, repository, shared httpx client and the
       login/content service clients; store them on app.state
    3. Warn about unconfigured collaborator URLs

    Shutdown (SIGINT/SIGTERM):
    1. uvicorn stops accepting connections and gives in-flight requests
       SHUTDOWN_TIMEOUT seconds (default 5) to finish
    2. Close the httpx client and the Motor client
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator

import httpx
import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException

from notes_api import __version__
from notes_api.config import settings
from notes_api.database import close_mongo_client, create_mongo_client
from notes_api.exceptions import NotesAPIError
from notes_api.middleware.logging import RequestLoggingMiddleware
from notes_api.middleware.request_id import RequestIDLogFilter, RequestIDMiddleware
from notes_api.middleware.timeout import RequestTimeoutMiddleware
from notes_api.repositories.note_repository import NoteRepository
from notes_api.responses import NotesJSONResponse, error_response
from notes_api.routes import health, notes
from notes_api.services.content_uploader import ContentUploader
from notes_api.services.token_validator import TokenValidator

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure logging for the entire application.

    When:    Called once during startup, before any other initialization.
    Format:  %(asctime)s [%(levelname)s] [%(request_id)s] %(name)s: %(message)s
    """
    handler = logging.StreamHandler(sys.stdout)
    handler.addFilter(RequestIDLogFilter())
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] [%(request_id)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[handler],
        force=True,
    )

    # Third-party libraries that log every operation
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("pymongo").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Build the process-wide collaborators on startup and release them on shutdown.

    app.state after startup:
        note_repository   NoteRepository over the Motor client
        token_validator   TokenValidator on the shared httpx client
        content_uploader  ContentUploader on the shared httpx client
    """
    # ── Startup ───────────────────────────────────────────────────────────
    setup_logging()
    logger.info("Notes API %s starting up...", __version__)

    mongo_client = create_mongo_client(settings)
    http_client = httpx.AsyncClient(timeout=settings.request_timeout)

    app.state.note_repository = NoteRepository(
        mongo_client, settings.database, settings.collection
    )
    app.state.token_validator = TokenValidator(http_client, settings.login_service_url)
    app.state.content_uploader = ContentUploader(http_client, settings.content_service_url)

    for name in settings.missing_collaborators():
        logger.warning("%s is not set; requests depending on it will fail", name)

    logger.info("Server ready at http://%s:%d", settings.host, settings.port)

    yield

    # ── Shutdown ──────────────────────────────────────────────────────────
    logger.info("Notes API shutting down...")
    await http_client.aclose()
    close_mongo_client(mongo_client)
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def register_exception_handlers(app: FastAPI) -> None:
    """
    Map exceptions to status codes and the `{"error": ...}` envelope.

    Handler hierarchy:
        NotesAPIError (and subclasses) → exc.status_code, exc.message
        RequestValidationError         → 400 (malformed path/query/body)
        Starlette HTTPException        → its status (404 route, 405 method)
        Exception (fallback)           → 500 "internal server error"
    """

    @app.exception_handler(NotesAPIError)
    async def handle_notes_api_error(request: Request, exc: NotesAPIError):
        if exc.status_code >= 500:
            logger.error(
                "%s %s failed: %s | Context: %s",
                request.method, request.url.path, exc.message, exc.context,
            )
        else:
            logger.warning(
                "%s %s rejected: %s",
                request.method, request.url.path, exc.message,
            )
        return error_response(exc.status_code, exc.message)

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation_error(request: Request, exc: RequestValidationError):
        errors = exc.errors()
        message = errors[0].get("msg", "invalid request") if errors else "invalid request"
        logger.warning("Request validation error: %s", message)
        return error_response(400, message)

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(request: Request, exc: StarletteHTTPException):
        return error_response(exc.status_code, str(exc.detail or ""))

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        """
        Stack trace is logged server-side only.

        Starlette runs this handler in ServerErrorMiddleware, outside CORS and
        the request ID middleware, so these 500s carry neither CORS headers
        nor X-Request-ID. Known failures are NotesAPIError subclasses and are
        answered by the handler above instead.
        """
        logger.error("Unexpected error: %s", str(exc), exc_info=True)
        return error_response(500, "internal server error")


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns: Fully configured FastAPI instance ready to receive requests.
    """
    app = FastAPI(
        title="Notes API",
        description=(
            "Stores short named text notes in MongoDB and forwards them to the "
            "content service. Authentication is delegated to the login service."
        ),
        version=__version__,
        default_response_class=NotesJSONResponse,
        lifespan=lifespan,
    )

    # ── Register Middleware ───────────────────────────────────────────────
    # Last added runs first: CORS → RequestID → Logging → Deadline → routes
    app.add_middleware(RequestTimeoutMiddleware, timeout=settings.request_timeout)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_methods=settings.cors_methods_list,
        allow_headers=settings.cors_headers_list,
    )

    # ── Register Exception Handlers ───────────────────────────────────────
    register_exception_handlers(app)

    # ── Register Routes ───────────────────────────────────────────────────
    app.include_router(health.router)
    app.include_router(notes.router)

    return app


app = create_app()


def run() -> None:
    """
    Serve the application with uvicorn.

    uvicorn handles SIGINT/SIGTERM: it stops accepting connections, waits up
    to SHUTDOWN_TIMEOUT seconds for in-flight requests, runs the lifespan
    shutdown and exits with status 0.
    """
    setup_logging()
    uvicorn.run(
        app,
        host=settings.host,
        port=settings.port,
        timeout_graceful_shutdown=settings.shutdown_timeout,
        log_config=None,
    )
