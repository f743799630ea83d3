"""
UserCRUD - FastAPI Application Factory
=======================================

What:  Creates and configures the FastAPI application instance.
How:   Factory pattern: create_app() returns a configured FastAPI instance.
       Collaborators (record store, view renderer) can be passed in; when the
       store is omitted the lifespan connects to MongoDB on startup.
Who:   uvicorn (`usercrud.main:app`), `python -m usercrud`, and the tests.

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware Chain:                                  │
    │  ┌──────────┐ ┌─────────────────┐                   │
    │  │ Req ID   │→│  Logging        │                   │
    │  └──────────┘ └─────────────────┘                   │
    │                                                     │
    │  Routes:                                            │
    │  ┌──────────────┐ ┌───────────────┐ ┌────────────┐  │
    │  │ pages (/)    │ │ records CRUD  │ │ GET /health│  │
    │  └──────────────┘ └───────────────┘ └────────────┘  │
    │  Static files from usercrud/public at "/"           │
    │                                                     │
    │  Exception Handlers (plain text):                   │
    │  ┌──────────────────────────────────────────────┐   │
    │  │ Validation→400 │ NotFound→404 │ Store→500    │   │
    │  └──────────────────────────────────────────────┘   │
    └─────────────────────────────────────────────────────┘

Lifecycle:
    Startup:
    1. Initialize logging
    2. Connect to MongoDB (unless a store was injected) and attach the store
       to app.state
    3. Log the server URL

    Shutdown:
    1. Close the MongoDB client if this process opened it
"""

import logging
import sys
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncGenerator, Optional

from fastapi import FastAPI, Request
from fastapi.responses import PlainTextResponse
from fastapi.staticfiles import StaticFiles

from usercrud import __version__
from usercrud.config import HOST, settings
from usercrud.database import connect, disconnect
from usercrud.exceptions import UserCRUDError
from usercrud.middleware.logging import RequestLoggingMiddleware
from usercrud.middleware.request_id import RequestIDMiddleware, request_id_var
from usercrud.routes import health, pages, records
from usercrud.services.record_store import RecordStore
from usercrud.services.view_renderer import ViewRenderer, get_view_renderer

logger = logging.getLogger(__name__)

PUBLIC_DIR = Path(__file__).resolve().parent / "public"

INTERNAL_ERROR_MESSAGE = "Internal server error."


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure logging for the entire application.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s
    Called once during startup, before the database connection is opened.
    """
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # Per-request lines come from RequestLoggingMiddleware instead
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("pymongo").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Open the MongoDB connection on startup and close it on shutdown.

    The store attached to app.state here is the one every request uses.
    An injected store (tests) is left alone and not closed.
    """
    setup_logging()

    connection = None
    if getattr(app.state, "record_store", None) is None:
        connection = await connect()
        app.state.record_store = connection.store

    logger.info("Host successfully connected:")
    logger.info("\tServer URL: %s", HOST)
    logger.info("\tServer port: %d", settings.port)
    logger.info("\tVisit http://%s:%d", HOST, settings.port)

    yield

    if connection is not None:
        app.state.record_store = None
        await disconnect(connection)
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def register_exception_handlers(app: FastAPI) -> None:
    """
    Map exceptions to plain-text HTTP responses, identically for every route.

    Handler hierarchy:
        ValidationError      → 400, message returned to the client
        NotFoundError        → 404, message returned to the client
        StoreError           → 500, generic message, details logged
        TemplateRenderError  → 500, generic message, details logged
        Exception (fallback) → 500, generic message, stack trace logged
    """

    @app.exception_handler(UserCRUDError)
    async def handle_app_error(request: Request, exc: UserCRUDError):
        rid = request_id_var.get("")
        if exc.status_code >= 500:
            logger.error("[%s] %s: %s | Context: %s", rid, type(exc).__name__, exc.message, exc.context)
            return PlainTextResponse(INTERNAL_ERROR_MESSAGE, status_code=exc.status_code)

        logger.warning("[%s] %s: %s", rid, type(exc).__name__, exc.message)
        return PlainTextResponse(exc.message, status_code=exc.status_code)

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        rid = request_id_var.get("")
        logger.error("[%s] Unexpected error: %s", rid, str(exc), exc_info=True)
        return PlainTextResponse(INTERNAL_ERROR_MESSAGE, status_code=500)


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(
    record_store: Optional[RecordStore] = None,
    renderer: Optional[ViewRenderer] = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        record_store: Store to use instead of connecting to MongoDB on startup.
        renderer:     View renderer to use instead of the packaged templates.

    Returns:
        Fully configured FastAPI instance.
    """
    app = FastAPI(
        title="UserCRUD",
        description="Server-rendered create/read/update/delete pages for a MongoDB users collection.",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.record_store = record_store

    if renderer is not None:
        app.dependency_overrides[get_view_renderer] = lambda: renderer

    # Middleware executes in reverse order of addition
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)

    app.include_router(pages.router)
    app.include_router(records.router)
    app.include_router(health.router)

    # Mounted last so the routes above take precedence
    app.mount("/", StaticFiles(directory=str(PUBLIC_DIR)), name="public")

    return app


app = create_app()
