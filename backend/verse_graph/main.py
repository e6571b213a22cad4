"""
Verse Graph API — FastAPI Application Factory
===============================================

What:  Creates and configures the FastAPI application instance.
How:   Factory pattern: create_app() returns a configured FastAPI instance.
Who:   Called by uvicorn to start the server (uvicorn verse_graph.main:app).
When:  Once at server startup; the returned app handles all subsequent requests.

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware Chain:                                  │
    │  ┌──────────┐ ┌─────────────────┐ ┌──────┐ ┌──────┐ │
    │  │ Req ID   │→│  Logging        │→│ GZip │→│ CORS │ │
    │  └──────────┘ └─────────────────┘ └──────┘ └──────┘ │
    │                                                     │
    │  Routes:                                            │
    │  ┌──────────┐ ┌──────────┐ ┌────────────┐ ┌───────┐ │
    │  │ /verse   │ │ /source  │ │ /hasSource │ │/health│ │
    │  └──────────┘ └──────────┘ └────────────┘ └───────┘ │
    │                                                     │
    │  Exception Handlers:                                │
    │  ┌───────────────────────────────────────────────┐  │
    │  │ NotFound→404 │ Conflict→409 │ Store/other→500 │  │
    │  └───────────────────────────────────────────────┘  │
    └─────────────────────────────────────────────────────┘

Lifecycle:
    Startup:
    1. Initialize logging
    2. Validate configuration
    3. Provision collections (verse, source, hasSource) if missing
    Shutdown:
    1. Close the ArangoDB client session
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Mapping, Optional

from arango.database import StandardDatabase
from arango.exceptions import ArangoError
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
from starlette.concurrency import run_in_threadpool

from verse_graph import __version__
from verse_graph.config import settings
from verse_graph.database import connect, create_client
from verse_graph.exceptions import (
    ConflictError,
    DatabaseError,
    NotFoundError,
    VerseGraphError,
)
from verse_graph.middleware.logging import RequestLoggingMiddleware
from verse_graph.middleware.request_id import RequestIDMiddleware, request_id_var
from verse_graph.provisioning import provision_collections, required_collections
from verse_graph.resources import RESOURCES
from verse_graph.routes import health
from verse_graph.routes.resource import create_resource_router
from verse_graph.services.arango_store import ArangoCollectionStore
from verse_graph.services.store_base import CollectionStore

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure logging for the entire application.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s
    Called once during app startup, before any other initialization.
    """
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[
            logging.StreamHandler(sys.stdout),  # Docker captures stdout
        ],
        force=True,
    )

    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("urllib3").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Manage application lifecycle: startup and shutdown procedures.

    Provisioning runs before `yield`, so no request is served until every
    required collection exists. A provisioning failure aborts startup.
    """
    # ── Startup ───────────────────────────────────────────────────────────
    setup_logging()
    logger.info("=" * 60)
    logger.info("Verse Graph API starting up (environment=%s)...", settings.environment)

    try:
        settings.validate_required_for_production()
    except ValueError as e:
        logger.error("Configuration error: %s", str(e))
        logger.error("Fix the configuration and restart the server.")

    database: Optional[StandardDatabase] = app.state.database
    if database is not None and settings.provision_on_startup:
        documents, edges = required_collections(
            settings.document_collections_list, settings.edge_collections_list
        )
        try:
            created = await run_in_threadpool(provision_collections, database, documents, edges)
        except ArangoError as e:
            logger.error("Collection provisioning failed: %s", str(e))
            raise DatabaseError(
                message="Could not provision ArangoDB collections",
                context={"database": settings.arango_db, "error_type": type(e).__name__},
            ) from e
        logger.info("Collections provisioned (%d created)", len(created))

    logger.info("Server ready at http://%s:%d", settings.backend_host, settings.backend_port)
    logger.info("API docs: http://%s:%d/docs", settings.backend_host, settings.backend_port)
    logger.info("=" * 60)

    yield

    # ── Shutdown ──────────────────────────────────────────────────────────
    logger.info("Verse Graph API shutting down...")
    client = getattr(app.state, "arango_client", None)
    if client is not None:
        client.close()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def _error_body(error: str, code: int, message: str) -> dict:
    return {
        "error": error,
        "code": code,
        "message": message,
        "request_id": request_id_var.get(""),
    }


def register_exception_handlers(app: FastAPI) -> None:
    """
    Register global exception handlers for consistent error responses.

    Handler hierarchy:
        NotFoundError          → 404 Not Found (store message verbatim)
        ConflictError          → 409 Conflict (store message verbatim)
        VerseGraphError (base) → 500 (untranslated StoreError, DatabaseError)
        Exception (fallback)   → 500 Internal Server Error

    500 responses never carry internal details; they are logged server-side.
    """

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        logger.info("[%s] Not found: %s | Context: %s", request_id_var.get(""), exc.message, exc.context)
        return JSONResponse(status_code=404, content=_error_body("not_found", 404, exc.message))

    @app.exception_handler(ConflictError)
    async def handle_conflict(request: Request, exc: ConflictError):
        logger.warning("[%s] Conflict: %s | Context: %s", request_id_var.get(""), exc.message, exc.context)
        return JSONResponse(status_code=409, content=_error_body("conflict", 409, exc.message))

    @app.exception_handler(VerseGraphError)
    async def handle_application_error(request: Request, exc: VerseGraphError):
        logger.error(
            "[%s] Unhandled %s: %s | Context: %s",
            request_id_var.get(""),
            type(exc).__name__,
            exc.message,
            exc.context,
            exc_info=exc,
        )
        return JSONResponse(
            status_code=500,
            content=_error_body(
                "internal_server_error",
                500,
                "An internal error occurred. Please try again later.",
            ),
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        logger.error("[%s] Unexpected error: %s", request_id_var.get(""), str(exc), exc_info=exc)
        return JSONResponse(
            status_code=500,
            content=_error_body(
                "internal_server_error",
                500,
                "An unexpected error occurred. Please try again or contact support.",
            ),
        )


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(
    database: Optional[StandardDatabase] = None,
    stores: Optional[Mapping[str, CollectionStore]] = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        database: ArangoDB handle shared by every store. Built from settings
                  when neither `database` nor `stores` is given.
        stores:   Pre-built stores keyed by collection name; skips the
                  ArangoDB wiring (used by tests).

    Returns:
        Fully configured FastAPI instance ready to receive requests.
    """
    client = None
    if stores is None:
        if database is None:
            client = create_client(settings)
            database = connect(client=client, config=settings)
        stores = {
            resource.collection: ArangoCollectionStore(database, resource.collection)
            for resource in RESOURCES
        }

    app = FastAPI(
        title="Verse Graph API",
        description=(
            "CRUD endpoints over the verse and source document collections "
            "and the hasSource edge collection linking them."
        ),
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )
    app.state.database = database
    app.state.arango_client = client

    # ── Register Middleware ───────────────────────────────────────────────
    # Executes in reverse order of addition: RequestID → Logging → GZip → CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID", "Location"],
    )
    app.add_middleware(GZipMiddleware, minimum_size=500)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # ── Register Exception Handlers ───────────────────────────────────────
    register_exception_handlers(app)

    # ── Register Routes ───────────────────────────────────────────────────
    for resource in RESOURCES:
        app.include_router(create_resource_router(resource, stores[resource.collection]))
    app.include_router(health.router)

    return app


# ── Application Instance ─────────────────────────────────────────────────
# uvicorn expects `verse_graph.main:app` to be importable
app = create_app()
