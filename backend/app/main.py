"""
Product Catalog API — FastAPI Application Factory
===================================================

What:  Creates and configures the FastAPI application instance.
How:   Factory pattern: create_app() returns a configured FastAPI instance.
Who:   Called by uvicorn to start the server (uvicorn app.main:app).

Application Architecture:
    ┌──────────────────────────────────────────────────────┐
    │                     FastAPI App                      │
    │                                                      │
    │  Middleware:  Request ID → Logging → CORS            │
    │                                                      │
    │  Routes:      {api_prefix} CRUD │ GET /health │ GET / │
    │                                                      │
    │  Exception Handlers:                                 │
    │    bad body → 400 │ CatalogError → own status │ → 500 │
    └──────────────────────────────────────────────────────┘

Lifecycle:
    Startup:
    1. Configure logging
    2. If no store was injected: create the Motor client, attach a
       ProductStore to app.state and ping the cluster (failure is logged,
       not fatal: store calls will answer 500 until it is reachable)

    Shutdown:
    1. Close the Motor client if this lifespan created it
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app import __version__
from app.config import settings
from app.database import (
    close_client,
    create_client,
    get_products_collection,
    ping_client,
)
from app.exceptions import CatalogError, DatabaseError
from app.middleware.logging import RequestLoggingMiddleware
from app.middleware.request_id import (
    REQUEST_ID_HEADER,
    RequestIDMiddleware,
    new_request_id,
    request_id_var,
)
from app.routes import health, products
from app.services.product_store import ProductStore

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure the root logger once at startup.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s
    """
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # Third-party loggers that are chatty at INFO/DEBUG
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("pymongo").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    # ── Startup ───────────────────────────────────────────────────────────
    setup_logging()
    logger.info("Product Catalog API %s starting up...", __version__)

    client = None
    if getattr(app.state, "product_store", None) is None:
        client = create_client(settings)
        app.state.product_store = ProductStore(get_products_collection(client, settings))
        try:
            await ping_client(client)
            logger.info(
                "Connected to MongoDB (database=%s, collection=%s)",
                settings.mongo_database,
                settings.mongo_collection,
            )
        except DatabaseError as e:
            logger.error("MongoDB connection failed: %s", e.message)
    else:
        logger.info("Using injected product store")

    logger.info(
        "Serving products at http://%s:%d%s",
        settings.backend_host,
        settings.backend_port,
        settings.api_prefix,
    )

    yield

    # ── Shutdown ──────────────────────────────────────────────────────────
    logger.info("Product Catalog API shutting down...")
    if client is not None:
        app.state.product_store = None
        close_client(client)
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def describe_validation_error(exc: RequestValidationError) -> str:
    """
    Flatten pydantic errors into one line, e.g.
    "body: Input should be a valid dictionary".
    """
    parts = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()))
        parts.append(f"{location}: {error.get('msg', 'invalid value')}")
    return "; ".join(parts) or "Invalid request"


def register_exception_handlers(app: FastAPI) -> None:
    """
    Handler hierarchy:
        RequestValidationError → 400 Bad Request (body missing / not a JSON object)
        CatalogError           → exc.status_code
        Exception (fallback)   → 500 Internal Server Error

    Store failures never reach these handlers: product routes turn
    StoreFailure results into 500 responses themselves.
    """

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(request: Request, exc: RequestValidationError):
        message = describe_validation_error(exc)
        logger.warning("[%s] Rejected request body: %s", request_id_var.get(""), message)
        return JSONResponse(status_code=400, content={"message": message})

    @app.exception_handler(CatalogError)
    async def handle_catalog_error(request: Request, exc: CatalogError):
        logger.error(
            "[%s] %s: %s | Context: %s",
            request_id_var.get(""),
            type(exc).__name__,
            exc.message,
            exc.context,
        )
        return JSONResponse(status_code=exc.status_code, content={"message": exc.message})

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        # Runs outside the user middleware stack, after RequestIDMiddleware
        # has already unwound, so the header is set here.
        rid = (
            getattr(request.state, "request_id", None)
            or request_id_var.get("")
            or new_request_id()
        )
        logger.error("[%s] Unexpected error: %s", rid, str(exc), exc_info=True)
        return JSONResponse(
            status_code=500,
            content={"message": "An unexpected error occurred. Please try again later."},
            headers={REQUEST_ID_HEADER: rid},
        )


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(store: Optional[ProductStore] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        store: Store Gateway to serve from. When omitted, the lifespan builds
               one from the configured MongoDB connection at startup.
               Tests pass an in-memory or mock-backed store here.

    Returns:
        Fully configured FastAPI instance.
    """
    app = FastAPI(
        title="Product Catalog API",
        description="CRUD operations over products stored in MongoDB.",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.product_store = store

    # ── Register Middleware ───────────────────────────────────────────────
    # Executes in reverse order of addition: RequestID → Logging → CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=[REQUEST_ID_HEADER],
    )
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # ── Register Exception Handlers ───────────────────────────────────────
    register_exception_handlers(app)

    # ── Register Routes ───────────────────────────────────────────────────
    app.include_router(products.router, prefix=settings.api_prefix)
    app.include_router(health.router)

    return app


# ── Application Instance ─────────────────────────────────────────────────
# uvicorn expects `app.main:app` to be importable
app = create_app()
