"""
Product Catalog API — Health Check and Root Routes
====================================================

What:  GET /health for liveness checks, GET / for a plain-text greeting.
How:   Health pings the database behind the attached ProductStore.

Status levels:
    - healthy:   store answers ping (HTTP 200)
    - unhealthy: store unreachable or not attached yet (HTTP 503)
"""

import logging
import time

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse, PlainTextResponse

from app import __version__
from app.schemas.product import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

GREETING = "Hello from Product Catalog API"

# Module load time, used for uptime reporting
_start_time = time.time()


@router.get(
    "/",
    response_class=PlainTextResponse,
    summary="Service greeting",
)
async def root() -> str:
    return GREETING


@router.get(
    "/health",
    response_model=HealthResponse,
    responses={503: {"description": "Store unreachable", "model": HealthResponse}},
    summary="Service health check",
)
async def health_check(request: Request) -> JSONResponse:
    """
    Check whether the product store is reachable.

    Reads the store from app.state directly instead of through
    get_product_store, so a missing store reports 'disconnected'
    rather than raising.
    """
    store = getattr(request.app.state, "product_store", None)
    connected = store is not None and await store.ping()

    if not connected:
        logger.warning("Health check: product store unreachable")

    body = HealthResponse(
        status="healthy" if connected else "unhealthy",
        version=__version__,
        database="connected" if connected else "disconnected",
        uptime_seconds=round(time.time() - _start_time, 2),
    )
    return JSONResponse(
        status_code=200 if connected else 503,
        content=body.model_dump(),
    )
