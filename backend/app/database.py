"""
Product Catalog API — MongoDB Client Management
=================================================

What:  Motor client factory, collection lookup and lifecycle helpers.
How:   One AsyncIOMotorClient per process, created during the app lifespan
       and closed on shutdown. The client owns its own connection pool.
Who:   Used by the application lifespan (main.py) to build the ProductStore.
When:  Client is created at startup; collections are resolved once from it.

Connection Strategy:
    Motor connects lazily: constructing the client never blocks or fails on
    an unreachable server. `ping_client()` issues the `ping` admin command
    so startup can log whether the cluster is actually reachable.

    serverSelectionTimeoutMS bounds every operation that needs a server;
    once it elapses the driver raises ServerSelectionTimeoutError, which the
    ProductStore turns into a StoreFailure (HTTP 500).
"""

import logging
from typing import Optional

from motor.motor_asyncio import (
    AsyncIOMotorClient,
    AsyncIOMotorCollection,
)
from pymongo.errors import PyMongoError
from starlette.requests import Request

from app.config import Settings, settings as default_settings
from app.exceptions import DatabaseError, StoreNotConfiguredError
from app.services.product_store import ProductStore

logger = logging.getLogger(__name__)


def create_client(config: Optional[Settings] = None) -> AsyncIOMotorClient:
    """
    Build a Motor client from settings.

    tz_aware=True makes BSON datetimes come back as aware UTC datetimes,
    which serialize to ISO 8601 with an explicit offset.
    """
    config = config or default_settings
    return AsyncIOMotorClient(
        config.mongo_url,
        serverSelectionTimeoutMS=config.mongo_server_selection_timeout_ms,
        maxPoolSize=config.mongo_max_pool_size,
        tz_aware=True,
    )


def get_products_collection(
    client: AsyncIOMotorClient,
    config: Optional[Settings] = None,
) -> AsyncIOMotorCollection:
    """Resolve the products collection from the configured database."""
    config = config or default_settings
    return client[config.mongo_database][config.mongo_collection]


async def ping_client(client: AsyncIOMotorClient) -> None:
    """
    Verify the cluster is reachable.

    Raises:
        DatabaseError: The ping command failed (unreachable, auth failure, ...).
    """
    try:
        await client.admin.command("ping")
    except PyMongoError as e:
        raise DatabaseError(
            message=f"MongoDB ping failed: {e}",
            context={"error_type": type(e).__name__},
        ) from e


def close_client(client: AsyncIOMotorClient) -> None:
    """Close all pooled connections. Motor's close() is synchronous."""
    client.close()
    logger.info("MongoDB client closed")


# ── Store Dependency ──────────────────────────────────────────────────────
def get_product_store(request: Request) -> ProductStore:
    """
    FastAPI dependency that provides the ProductStore attached to the app.

    The store is set on `app.state.product_store` either by create_app(store=...)
    or by the lifespan once the Motor client exists.

    Example usage in a route:
        @router.get("/")
        async def list_products(store: ProductStore = Depends(get_product_store)):
            return await store.list_all()

    Raises:
        StoreNotConfiguredError: No store attached yet (→ 503).
    """
    store = getattr(request.app.state, "product_store", None)
    if store is None:
        raise StoreNotConfiguredError(context={"path": request.url.path})
    return store
