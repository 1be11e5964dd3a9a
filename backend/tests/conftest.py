"""
Product Catalog API — Test Configuration (conftest.py)
========================================================

What:  Shared pytest fixtures for the test suite.
How:   No real MongoDB is needed. Gateway tests drive ProductStore against a
       mocked Motor collection; HTTP tests build the app around an in-memory
       store that honours the same Found / NotFound / StoreFailure contract.

Fixtures:
    ├── mock_collection:  Mock Motor collection with AsyncMock methods
    ├── memory_store:     Empty InMemoryProductStore
    ├── seeded_store:     InMemoryProductStore holding product "12345"
    └── client_for:       Factory → httpx AsyncClient bound to create_app(store)
"""

import os

# Override settings for testing BEFORE any app imports
os.environ["MONGO_URL"] = "mongodb://localhost:27017"
os.environ["MONGO_DATABASE"] = "product_catalog_test"
os.environ["API_PREFIX"] = "/api/products"
os.environ["LOG_LEVEL"] = "WARNING"

from contextlib import asynccontextmanager
from typing import Any, Dict, Optional
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from bson import ObjectId
from httpx import ASGITransport, AsyncClient

from app.main import create_app
from app.services.results import Found, NotFound, StoreFailure, StoreResult


# ══════════════════════════════════════════════════════════════════════════
# In-memory Store Gateway
# ══════════════════════════════════════════════════════════════════════════

class InMemoryProductStore:
    """
    Dict-backed stand-in for ProductStore.

    Set `failure` to a message to make every operation return
    StoreFailure(message) instead of touching the data.
    """

    def __init__(self, records: Optional[Dict[str, Dict[str, Any]]] = None):
        self.records: Dict[str, Dict[str, Any]] = dict(records or {})
        self.failure: Optional[str] = None
        self.calls = []

    def _fail(self, operation: str) -> Optional[StoreFailure]:
        self.calls.append(operation)
        if self.failure is not None:
            return StoreFailure(message=self.failure, operation=operation)
        return None

    async def list_all(self) -> StoreResult:
        return self._fail("list_all") or Found(list(self.records.values()))

    async def get_by_id(self, product_id: str) -> StoreResult:
        failed = self._fail("get_by_id")
        if failed:
            return failed
        record = self.records.get(product_id)
        return Found(record) if record is not None else NotFound()

    async def create(self, fields: Dict[str, Any]) -> StoreResult:
        failed = self._fail("create")
        if failed:
            return failed
        product_id = str(ObjectId())
        record = {**{k: v for k, v in fields.items() if k != "_id"}, "_id": product_id}
        self.records[product_id] = record
        return Found(record)

    async def update_by_id(self, product_id: str, fields: Dict[str, Any]) -> StoreResult:
        failed = self._fail("update_by_id")
        if failed:
            return failed
        if product_id not in self.records:
            return NotFound()
        changes = {k: v for k, v in fields.items() if k != "_id"}
        self.records[product_id] = {**self.records[product_id], **changes}
        return Found(self.records[product_id])

    async def delete_by_id(self, product_id: str) -> StoreResult:
        failed = self._fail("delete_by_id")
        if failed:
            return failed
        record = self.records.pop(product_id, None)
        return Found(record) if record is not None else NotFound()

    async def ping(self) -> bool:
        return self.failure is None


# ══════════════════════════════════════════════════════════════════════════
# Function-Scoped Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def mock_collection():
    """
    Mock Motor collection.

    find() is synchronous in Motor and returns a cursor, so it is a
    MagicMock whose cursor exposes an async to_list().

    Usage:
        mock_collection.find_one.return_value = {"_id": oid, "name": "Product 1"}
        result = await ProductStore(mock_collection).get_by_id(str(oid))
    """
    collection = MagicMock()
    cursor = MagicMock()
    cursor.to_list = AsyncMock(return_value=[])
    collection.find = MagicMock(return_value=cursor)
    collection.find_one = AsyncMock(return_value=None)
    collection.insert_one = AsyncMock()
    collection.find_one_and_update = AsyncMock(return_value=None)
    collection.find_one_and_delete = AsyncMock(return_value=None)
    collection.database.command = AsyncMock(return_value={"ok": 1})
    return collection


@pytest.fixture
def memory_store():
    return InMemoryProductStore()


@pytest.fixture
def seeded_store():
    """Store holding the product used throughout the CRUD tests."""
    return InMemoryProductStore({"12345": {"_id": "12345", "name": "Product 1"}})


@pytest.fixture
def client_for():
    """
    Factory fixture: build an app around `store` and yield an AsyncClient.

    ASGITransport does not run the lifespan, so the injected store is the
    one every request sees.

    Usage:
        async with client_for(seeded_store) as client:
            response = await client.get("/api/products/12345")
    """

    @asynccontextmanager
    async def _make(store):
        app = create_app(store=store)
        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            yield client

    return _make


@pytest_asyncio.fixture
async def test_client(seeded_store, client_for):
    """AsyncClient over an app serving `seeded_store`."""
    async with client_for(seeded_store) as client:
        yield client
