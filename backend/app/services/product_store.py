"""
Product Catalog API — Product Store (Store Gateway)
=====================================================

What:  The only component that talks to MongoDB. Wraps the products
       collection behind five async operations: list, get, create,
       update, delete.
How:   Each operation performs exactly one collection call and returns a
       tagged result (Found / NotFound / StoreFailure). Driver exceptions
       are captured here and never propagate to the route handlers.
Who:   Built by the app lifespan from a Motor collection; injected into the
       product routes through FastAPI's dependency system.

Identifier handling:
    Documents are keyed by `_id`. A path id that is a valid ObjectId hex
    string is matched as ObjectId; anything else is matched as the raw
    string, so documents inserted with string ids stay reachable and a
    malformed id resolves to NotFound (404) rather than being rejected as a
    bad query (500). Callers cannot tell "not an ObjectId" from "no such
    product"; both read as a lookup miss.

    Client-supplied `_id` values in create/update bodies are dropped: the
    identifier is assigned by the store and never changes afterwards.

Serialization:
    Records leave the gateway JSON-ready: ObjectId → str, datetime → ISO 8601,
    Decimal128 → decimal string (e.g. "19.99", no float rounding).
"""

import logging
from typing import Any, Awaitable, Callable, Dict, Union

from bson import Decimal128, ObjectId
from fastapi.encoders import jsonable_encoder
from pymongo import ReturnDocument

from app.services.results import (
    Found,
    NotFound,
    ProductList,
    ProductRecord,
    StoreFailure,
    StoreResult,
)

logger = logging.getLogger(__name__)

ID_FIELD = "_id"

BSON_ENCODERS = {
    ObjectId: str,
    Decimal128: lambda value: str(value.to_decimal()),
}


def _id_filter(product_id: str) -> Dict[str, Union[ObjectId, str]]:
    if ObjectId.is_valid(product_id):
        return {ID_FIELD: ObjectId(product_id)}
    return {ID_FIELD: product_id}


def _without_id(fields: Dict[str, Any]) -> Dict[str, Any]:
    return {key: value for key, value in fields.items() if key != ID_FIELD}


def to_record(document: Dict[str, Any]) -> ProductRecord:
    """Convert a raw BSON document into a JSON-compatible dict."""
    return jsonable_encoder(document, custom_encoder=BSON_ENCODERS)


class ProductStore:
    """
    Store Gateway over a Motor collection.

    Error Handling Strategy:
        Every operation runs through `_execute()`, which converts any
        exception raised by the driver into StoreFailure(message=str(exc)).
        "No matching document" is returned as NotFound, never as a failure.
    """

    def __init__(self, collection):
        self.collection = collection

    async def _execute(
        self,
        operation: str,
        call: Callable[[], Awaitable[StoreResult]],
    ) -> StoreResult:
        try:
            return await call()
        except Exception as e:
            logger.error(
                "Store operation '%s' failed: %s: %s",
                operation,
                type(e).__name__,
                str(e),
            )
            return StoreFailure(
                message=str(e),
                operation=operation,
                error_type=type(e).__name__,
            )

    # ── Read ──────────────────────────────────────────────────────────────

    async def list_all(self) -> StoreResult:
        """All products, in store order. Found([]) for an empty collection."""

        async def call() -> StoreResult:
            documents = await self.collection.find({}).to_list(length=None)
            records: ProductList = [to_record(doc) for doc in documents]
            return Found(records)

        return await self._execute("list_all", call)

    async def get_by_id(self, product_id: str) -> StoreResult:
        async def call() -> StoreResult:
            document = await self.collection.find_one(_id_filter(product_id))
            if document is None:
                return NotFound()
            return Found(to_record(document))

        return await self._execute("get_by_id", call)

    # ── Write ─────────────────────────────────────────────────────────────

    async def create(self, fields: Dict[str, Any]) -> StoreResult:
        """
        Insert `fields` as a new document.

        insert_one() mutates its argument to add `_id`, so a copy is
        inserted and the caller's dict is left untouched.
        """

        async def call() -> StoreResult:
            document = _without_id(fields)
            result = await self.collection.insert_one(document)
            return Found(to_record({**document, ID_FIELD: result.inserted_id}))

        return await self._execute("create", call)

    async def update_by_id(self, product_id: str, fields: Dict[str, Any]) -> StoreResult:
        """
        Apply `fields` with $set and return the document after the update.

        An empty field set is a plain lookup: MongoDB rejects an empty $set.
        """

        async def call() -> StoreResult:
            changes = _without_id(fields)
            if changes:
                document = await self.collection.find_one_and_update(
                    _id_filter(product_id),
                    {"$set": changes},
                    return_document=ReturnDocument.AFTER,
                )
            else:
                document = await self.collection.find_one(_id_filter(product_id))
            if document is None:
                return NotFound()
            return Found(to_record(document))

        return await self._execute("update_by_id", call)

    async def delete_by_id(self, product_id: str) -> StoreResult:
        async def call() -> StoreResult:
            document = await self.collection.find_one_and_delete(_id_filter(product_id))
            if document is None:
                return NotFound()
            return Found(to_record(document))

        return await self._execute("delete_by_id", call)

    # ── Health ────────────────────────────────────────────────────────────

    async def ping(self) -> bool:
        """True if the backing database answers `ping`. Never raises."""
        try:
            await self.collection.database.command("ping")
            return True
        except Exception as e:
            logger.warning("Store ping failed: %s", str(e))
            return False
