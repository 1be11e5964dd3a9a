"""
Product Catalog API — Product Route Handlers
==============================================

What:  CRUD handlers for the product resource.
How:   Each handler makes exactly one ProductStore call and hands the tagged
       result to a pure mapping function that builds the response.
Who:   Mounted by create_app() under settings.api_prefix (default /api/products).

Route Inventory (relative to the prefix):
    GET     ""              list all products (also "/")
    GET     "/{product_id}" get one product
    POST    ""              create a product from the JSON body (also "/")
    PUT     "/{product_id}" update a product with the JSON body
    DELETE  "/{product_id}" delete a product

Status mapping:
    Found        → 200 (record, list, or deletion message)
    NotFound     → 404 {"message": "Product not found"}
    StoreFailure → 500 {"message": <driver error text>}

Success is always 200, including creation.
"""

import logging
from typing import Any, Dict, List

from fastapi import APIRouter, Body, Depends
from fastapi.responses import JSONResponse

from app.database import get_product_store
from app.schemas.product import MessageResponse, ProductDocument
from app.services.product_store import ProductStore
from app.services.results import Found, NotFound, StoreResult

logger = logging.getLogger(__name__)

PRODUCT_NOT_FOUND = "Product not found"
PRODUCT_DELETED = "Product deleted successfully"

router = APIRouter(tags=["Products"])

_NOT_FOUND_DOC = {"description": "No product with this id", "model": MessageResponse}
_STORE_ERROR_DOC = {"description": "Store failure (driver message echoed)", "model": MessageResponse}
_BAD_BODY_DOC = {"description": "Body is missing or not a JSON object", "model": MessageResponse}


# ══════════════════════════════════════════════════════════════════════════
# Response Mapping
# ══════════════════════════════════════════════════════════════════════════

def message_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"message": message})


def record_response(result: StoreResult) -> JSONResponse:
    """Map a store result carrying a record (or list of records) to a response."""
    if isinstance(result, Found):
        return JSONResponse(status_code=200, content=result.value)
    if isinstance(result, NotFound):
        return message_response(404, PRODUCT_NOT_FOUND)
    return message_response(500, result.message)


def deletion_response(result: StoreResult) -> JSONResponse:
    """Deletes confirm with a fixed message instead of echoing the record."""
    if isinstance(result, Found):
        return message_response(200, PRODUCT_DELETED)
    return record_response(result)


# ══════════════════════════════════════════════════════════════════════════
# Handlers
# ══════════════════════════════════════════════════════════════════════════

@router.get(
    "",
    response_model=List[ProductDocument],
    responses={500: _STORE_ERROR_DOC},
    summary="List all products",
)
@router.get("/", include_in_schema=False)
async def get_products(store: ProductStore = Depends(get_product_store)) -> JSONResponse:
    return record_response(await store.list_all())


@router.get(
    "/{product_id}",
    response_model=ProductDocument,
    responses={404: _NOT_FOUND_DOC, 500: _STORE_ERROR_DOC},
    summary="Get a single product by id",
)
async def get_product(
    product_id: str,
    store: ProductStore = Depends(get_product_store),
) -> JSONResponse:
    """
    A missing product answers 404 {"message": "Product not found"},
    the same as update and delete.
    """
    return record_response(await store.get_by_id(product_id))


@router.post(
    "",
    response_model=ProductDocument,
    responses={400: _BAD_BODY_DOC, 500: _STORE_ERROR_DOC},
    summary="Create a product",
    description=(
        "Persists the JSON body as-is. The store assigns `_id`; any `_id` "
        "in the body is ignored. Responds 200 with the stored record."
    ),
)
@router.post("/", include_in_schema=False)
async def create_product(
    fields: Dict[str, Any] = Body(..., description="Product fields (any JSON object)"),
    store: ProductStore = Depends(get_product_store),
) -> JSONResponse:
    logger.debug("Creating product with fields: %s", sorted(fields))
    return record_response(await store.create(fields))


@router.put(
    "/{product_id}",
    response_model=ProductDocument,
    responses={400: _BAD_BODY_DOC, 404: _NOT_FOUND_DOC, 500: _STORE_ERROR_DOC},
    summary="Update a product",
    description="Sets the supplied fields on the product and returns the updated record.",
)
async def update_product(
    product_id: str,
    fields: Dict[str, Any] = Body(..., description="Fields to set (any JSON object)"),
    store: ProductStore = Depends(get_product_store),
) -> JSONResponse:
    return record_response(await store.update_by_id(product_id, fields))


@router.delete(
    "/{product_id}",
    response_model=MessageResponse,
    responses={404: _NOT_FOUND_DOC, 500: _STORE_ERROR_DOC},
    summary="Delete a product",
)
async def delete_product(
    product_id: str,
    store: ProductStore = Depends(get_product_store),
) -> JSONResponse:
    """Not idempotent: deleting the same id twice answers 404 the second time."""
    return deletion_response(await store.delete_by_id(product_id))
