"""
Product Catalog API — Exception Hierarchy
===========================================

What:  Application-specific exceptions for failures outside the CRUD contract.
How:   Each exception carries a message and optional context dict. Global
       exception handlers (registered in main.py) turn them into
       `{"message": ...}` JSON responses.

Exception Hierarchy:
    CatalogError (base)
    ├── DatabaseError             → logged at startup / health (not a CRUD response)
    └── StoreNotConfiguredError   → 503 Service Unavailable

Store outcomes inside product handlers are NOT exceptions: ProductStore
returns Found / NotFound / StoreFailure values (see services/results.py),
and the handlers map those values to responses directly.
"""

from typing import Any, Dict, Optional


class CatalogError(Exception):
    """
    Base exception for all application errors.

    Attributes:
        message:  Human-readable description (returned in the response body)
        context:  Additional debug info (logged, never returned)
    """

    status_code = 500

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class DatabaseError(CatalogError):
    """
    Raised when the MongoDB cluster cannot be reached.

    When:    Startup ping or health check fails.
    """

    def __init__(
        self,
        message: str = "A database error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class StoreNotConfiguredError(CatalogError):
    """
    Raised when a product route runs before a ProductStore is attached.

    When:    The app was built without a store and the lifespan has not run
             (or failed before attaching one).
    HTTP:    503 Service Unavailable
    """

    status_code = 503

    def __init__(self, context: Optional[Dict[str, Any]] = None):
        super().__init__(
            message="Product store is not available. The service is still starting up.",
            context=context,
        )
