"""
Product Catalog API — Pydantic Response Schemas
=================================================

What:  Models describing the API contract in the OpenAPI document.
How:   Products have no declared schema, so ProductDocument only pins the
       identifier and allows any extra field. Handlers return JSONResponse
       directly; these models feed the `responses=` metadata of each route.
"""

from pydantic import BaseModel, ConfigDict, Field


class ProductDocument(BaseModel):
    """
    What:  A stored product: caller-supplied fields plus a store-assigned `_id`.
    Who:   Returned by list (as array items), get, create and update.
    """
    id: str = Field(alias="_id", description="Store-assigned identifier (ObjectId hex)")

    model_config = ConfigDict(extra="allow", populate_by_name=True)


class MessageResponse(BaseModel):
    """
    What:  `{"message": ...}` body used for delete confirmations and every error.

    Examples:
        {"message": "Product deleted successfully"}
        {"message": "Product not found"}
        {"message": "connection closed"}
    """
    message: str = Field(description="Human-readable outcome or error message")


class HealthResponse(BaseModel):
    """
    What:  Health check response showing service and store status.
    Who:   Returned by GET /health for container and load balancer health checks.
    """
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="MongoDB connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
