"""API schemas for the Catalog Host API.

Pydantic models for request/response validation and serialization.
Paged responses reuse ``PaginatedItemsResponse`` from the catalog package.
"""

from decimal import Decimal

from pydantic import BaseModel, Field


# ============================================================================
# Common Schemas
# ============================================================================


class ErrorDetail(BaseModel):
    """Detailed error information."""

    field: str | None = Field(default=None, description="Field that caused the error")
    message: str = Field(..., description="Error message")


class ErrorResponse(BaseModel):
    """Standard error response.

    All API errors follow this format for consistency.
    """

    error_code: str = Field(..., description="Machine-readable error code")
    message: str = Field(..., description="Human-readable error message")
    details: list[ErrorDetail] = Field(
        default_factory=list, description="Additional error details"
    )
    request_id: str | None = Field(
        default=None, description="Request ID for correlation"
    )


# ============================================================================
# Catalog Item Schemas
# ============================================================================


class CatalogItemCreateRequest(BaseModel):
    """Request to create a catalog item."""

    name: str = Field(..., min_length=1, max_length=200, description="Item name")
    description: str = Field(default="", description="Item description")
    price: Decimal = Field(..., ge=0, description="Unit price")
    available_stock: int = Field(default=0, ge=0, description="Units in stock")
    catalog_brand_id: int = Field(..., description="Brand id")
    catalog_type_id: int = Field(..., description="Type id")
    picture_file_name: str = Field(default="", description="Picture file name")


class CatalogItemUpdateRequest(BaseModel):
    """Request to change a single field of a catalog item."""

    property: str = Field(..., min_length=1, description="Field name, e.g. 'Name' or 'price'")
    value: str = Field(..., description="New value as a string")


class CatalogItemIdResponse(BaseModel):
    """Identity of a created or deleted item."""

    id: int
