"""Catalog data transfer objects.

Caller-facing projections of the catalog entities, decoupled from the
storage schema, plus the paginated response envelope.
"""

from decimal import Decimal
from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field

TDto = TypeVar("TDto")


class CatalogBrandDto(BaseModel):
    """Brand data transfer object."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    brand: str


class CatalogTypeDto(BaseModel):
    """Type data transfer object."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    type: str


class CatalogItemDto(BaseModel):
    """Catalog item data transfer object."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    description: str = ""
    price: Decimal
    available_stock: int
    picture_url: str = ""
    catalog_brand: CatalogBrandDto | None = None
    catalog_type: CatalogTypeDto | None = None


class PaginatedItemsResponse(BaseModel, Generic[TDto]):
    """Page of DTOs with paging metadata.

    ``count`` is the size of the whole filtered set, not of ``data``.
    """

    data: list[TDto] = Field(default_factory=list, description="Items on this page")
    count: int = Field(..., ge=0, description="Total matching items")
    page_index: int = Field(..., ge=0, description="Zero-based page index")
    page_size: int = Field(..., ge=1, description="Items per page")
