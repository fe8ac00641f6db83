"""Product Catalog Service.

Provides paged reads over catalog items, brands and types, single-field
item updates, and transaction-scoped item mutations.
"""

from catalog_host.catalog.dtos import (
    CatalogBrandDto,
    CatalogItemDto,
    CatalogTypeDto,
    PaginatedItemsResponse,
)
from catalog_host.catalog.mapper import CatalogMapper, Mapper
from catalog_host.catalog.models import CatalogBrand, CatalogItem, CatalogType
from catalog_host.catalog.pagination import PageRequest, PaginatedItems
from catalog_host.catalog.repository import (
    CatalogItemRepository,
    SqlAlchemyCatalogItemRepository,
)
from catalog_host.catalog.service import CatalogService, build_catalog_service
from catalog_host.catalog.update_fields import FieldUpdate, UpdateField, parse_update

__all__ = [
    # Models
    "CatalogBrand",
    "CatalogItem",
    "CatalogType",
    # DTOs
    "CatalogBrandDto",
    "CatalogItemDto",
    "CatalogTypeDto",
    "PaginatedItemsResponse",
    # Paging
    "PageRequest",
    "PaginatedItems",
    # Updates
    "FieldUpdate",
    "UpdateField",
    "parse_update",
    # Mapper
    "CatalogMapper",
    "Mapper",
    # Repository
    "CatalogItemRepository",
    "SqlAlchemyCatalogItemRepository",
    # Service
    "CatalogService",
    "build_catalog_service",
]
