"""Catalog read API endpoints.

Provides paged, read-only views of the catalog:
- GET /api/v1/catalog-bff/items - items, optionally filtered by brand/type id
- GET /api/v1/catalog-bff/items/{id} - single item
- GET /api/v1/catalog-bff/brands/{brand}/items - items of a brand by name
- GET /api/v1/catalog-bff/types/{type}/items - items of a type by name
- GET /api/v1/catalog-bff/brands - brands
- GET /api/v1/catalog-bff/types - types
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query

from catalog_host.api.dependencies import get_catalog_service, not_found
from catalog_host.api.schemas import ErrorResponse
from catalog_host.catalog.dtos import (
    CatalogBrandDto,
    CatalogItemDto,
    CatalogTypeDto,
    PaginatedItemsResponse,
)
from catalog_host.catalog.service import CatalogService
from catalog_host.infrastructure.config import settings

router = APIRouter(prefix="/api/v1/catalog-bff", tags=["Catalog"])

PageIndex = Annotated[int, Query(ge=0, description="Zero-based page index")]
PageSize = Annotated[
    int,
    Query(ge=1, le=settings.max_page_size, description="Items per page"),
]
Service = Annotated[CatalogService, Depends(get_catalog_service)]


@router.get(
    "/items",
    response_model=PaginatedItemsResponse[CatalogItemDto],
    responses={404: {"model": ErrorResponse}},
    summary="List catalog items",
)
async def get_items(
    service: Service,
    page_index: PageIndex = 0,
    page_size: PageSize = settings.default_page_size,
    brand_id: int | None = Query(default=None, description="Filter by brand id"),
    type_id: int | None = Query(default=None, description="Filter by type id"),
) -> PaginatedItemsResponse[CatalogItemDto]:
    """List catalog items page by page.

    Args:
        service: Catalog service.
        page_index: Page number (0-based).
        page_size: Items per page.
        brand_id: Filter by brand id.
        type_id: Filter by type id.

    Returns:
        Page of items with the filtered total.
    """
    result = await service.get_catalog_items(page_size, page_index, brand_id, type_id)
    if result is None:
        raise not_found("ITEMS_NOT_FOUND", "No catalog items available")
    return result


@router.get(
    "/items/{item_id}",
    response_model=CatalogItemDto,
    responses={404: {"model": ErrorResponse}},
    summary="Get catalog item",
)
async def get_item(item_id: int, service: Service) -> CatalogItemDto:
    """Get a catalog item by ID.

    Raises:
        HTTPException: If the item does not exist.
    """
    item = await service.get_by_id(item_id)
    if item is None:
        raise not_found("CATALOG_ITEM_NOT_FOUND", f"Catalog item not found: {item_id}")
    return item


@router.get(
    "/brands/{brand}/items",
    response_model=PaginatedItemsResponse[CatalogItemDto],
    responses={404: {"model": ErrorResponse}},
    summary="List items of a brand",
)
async def get_items_by_brand(
    brand: str,
    service: Service,
    page_index: PageIndex = 0,
    page_size: PageSize = settings.default_page_size,
) -> PaginatedItemsResponse[CatalogItemDto]:
    result = await service.get_by_brand(brand, page_index, page_size)
    if result is None:
        raise not_found("ITEMS_NOT_FOUND", f"No items for brand: {brand}")
    return result


@router.get(
    "/types/{type_name}/items",
    response_model=PaginatedItemsResponse[CatalogItemDto],
    responses={404: {"model": ErrorResponse}},
    summary="List items of a type",
)
async def get_items_by_type(
    type_name: str,
    service: Service,
    page_index: PageIndex = 0,
    page_size: PageSize = settings.default_page_size,
) -> PaginatedItemsResponse[CatalogItemDto]:
    result = await service.get_by_type(type_name, page_index, page_size)
    if result is None:
        raise not_found("ITEMS_NOT_FOUND", f"No items for type: {type_name}")
    return result


@router.get(
    "/brands",
    response_model=PaginatedItemsResponse[CatalogBrandDto],
    responses={404: {"model": ErrorResponse}},
    summary="List brands",
)
async def get_brands(
    service: Service,
    page_index: PageIndex = 0,
    page_size: PageSize = settings.default_page_size,
) -> PaginatedItemsResponse[CatalogBrandDto]:
    result = await service.get_brands(page_index, page_size)
    if result is None:
        raise not_found("BRANDS_NOT_FOUND", "No brands available")
    return result


@router.get(
    "/types",
    response_model=PaginatedItemsResponse[CatalogTypeDto],
    responses={404: {"model": ErrorResponse}},
    summary="List types",
)
async def get_types(
    service: Service,
    page_index: PageIndex = 0,
    page_size: PageSize = settings.default_page_size,
) -> PaginatedItemsResponse[CatalogTypeDto]:
    result = await service.get_types(page_index, page_size)
    if result is None:
        raise not_found("TYPES_NOT_FOUND", "No types available")
    return result
