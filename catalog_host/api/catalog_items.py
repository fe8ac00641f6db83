"""Catalog item mutation endpoints.

Provides endpoints for changing catalog items:
- POST /api/v1/catalog-items - create an item
- PATCH /api/v1/catalog-items/{id} - change one field of an item
- DELETE /api/v1/catalog-items/{id} - delete an item
"""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status

from catalog_host.api.dependencies import get_catalog_service, not_found
from catalog_host.api.schemas import (
    CatalogItemCreateRequest,
    CatalogItemIdResponse,
    CatalogItemUpdateRequest,
    ErrorResponse,
)
from catalog_host.catalog.dtos import CatalogItemDto
from catalog_host.catalog.service import CatalogService

router = APIRouter(prefix="/api/v1/catalog-items", tags=["Catalog Items"])


@router.post(
    "",
    response_model=CatalogItemIdResponse,
    status_code=status.HTTP_201_CREATED,
    responses={422: {"model": ErrorResponse}},
    summary="Create catalog item",
)
async def create_item(
    request: CatalogItemCreateRequest,
    service: Annotated[CatalogService, Depends(get_catalog_service)],
) -> CatalogItemIdResponse:
    """Create a catalog item.

    Args:
        request: Item fields.
        service: Catalog service.

    Returns:
        Id of the new item.

    Raises:
        HTTPException: If the brand or type does not exist or the store
            rejects the item.
    """
    item_id = await service.add(
        name=request.name,
        description=request.description,
        price=request.price,
        available_stock=request.available_stock,
        catalog_brand_id=request.catalog_brand_id,
        catalog_type_id=request.catalog_type_id,
        picture_file_name=request.picture_file_name,
    )
    if item_id is None:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail={
                "error_code": "CATALOG_ITEM_REJECTED",
                "message": "Catalog item could not be created",
            },
        )
    return CatalogItemIdResponse(id=item_id)


@router.patch(
    "/{item_id}",
    response_model=CatalogItemDto,
    responses={404: {"model": ErrorResponse}},
    summary="Update catalog item field",
)
async def update_item(
    item_id: int,
    request: CatalogItemUpdateRequest,
    service: Annotated[CatalogService, Depends(get_catalog_service)],
) -> CatalogItemDto:
    """Change a single field of a catalog item.

    Raises:
        HTTPException: If the item does not exist or the property/value
            pair is not accepted.
    """
    item = await service.update(item_id, request.property, request.value)
    if item is None:
        raise not_found(
            "CATALOG_ITEM_NOT_UPDATED",
            f"Catalog item {item_id} could not be updated with property '{request.property}'",
        )
    return item


@router.delete(
    "/{item_id}",
    response_model=CatalogItemIdResponse,
    responses={404: {"model": ErrorResponse}},
    summary="Delete catalog item",
)
async def delete_item(
    item_id: int,
    service: Annotated[CatalogService, Depends(get_catalog_service)],
) -> CatalogItemIdResponse:
    deleted_id = await service.delete(item_id)
    if deleted_id is None:
        raise not_found("CATALOG_ITEM_NOT_FOUND", f"Catalog item not found: {item_id}")
    return CatalogItemIdResponse(id=deleted_id)
