"""Catalog service for product operations.

High-level service that combines repository operations with
transaction scoping and DTO mapping for catalog management.
"""

from collections.abc import Awaitable, Callable
from decimal import Decimal
from typing import Any, TypeVar

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from catalog_host.catalog.dtos import (
    CatalogBrandDto,
    CatalogItemDto,
    CatalogTypeDto,
    PaginatedItemsResponse,
)
from catalog_host.catalog.mapper import CatalogMapper, Mapper
from catalog_host.catalog.pagination import PageRequest, PaginatedItems
from catalog_host.catalog.repository import (
    CatalogItemRepository,
    SqlAlchemyCatalogItemRepository,
)
from catalog_host.domain.result import Found, NotFound, Result
from catalog_host.infrastructure.transaction import (
    SessionTransactionWrapper,
    TransactionWrapper,
)

logger = structlog.get_logger()

TDto = TypeVar("TDto")


class CatalogService:
    """Service for catalog operations.

    Reads go straight to the repository; mutations run inside a
    transaction that is committed on success and rolled back on any
    failure result, error or cancellation. Expected absences come back
    as ``None``; infrastructure errors propagate.

    Example usage:
        async with async_session_factory() as session:
            service = build_catalog_service(session)

            page = await service.get_catalog_items(page_size=10, page_index=0)
            item_id = await service.add(
                name="Mug",
                description="Ceramic mug",
                price=Decimal("12.50"),
                available_stock=40,
                catalog_brand_id=1,
                catalog_type_id=2,
                picture_file_name="mug.png",
            )
    """

    def __init__(
        self,
        transaction_wrapper: TransactionWrapper,
        repository: CatalogItemRepository,
        mapper: Mapper,
    ) -> None:
        """Initialize service with its collaborators.

        Args:
            transaction_wrapper: Source of scoped transactions.
            repository: Catalog repository.
            mapper: Entity to DTO mapper.
        """
        self.transaction_wrapper = transaction_wrapper
        self.repository = repository
        self.mapper = mapper

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    async def get_catalog_items(
        self,
        page_size: int,
        page_index: int,
        brand_filter: int | None = None,
        type_filter: int | None = None,
    ) -> PaginatedItemsResponse[CatalogItemDto] | None:
        """Get a page of catalog items.

        Args:
            page_size: Items per page.
            page_index: Page number (0-indexed).
            brand_filter: Optional brand id filter.
            type_filter: Optional type id filter.

        Returns:
            Page envelope, or None if the repository produced nothing.
        """
        page = PageRequest(page_index, page_size)
        result = await self.repository.get_by_page(
            page.page_index, page.page_size, brand_filter, type_filter
        )
        return self._envelope(result, CatalogItemDto, page, "get_catalog_items")

    async def get_by_id(self, item_id: int) -> CatalogItemDto | None:
        """Get catalog item by ID.

        Args:
            item_id: Item ID.

        Returns:
            Item DTO, or None if not found.
        """
        result = await self.repository.get_by_id(item_id)
        if not isinstance(result, Found):
            logger.info("Catalog item not found", item_id=item_id)
            return None
        return self.mapper.map(result.value, CatalogItemDto)

    async def get_by_brand(
        self, brand: str, page_index: int, page_size: int
    ) -> PaginatedItemsResponse[CatalogItemDto] | None:
        """Get a page of items of the named brand."""
        page = PageRequest(page_index, page_size)
        result = await self.repository.get_by_brand(brand, page.page_index, page.page_size)
        return self._envelope(result, CatalogItemDto, page, "get_by_brand")

    async def get_by_type(
        self, type_name: str, page_index: int, page_size: int
    ) -> PaginatedItemsResponse[CatalogItemDto] | None:
        """Get a page of items of the named type."""
        page = PageRequest(page_index, page_size)
        result = await self.repository.get_by_type(type_name, page.page_index, page.page_size)
        return self._envelope(result, CatalogItemDto, page, "get_by_type")

    async def get_brands(
        self, page_index: int, page_size: int
    ) -> PaginatedItemsResponse[CatalogBrandDto] | None:
        """Get a page of brands.

        Args:
            page_index: Page number (0-indexed).
            page_size: Brands per page.

        Returns:
            Brand envelope, or None if the repository returned no page.
        """
        page = PageRequest(page_index, page_size)
        result = await self.repository.get_brands(page.page_index, page.page_size)
        return self._envelope(result, CatalogBrandDto, page, "get_brands")

    async def get_types(
        self, page_index: int, page_size: int
    ) -> PaginatedItemsResponse[CatalogTypeDto] | None:
        """Get a page of types.

        Args:
            page_index: Page number (0-indexed).
            page_size: Types per page.

        Returns:
            Type envelope, or None if the repository returned no page.
        """
        page = PageRequest(page_index, page_size)
        result = await self.repository.get_types(page.page_index, page.page_size)
        return self._envelope(result, CatalogTypeDto, page, "get_types")

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    async def add(
        self,
        name: str,
        description: str,
        price: Decimal,
        available_stock: int,
        catalog_brand_id: int,
        catalog_type_id: int,
        picture_file_name: str,
    ) -> int | None:
        """Create a catalog item.

        Returns:
            New item id, or None if the item was rejected.
        """
        result = await self._execute_in_transaction(
            "add",
            lambda: self.repository.add(
                name,
                description,
                price,
                available_stock,
                catalog_brand_id,
                catalog_type_id,
                picture_file_name,
            ),
        )
        if not isinstance(result, Found):
            return None

        logger.info("Catalog item created", item_id=result.value, name=name)
        return result.value

    async def update(self, item_id: int, property_name: str, value: str) -> CatalogItemDto | None:
        """Update one field of a catalog item.

        Args:
            item_id: Item ID.
            property_name: Field name.
            value: New value as a string.

        Returns:
            Updated item DTO, or None if the item or property was rejected.
        """
        result = await self._execute_in_transaction(
            "update",
            lambda: self.repository.update(item_id, property_name, value),
        )
        if not isinstance(result, Found):
            return None

        logger.info("Catalog item updated", item_id=item_id, property=property_name)
        return self.mapper.map(result.value, CatalogItemDto)

    async def delete(self, item_id: int) -> int | None:
        """Delete a catalog item.

        Returns:
            Deleted item id, or None if there was no such item.
        """
        result = await self._execute_in_transaction(
            "delete",
            lambda: self.repository.delete(item_id),
        )
        if not isinstance(result, Found):
            return None

        logger.info("Catalog item deleted", item_id=item_id)
        return result.value

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    async def _execute_in_transaction(
        self,
        operation: str,
        action: Callable[[], Awaitable[Result[Any]]],
    ) -> Result[Any]:
        """Run a repository mutation inside its own transaction.

        Commits when the mutation returns ``Found``; rolls back when it
        returns ``NotFound``, raises, or the task is cancelled.
        """
        transaction = await self.transaction_wrapper.begin_transaction()
        try:
            result = await action()
            if isinstance(result, Found):
                await transaction.commit()
                return result
        except BaseException as exc:
            logger.warning(
                "Catalog mutation failed, rolling back",
                operation=operation,
                error=repr(exc),
            )
            await transaction.rollback()
            raise

        await transaction.rollback()
        logger.info(
            "Catalog mutation rejected",
            operation=operation,
            reason=result.reason.value if isinstance(result, NotFound) else None,
            detail=getattr(result, "message", None),
        )
        return result

    def _envelope(
        self,
        result: PaginatedItems[Any] | None,
        dto_type: type[TDto],
        page: PageRequest,
        operation: str,
    ) -> PaginatedItemsResponse[TDto] | None:
        """Map a repository page into a response envelope.

        Args:
            result: Page from the repository, or None.
            dto_type: DTO class each entity is mapped to.
            page: Page selection echoed in the envelope.
            operation: Name used in log events.

        Returns:
            Envelope with mapped data and the total count, or None.
        """
        if result is None:
            logger.info(
                "Repository returned no page",
                operation=operation,
                page_index=page.page_index,
                page_size=page.page_size,
            )
            return None

        return PaginatedItemsResponse[dto_type](
            data=[self.mapper.map(entity, dto_type) for entity in result.data],
            count=result.total_count,
            page_index=page.page_index,
            page_size=page.page_size,
        )


def build_catalog_service(session: AsyncSession) -> CatalogService:
    """Create a catalog service bound to one database session.

    Args:
        session: Request-scoped async session.

    Returns:
        Catalog service using the SQLAlchemy repository.
    """
    return CatalogService(
        transaction_wrapper=SessionTransactionWrapper(session),
        repository=SqlAlchemyCatalogItemRepository(session),
        mapper=CatalogMapper(),
    )
