"""Catalog repository for database operations.

Provides paged reads over catalog items, brands and types, and
single-row mutations over catalog items.
"""

import asyncio
from abc import ABC, abstractmethod
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from decimal import Decimal
from typing import Any

import structlog
from sqlalchemy import and_, func, select
from sqlalchemy.exc import DataError, IntegrityError, InterfaceError, OperationalError
from sqlalchemy.ext.asyncio import AsyncSession

from catalog_host.catalog.models import CatalogBrand, CatalogItem, CatalogType
from catalog_host.catalog.pagination import PageRequest, PaginatedItems
from catalog_host.catalog.update_fields import (
    FieldUpdate,
    UpdateField,
    check_invariant,
    parse_update,
)
from catalog_host.domain.exceptions import StoreUnavailableError
from catalog_host.domain.result import FailureReason, Found, NotFound, Result

logger = structlog.get_logger()


class CatalogItemRepository(ABC):
    """Persistence contract for the catalog.

    Paged reads always return an envelope; a page past the end has empty
    ``data`` and the real ``total_count``. Single-row operations return
    ``Found`` or ``NotFound`` and raise only for infrastructure failures.
    """

    @abstractmethod
    async def get_by_page(
        self,
        page_index: int,
        page_size: int,
        brand_filter: int | None = None,
        type_filter: int | None = None,
    ) -> PaginatedItems[CatalogItem] | None:
        """Page through items, optionally filtered by brand and type id."""

    @abstractmethod
    async def add(
        self,
        name: str,
        description: str,
        price: Decimal,
        available_stock: int,
        catalog_brand_id: int,
        catalog_type_id: int,
        picture_file_name: str,
    ) -> Result[int]:
        """Create an item and return its id."""

    @abstractmethod
    async def delete(self, item_id: int) -> Result[int]:
        """Delete an item and return its id."""

    @abstractmethod
    async def get_by_id(self, item_id: int) -> Result[CatalogItem]:
        """Get one item."""

    @abstractmethod
    async def update(self, item_id: int, property_name: str, value: str) -> Result[CatalogItem]:
        """Set a single named field of an item from its string value."""

    @abstractmethod
    async def get_by_brand(
        self, brand: str, page_index: int, page_size: int
    ) -> PaginatedItems[CatalogItem] | None:
        """Page through items whose brand name equals ``brand``."""

    @abstractmethod
    async def get_by_type(
        self, type_name: str, page_index: int, page_size: int
    ) -> PaginatedItems[CatalogItem] | None:
        """Page through items whose type name equals ``type_name``."""

    @abstractmethod
    async def get_brands(self, page_index: int, page_size: int) -> PaginatedItems[CatalogBrand] | None:
        """Page through brands."""

    @abstractmethod
    async def get_types(self, page_index: int, page_size: int) -> PaginatedItems[CatalogType] | None:
        """Page through types."""


class SqlAlchemyCatalogItemRepository(CatalogItemRepository):
    """Catalog repository backed by an async SQLAlchemy session.

    The repository only flushes; committing is up to whoever owns the
    transaction.

    Example usage:
        async with async_session_factory() as session:
            repo = SqlAlchemyCatalogItemRepository(session)
            page = await repo.get_by_page(page_index=0, page_size=10, brand_filter=2)
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: Async SQLAlchemy session.
        """
        self.session = session

    # ------------------------------------------------------------------
    # Paged reads
    # ------------------------------------------------------------------

    async def get_by_page(
        self,
        page_index: int,
        page_size: int,
        brand_filter: int | None = None,
        type_filter: int | None = None,
    ) -> PaginatedItems[CatalogItem]:
        """Page through items with optional foreign-key filters.

        Args:
            page_index: Page number (0-indexed).
            page_size: Items per page.
            brand_filter: Keep only items of this brand id.
            type_filter: Keep only items of this type id.

        Returns:
            Page of items ordered by id.
        """
        conditions = []

        if brand_filter is not None:
            conditions.append(CatalogItem.catalog_brand_id == brand_filter)

        if type_filter is not None:
            conditions.append(CatalogItem.catalog_type_id == type_filter)

        return await self._page(
            CatalogItem,
            PageRequest(page_index, page_size),
            conditions,
            operation="get_by_page",
        )

    async def get_by_brand(
        self, brand: str, page_index: int, page_size: int
    ) -> PaginatedItems[CatalogItem]:
        """Page through items of a brand, matched by exact name.

        Args:
            brand: Brand name (case-sensitive).
            page_index: Page number (0-indexed).
            page_size: Items per page.

        Returns:
            Page of items ordered by id.
        """
        return await self._page(
            CatalogItem,
            PageRequest(page_index, page_size),
            [CatalogBrand.brand == brand],
            joins=[CatalogItem.catalog_brand],
            operation="get_by_brand",
        )

    async def get_by_type(
        self, type_name: str, page_index: int, page_size: int
    ) -> PaginatedItems[CatalogItem]:
        """Page through items of a type, matched by exact name.

        Args:
            type_name: Type name (case-sensitive).
            page_index: Page number (0-indexed).
            page_size: Items per page.

        Returns:
            Page of items ordered by id.
        """
        return await self._page(
            CatalogItem,
            PageRequest(page_index, page_size),
            [CatalogType.type == type_name],
            joins=[CatalogItem.catalog_type],
            operation="get_by_type",
        )

    async def get_brands(self, page_index: int, page_size: int) -> PaginatedItems[CatalogBrand]:
        """Page through brands ordered by id.

        Args:
            page_index: Page number (0-indexed).
            page_size: Brands per page.

        Returns:
            Page of brands with the total brand count.
        """
        return await self._page(
            CatalogBrand, PageRequest(page_index, page_size), operation="get_brands"
        )

    async def get_types(self, page_index: int, page_size: int) -> PaginatedItems[CatalogType]:
        """Page through types ordered by id.

        Args:
            page_index: Page number (0-indexed).
            page_size: Types per page.

        Returns:
            Page of types with the total type count.
        """
        return await self._page(
            CatalogType, PageRequest(page_index, page_size), operation="get_types"
        )

    # ------------------------------------------------------------------
    # Single-row operations
    # ------------------------------------------------------------------

    async def get_by_id(self, item_id: int) -> Result[CatalogItem]:
        """Get item by ID.

        Args:
            item_id: Item ID.

        Returns:
            Found with the item, or NotFound.
        """
        async with self._store_errors("get_by_id"):
            item = await self._load_item(item_id)

        if item is None:
            return NotFound(FailureReason.NOT_FOUND, f"Catalog item {item_id} not found")
        return Found(item)

    async def add(
        self,
        name: str,
        description: str,
        price: Decimal,
        available_stock: int,
        catalog_brand_id: int,
        catalog_type_id: int,
        picture_file_name: str,
    ) -> Result[int]:
        """Create a catalog item.

        Args:
            name: Item name, non-empty.
            description: Item description.
            price: Unit price, non-negative.
            available_stock: Units in stock, non-negative.
            catalog_brand_id: Existing brand id.
            catalog_type_id: Existing type id.
            picture_file_name: Picture file name, may be empty.

        Returns:
            Found with the new id; NotFound with INVALID_VALUE when a field
            breaks its invariant or does not fit its column,
            CONSTRAINT_VIOLATION when a reference is missing or the store
            rejects the row.
        """
        for field, value in (
            (UpdateField.NAME, name),
            (UpdateField.PRICE, price),
            (UpdateField.AVAILABLE_STOCK, available_stock),
            (UpdateField.PICTURE_FILE_NAME, picture_file_name),
            (UpdateField.CATALOG_BRAND_ID, catalog_brand_id),
            (UpdateField.CATALOG_TYPE_ID, catalog_type_id),
        ):
            violation = check_invariant(field, value)
            if violation:
                return NotFound(FailureReason.INVALID_VALUE, violation)

        async with self._store_errors("add"):
            if not await self._reference_exists(UpdateField.CATALOG_BRAND_ID, catalog_brand_id):
                return NotFound(
                    FailureReason.CONSTRAINT_VIOLATION,
                    f"Catalog brand {catalog_brand_id} does not exist",
                )
            if not await self._reference_exists(UpdateField.CATALOG_TYPE_ID, catalog_type_id):
                return NotFound(
                    FailureReason.CONSTRAINT_VIOLATION,
                    f"Catalog type {catalog_type_id} does not exist",
                )

            item = CatalogItem(
                name=name,
                description=description,
                price=price,
                available_stock=available_stock,
                catalog_brand_id=catalog_brand_id,
                catalog_type_id=catalog_type_id,
                picture_file_name=picture_file_name,
            )
            self.session.add(item)
            try:
                await self.session.flush()
            except IntegrityError as exc:
                logger.warning("Catalog item insert rejected", name=name, error=str(exc.orig))
                return NotFound(FailureReason.CONSTRAINT_VIOLATION, str(exc.orig))
            except DataError as exc:
                logger.warning("Catalog item value rejected", name=name, error=str(exc.orig))
                return NotFound(FailureReason.INVALID_VALUE, str(exc.orig))

        return Found(item.id)

    async def delete(self, item_id: int) -> Result[int]:
        """Delete a catalog item.

        Args:
            item_id: Item ID.

        Returns:
            Found with the deleted id, or NotFound.
        """
        async with self._store_errors("delete"):
            item = await self._load_item(item_id)
            if item is None:
                return NotFound(FailureReason.NOT_FOUND, f"Catalog item {item_id} not found")

            await self.session.delete(item)
            await self.session.flush()

        return Found(item_id)

    async def update(self, item_id: int, property_name: str, value: str) -> Result[CatalogItem]:
        """Update one field of a catalog item.

        Args:
            item_id: Item ID.
            property_name: Field name, e.g. "Name" or "available_stock".
            value: New value as a string.

        Returns:
            Found with the updated item, or NotFound with the failure reason.
        """
        parsed = parse_update(property_name, value)
        if isinstance(parsed, NotFound):
            return parsed
        change: FieldUpdate = parsed.value

        async with self._store_errors("update"):
            item = await self._load_item(item_id)
            if item is None:
                return NotFound(FailureReason.NOT_FOUND, f"Catalog item {item_id} not found")

            if change.field.is_reference and not await self._reference_exists(
                change.field, change.value
            ):
                return NotFound(
                    FailureReason.CONSTRAINT_VIOLATION,
                    f"{change.field.value} {change.value} does not exist",
                )

            change.apply(item)
            try:
                await self.session.flush()
            except IntegrityError as exc:
                return NotFound(FailureReason.CONSTRAINT_VIOLATION, str(exc.orig))
            except DataError as exc:
                return NotFound(FailureReason.INVALID_VALUE, str(exc.orig))
            await self.session.refresh(item)

        return Found(item)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    async def _page(
        self,
        model: Any,
        page: PageRequest,
        conditions: list[Any] | None = None,
        joins: list[Any] | None = None,
        operation: str = "page",
    ) -> PaginatedItems[Any]:
        """Run a filtered count plus a page query over one table.

        Args:
            model: Mapped class to select.
            page: Page selection.
            conditions: Filter conditions, AND-ed together.
            joins: Relationships to join before filtering.
            operation: Name used in error reports.

        Returns:
            Page ordered by id with the filtered total.
        """
        query = select(model)
        count_query = select(func.count()).select_from(model)

        for join in joins or []:
            query = query.join(join)
            count_query = count_query.join(join)

        if conditions:
            query = query.where(and_(*conditions))
            count_query = count_query.where(and_(*conditions))

        query = query.order_by(model.id.asc()).offset(page.offset).limit(page.limit)

        async with self._store_errors(operation):
            total = (await self.session.execute(count_query)).scalar_one()
            rows = (await self.session.execute(query)).scalars().all()

        return PaginatedItems(data=list(rows), total_count=total)

    async def _load_item(self, item_id: int) -> CatalogItem | None:
        query = select(CatalogItem).where(CatalogItem.id == item_id)
        result = await self.session.execute(query)
        return result.scalar_one_or_none()

    async def _reference_exists(self, field: UpdateField, ref_id: int) -> bool:
        model = CatalogBrand if field is UpdateField.CATALOG_BRAND_ID else CatalogType
        query = select(func.count()).select_from(model).where(model.id == ref_id)
        result = await self.session.execute(query)
        return result.scalar_one() > 0

    @asynccontextmanager
    async def _store_errors(self, operation: str) -> AsyncIterator[None]:
        """Re-raise connectivity failures as StoreUnavailableError."""
        try:
            yield
        except (OperationalError, InterfaceError, asyncio.TimeoutError) as exc:
            logger.error("Catalog store unavailable", operation=operation, error=str(exc))
            raise StoreUnavailableError(operation, str(exc)) from exc
