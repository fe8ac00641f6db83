"""Shared fixtures for catalog tests.

Provides an in-memory SQLite store for repository and API tests, plus
in-memory fakes and mocks for the service's collaborators.
"""

from decimal import Decimal
from typing import Any, AsyncGenerator
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from catalog_host.catalog.mapper import CatalogMapper, Mapper
from catalog_host.catalog.models import CatalogBrand, CatalogItem, CatalogType
from catalog_host.catalog.pagination import PageRequest, PaginatedItems
from catalog_host.catalog.repository import CatalogItemRepository
from catalog_host.catalog.update_fields import parse_update
from catalog_host.domain.result import FailureReason, Found, NotFound, Result
from catalog_host.infrastructure.database import Base
from catalog_host.infrastructure.transaction import TransactionHandle, TransactionWrapper


# ============================================================================
# Database Fixtures
# ============================================================================


@pytest_asyncio.fixture
async def db_engine() -> AsyncGenerator[AsyncEngine, None]:
    """Create an in-memory database with the catalog schema."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(db_engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Session factory bound to the test database."""
    return async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def session(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncSession, None]:
    """Open a session on the test database."""
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def catalog_data(session_factory: async_sessionmaker[AsyncSession]) -> dict[str, Any]:
    """Insert two brands, two types and twelve items.

    Layout (item ids 1-12 in insertion order):
        - items 1-6: brand "TestName", type "Mug"
        - items 7-9: brand "Other", type "Mug"
        - items 10-12: brand "Other", type "Pin"
    """
    async with session_factory() as setup:
        test_brand = CatalogBrand(brand="TestName")
        other_brand = CatalogBrand(brand="Other")
        mug = CatalogType(type="Mug")
        pin = CatalogType(type="Pin")
        setup.add_all([test_brand, other_brand, mug, pin])
        await setup.flush()

        items = []
        for n in range(1, 13):
            brand = test_brand if n <= 6 else other_brand
            type_ = mug if n <= 9 else pin
            items.append(
                CatalogItem(
                    name=f"Item {n}",
                    description=f"Description {n}",
                    price=Decimal("10.00") + n,
                    available_stock=n * 10,
                    catalog_brand_id=brand.id,
                    catalog_type_id=type_.id,
                    picture_file_name=f"{n}.png",
                )
            )
        setup.add_all(items)
        await setup.commit()

        return {
            "brand_ids": {"TestName": test_brand.id, "Other": other_brand.id},
            "type_ids": {"Mug": mug.id, "Pin": pin.id},
            "item_ids": [item.id for item in items],
        }


# ============================================================================
# In-Memory Fakes
# ============================================================================


class FakeTransaction(TransactionHandle):
    """Transaction handle that records how it ended."""

    def __init__(self) -> None:
        self.committed = False
        self.rolled_back = False

    async def commit(self) -> None:
        self.committed = True

    async def rollback(self) -> None:
        self.rolled_back = True


class FakeTransactionWrapper(TransactionWrapper):
    """Transaction wrapper handing out recording transactions."""

    def __init__(self) -> None:
        self.transactions: list[FakeTransaction] = []

    async def begin_transaction(self) -> TransactionHandle:
        transaction = FakeTransaction()
        self.transactions.append(transaction)
        return transaction

    @property
    def last(self) -> FakeTransaction:
        return self.transactions[-1]


class InMemoryCatalogItemRepository(CatalogItemRepository):
    """Catalog repository over plain lists.

    Items are transient ``CatalogItem`` instances; mutations apply
    immediately since the fake has no transaction of its own.
    """

    def __init__(self) -> None:
        self.brands: list[CatalogBrand] = []
        self.types: list[CatalogType] = []
        self.items: list[CatalogItem] = []

    def add_brand(self, name: str) -> CatalogBrand:
        brand = CatalogBrand(id=len(self.brands) + 1, brand=name)
        self.brands.append(brand)
        return brand

    def add_type(self, name: str) -> CatalogType:
        type_ = CatalogType(id=len(self.types) + 1, type=name)
        self.types.append(type_)
        return type_

    @staticmethod
    def _page(rows: list[Any], page_index: int, page_size: int) -> PaginatedItems[Any]:
        page = PageRequest(page_index, page_size)
        ordered = sorted(rows, key=lambda row: row.id)
        return PaginatedItems(
            data=ordered[page.offset : page.offset + page.limit],
            total_count=len(ordered),
        )

    def _brand_name(self, item: CatalogItem) -> str | None:
        return next((b.brand for b in self.brands if b.id == item.catalog_brand_id), None)

    def _type_name(self, item: CatalogItem) -> str | None:
        return next((t.type for t in self.types if t.id == item.catalog_type_id), None)

    async def get_by_page(self, page_index, page_size, brand_filter=None, type_filter=None):
        rows = [
            item
            for item in self.items
            if (brand_filter is None or item.catalog_brand_id == brand_filter)
            and (type_filter is None or item.catalog_type_id == type_filter)
        ]
        return self._page(rows, page_index, page_size)

    async def add(
        self,
        name,
        description,
        price,
        available_stock,
        catalog_brand_id,
        catalog_type_id,
        picture_file_name,
    ) -> Result[int]:
        if not any(b.id == catalog_brand_id for b in self.brands) or not any(
            t.id == catalog_type_id for t in self.types
        ):
            return NotFound(FailureReason.CONSTRAINT_VIOLATION)
        item = CatalogItem(
            id=max((i.id for i in self.items), default=0) + 1,
            name=name,
            description=description,
            price=price,
            available_stock=available_stock,
            catalog_brand_id=catalog_brand_id,
            catalog_type_id=catalog_type_id,
            picture_file_name=picture_file_name,
        )
        self.items.append(item)
        return Found(item.id)

    async def delete(self, item_id) -> Result[int]:
        for item in self.items:
            if item.id == item_id:
                self.items.remove(item)
                return Found(item_id)
        return NotFound()

    async def get_by_id(self, item_id) -> Result[CatalogItem]:
        for item in self.items:
            if item.id == item_id:
                return Found(item)
        return NotFound()

    async def update(self, item_id, property_name, value) -> Result[CatalogItem]:
        parsed = parse_update(property_name, value)
        if isinstance(parsed, NotFound):
            return parsed
        found = await self.get_by_id(item_id)
        if isinstance(found, NotFound):
            return found
        parsed.value.apply(found.value)
        return found

    async def get_by_brand(self, brand, page_index, page_size):
        rows = [item for item in self.items if self._brand_name(item) == brand]
        return self._page(rows, page_index, page_size)

    async def get_by_type(self, type_name, page_index, page_size):
        rows = [item for item in self.items if self._type_name(item) == type_name]
        return self._page(rows, page_index, page_size)

    async def get_brands(self, page_index, page_size):
        return self._page(self.brands, page_index, page_size)

    async def get_types(self, page_index, page_size):
        return self._page(self.types, page_index, page_size)


# ============================================================================
# Collaborator Fixtures
# ============================================================================


@pytest.fixture
def fake_transactions() -> FakeTransactionWrapper:
    """Create a recording transaction wrapper."""
    return FakeTransactionWrapper()


@pytest.fixture
def memory_repository() -> InMemoryCatalogItemRepository:
    """Create an in-memory repository with one brand and one type."""
    repository = InMemoryCatalogItemRepository()
    repository.add_brand("TestName")
    repository.add_type("Mug")
    return repository


@pytest.fixture
def mock_repository() -> MagicMock:
    """Create a mock catalog repository."""
    repository = MagicMock(spec=CatalogItemRepository)

    # Make all methods async
    repository.get_by_page = AsyncMock()
    repository.add = AsyncMock()
    repository.delete = AsyncMock()
    repository.get_by_id = AsyncMock()
    repository.update = AsyncMock()
    repository.get_by_brand = AsyncMock()
    repository.get_by_type = AsyncMock()
    repository.get_brands = AsyncMock()
    repository.get_types = AsyncMock()

    return repository


@pytest.fixture
def mock_mapper() -> MagicMock:
    """Create a mock mapper."""
    return MagicMock(spec=Mapper)


@pytest.fixture
def mapper() -> CatalogMapper:
    """Create a mapper with a fixed picture host."""
    return CatalogMapper(cdn_host="http://cdn.test", img_url="img")
