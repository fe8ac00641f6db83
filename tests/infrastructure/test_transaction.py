"""Tests for session-backed transactions and the full service stack."""

from decimal import Decimal
from typing import Any

import pytest
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from catalog_host.catalog.models import CatalogItem
from catalog_host.catalog.seed import ITEMS, seed_catalog
from catalog_host.catalog.service import build_catalog_service
from catalog_host.infrastructure.transaction import SessionTransactionWrapper


async def count_items(session_factory: async_sessionmaker[AsyncSession]) -> int:
    async with session_factory() as session:
        return (await session.execute(select(func.count()).select_from(CatalogItem))).scalar_one()


class TestSessionTransactionWrapper:
    """Tests for SessionTransactionWrapper."""

    @pytest.mark.asyncio
    async def test_commit_persists(
        self, catalog_data: dict[str, Any], session_factory, session: AsyncSession
    ) -> None:
        wrapper = SessionTransactionWrapper(session)

        transaction = await wrapper.begin_transaction()
        item = await session.get(CatalogItem, catalog_data["item_ids"][0])
        await session.delete(item)
        await transaction.commit()

        assert await count_items(session_factory) == 11

    @pytest.mark.asyncio
    async def test_rollback_discards(
        self, catalog_data: dict[str, Any], session_factory, session: AsyncSession
    ) -> None:
        wrapper = SessionTransactionWrapper(session)

        transaction = await wrapper.begin_transaction()
        item = await session.get(CatalogItem, catalog_data["item_ids"][0])
        await session.delete(item)
        await session.flush()
        await transaction.rollback()

        assert await count_items(session_factory) == 12

    @pytest.mark.asyncio
    async def test_adopts_autobegun_transaction(
        self, catalog_data: dict[str, Any], session: AsyncSession
    ) -> None:
        """A read before the mutation does not break transaction start."""
        await session.execute(select(CatalogItem))
        assert session.in_transaction()

        transaction = await SessionTransactionWrapper(session).begin_transaction()
        await transaction.rollback()

        assert not session.in_transaction()


class TestServiceOnDatabase:
    """End-to-end service tests against the in-memory store."""

    @pytest.mark.asyncio
    async def test_rejected_add_leaves_no_row(
        self, catalog_data: dict[str, Any], session_factory, session: AsyncSession
    ) -> None:
        service = build_catalog_service(session)

        item_id = await service.add("Mug", "", Decimal("1.00"), 1, 999, 999, "")

        assert item_id is None
        assert await count_items(session_factory) == 12

    @pytest.mark.asyncio
    async def test_add_is_visible_to_other_sessions(
        self, catalog_data: dict[str, Any], session_factory, session: AsyncSession
    ) -> None:
        service = build_catalog_service(session)

        item_id = await service.add(
            "Mug",
            "",
            Decimal("1.00"),
            1,
            catalog_data["brand_ids"]["Other"],
            catalog_data["type_ids"]["Pin"],
            "",
        )

        assert item_id is not None
        assert await count_items(session_factory) == 13

    @pytest.mark.asyncio
    async def test_update_returns_mapped_item(
        self, catalog_data: dict[str, Any], session: AsyncSession
    ) -> None:
        service = build_catalog_service(session)
        item_id = catalog_data["item_ids"][0]

        dto = await service.update(item_id, "Name", "NewName")

        assert dto is not None
        assert dto.name == "NewName"
        assert dto.catalog_brand is not None
        assert dto.catalog_brand.brand == "TestName"

    @pytest.mark.asyncio
    async def test_seed_catalog(self, session_factory, session: AsyncSession) -> None:
        result = await seed_catalog(session)

        assert result["items_created"] == len(ITEMS)
        assert await count_items(session_factory) == len(ITEMS)

        again = await seed_catalog(session)
        assert again["skipped"] is True

    @pytest.mark.asyncio
    async def test_oversized_stock_update_is_rejected_not_raised(
        self, catalog_data: dict[str, Any], session_factory, session: AsyncSession
    ) -> None:
        service = build_catalog_service(session)
        item_id = catalog_data["item_ids"][0]

        dto = await service.update(item_id, "AvailableStock", "99999999999999999999")

        assert dto is None
        async with session_factory() as other:
            stock = (
                await other.execute(
                    select(CatalogItem.available_stock).where(CatalogItem.id == item_id)
                )
            ).scalar_one()
        assert stock == 10

    @pytest.mark.asyncio
    async def test_sub_cent_price_add_is_rejected(
        self, catalog_data: dict[str, Any], session_factory, session: AsyncSession
    ) -> None:
        service = build_catalog_service(session)

        item_id = await service.add(
            "Mug",
            "",
            Decimal("1.239"),
            1,
            catalog_data["brand_ids"]["Other"],
            catalog_data["type_ids"]["Mug"],
            "",
        )

        assert item_id is None
        assert await count_items(session_factory) == 12
