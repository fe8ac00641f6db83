"""Demo catalog data.

Populates an empty store with a handful of brands, types and items.
Items go through ``CatalogService.add`` so they get the same validation
and transaction handling as API-created items.
"""

from decimal import Decimal
from typing import Any

import structlog
from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from catalog_host.catalog.models import CatalogBrand, CatalogItem, CatalogType
from catalog_host.catalog.service import build_catalog_service

logger = structlog.get_logger()

BRANDS = [".NET", "Azure", "Other", "Roslyn", "Visual Studio"]

TYPES = ["Mug", "Pin", "Sheet", "T-Shirt"]

# (name, description, price, stock, brand, type, picture)
ITEMS: list[tuple[str, str, str, int, str, str, str]] = [
    (".NET Bot Black Hoodie", "Black hoodie with the .NET bot", "19.50", 100, ".NET", "T-Shirt", "1.png"),
    (".NET Black & White Mug", "Two-tone mug", "8.50", 89, ".NET", "Mug", "2.png"),
    ("Prism White T-Shirt", "White prism print", "12.00", 56, "Other", "T-Shirt", "3.png"),
    (".NET Foundation T-shirt", "Foundation logo tee", "12.00", 120, ".NET", "T-Shirt", "4.png"),
    ("Roslyn Red Pin", "Enamel pin", "8.50", 55, "Other", "Pin", "5.png"),
    (".NET Blue Hoodie", "Blue hoodie", "12.00", 17, ".NET", "T-Shirt", "6.png"),
    ("Roslyn Red T-Shirt", "Red compiler tee", "12.00", 8, "Roslyn", "T-Shirt", "7.png"),
    ("Kudu Purple Hoodie", "Purple hoodie", "8.50", 34, "Other", "T-Shirt", "8.png"),
    ("Cup<T> White Mug", "Generic mug", "12.00", 76, "Other", "Mug", "9.png"),
    (".NET Foundation Pin", "Foundation pin", "12.00", 11, ".NET", "Pin", "10.png"),
    ("Cup<T> Pin", "Generic pin", "8.50", 3, ".NET", "Pin", "11.png"),
    ("Prism White TShirt", "Prism tee", "12.00", 0, "Other", "T-Shirt", "12.png"),
    ("Modern .NET Black & White Mug", "Modern mug", "8.50", 89, ".NET", "Mug", "13.png"),
    ("Modern Cup<T> White Mug", "Modern generic mug", "12.00", 76, ".NET", "Mug", "14.png"),
]


async def seed_catalog(session: AsyncSession, clear_existing: bool = False) -> dict[str, Any]:
    """Seed demo brands, types and items.

    Args:
        session: Async session bound to the target store.
        clear_existing: Delete all catalog rows before seeding.

    Returns:
        Seeding result with counts.
    """
    if clear_existing:
        await session.execute(delete(CatalogItem))
        await session.execute(delete(CatalogBrand))
        await session.execute(delete(CatalogType))
        await session.commit()

    existing = (await session.execute(select(func.count()).select_from(CatalogItem))).scalar_one()
    if existing:
        logger.info("Catalog already seeded", items=existing)
        return {"brands_created": 0, "types_created": 0, "items_created": 0, "skipped": True}

    brands = {name: CatalogBrand(brand=name) for name in BRANDS}
    types = {name: CatalogType(type=name) for name in TYPES}
    session.add_all([*brands.values(), *types.values()])
    await session.commit()

    service = build_catalog_service(session)
    created = 0
    for name, description, price, stock, brand, type_name, picture in ITEMS:
        item_id = await service.add(
            name=name,
            description=description,
            price=Decimal(price),
            available_stock=stock,
            catalog_brand_id=brands[brand].id,
            catalog_type_id=types[type_name].id,
            picture_file_name=picture,
        )
        if item_id is not None:
            created += 1

    logger.info(
        "Catalog seeded",
        brands=len(brands),
        types=len(types),
        items=created,
    )
    return {
        "brands_created": len(brands),
        "types_created": len(types),
        "items_created": created,
        "skipped": False,
    }
