#!/usr/bin/env python3
"""Seed product catalog script.

Creates the catalog tables from model metadata and fills them with demo
brands, types and items.

Usage:
    python scripts/seed_catalog.py
    python scripts/seed_catalog.py --clear
"""

import argparse
import asyncio

from catalog_host.catalog.seed import seed_catalog
from catalog_host.infrastructure.database import Base, async_session_factory, engine
from catalog_host.infrastructure.logging import configure_logging


async def create_tables() -> None:
    """Create database tables if they don't exist."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def main() -> None:
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Seed the product catalog with demo data",
    )
    parser.add_argument(
        "--clear",
        action="store_true",
        help="Delete existing catalog rows before seeding",
    )
    args = parser.parse_args()

    configure_logging(json_output=False)

    print("=" * 60)
    print("Catalog Seeder")
    print("=" * 60)
    print(f"Clear existing: {args.clear}")
    print()

    print("Creating database tables...")
    await create_tables()
    print("Tables ready.")
    print()

    async with async_session_factory() as session:
        result = await seed_catalog(session, clear_existing=args.clear)

    if result["skipped"]:
        print("  - Catalog already has items, nothing to do")
    else:
        print(f"  ✓ Brands: {result['brands_created']}")
        print(f"  ✓ Types: {result['types_created']}")
        print(f"  ✓ Items: {result['items_created']}")
    print()

    await engine.dispose()

    print("=" * 60)
    print("Seeding complete!")
    print("=" * 60)


if __name__ == "__main__":
    asyncio.run(main())
