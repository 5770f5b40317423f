#!/usr/bin/env python3
"""
Load the bundled product catalog into the database.

Usage: python -m repufrenos.seed [--force]
"""
import argparse
import asyncio
import sys

from repufrenos.config import get_settings
from repufrenos.database import SessionLocal, init_db
from repufrenos.log import configure_logging
from repufrenos.services.catalog import load_static_catalog, seed_catalog


async def seed(force: bool) -> int:
    await init_db()
    async with SessionLocal() as db:
        return await seed_catalog(db, force=force)


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Seed the products table from the bundled catalog.")
    parser.add_argument("--force", action="store_true", help="reload even if the table already has products")
    args = parser.parse_args(argv)

    print("🌱 Seeding database...")
    print("-------------------------------")
    settings = get_settings()
    configure_logging(settings.log_level, settings.log_file)
    if not settings.database_url:
        print("❌ DATABASE_URL no se encontró. Revisa tu archivo .env.")
        return 1

    try:
        inserted = asyncio.run(seed(args.force))
    except Exception as exc:
        print("❌ Seeding failed:")
        print(exc)
        return 1

    if inserted:
        for product in load_static_catalog():
            print(f"- Inserted: {product.name}")
    else:
        print("ℹ️  Products table already up to date (use --force to reload)")
    print("-------------------------------")
    print("✅ Seeding complete.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
