"""Seed the database with the demo catalog.

Idempotent: creates missing tables, then inserts the admin user, contact
info, categories, services, payment methods and testimonials only when the
catalog is empty.

Usage:
    python scripts/db_seed.py

The script reads DATABASE_URL (and ADMIN_USERNAME / ADMIN_PASSWORD) from the environment.
"""
import asyncio
import logging
import sys
from pathlib import Path

# Ensure project root is on sys.path when run from a checkout
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from storefront.config import get_settings
from storefront.errors import StorageError
from storefront.logging_config import setup_logging
from storefront.seed import seed_demo_data
from storefront.sql_storage import SqlStorage

logger = logging.getLogger("db_seed")


async def main() -> int:
    settings = get_settings()
    setup_logging(settings.log_level)
    logger.info("DB seed starting")

    storage = SqlStorage.from_url(settings.database_url, echo=settings.sql_echo)
    try:
        await storage.init()
        seeded = await seed_demo_data(storage, settings)
    except StorageError as e:
        logger.error("DB seed failed: %s", e.message)
        return 1
    finally:
        await storage.close()

    logger.info("DB seed complete (%s)", "seeded" if seeded else "already seeded")
    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
