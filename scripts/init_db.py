"""
Database initialization script

Creates indexes and seeds the default service categories.
Safe to run repeatedly:
    python scripts/init_db.py
"""

import asyncio
import sys
from pathlib import Path
from dotenv import load_dotenv

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

# Load environment variables
load_dotenv()

from pymongo import UpdateOne

from app.core.logging import setup_logging, get_logger
from app.db.indexes import create_indexes
from app.db.mongo import (
    close_mongo_connection,
    connect_to_mongo,
    get_service_categories_collection,
)
from utils.constants import DEFAULT_SERVICE_CATEGORIES

setup_logging()
logger = get_logger("scripts.init_db")


async def seed_categories():
    """Upserts the default category list (existing names are refreshed)."""
    categories = get_service_categories_collection()

    operations = [
        UpdateOne({"_id": category_id}, {"$set": {"name": name}}, upsert=True)
        for category_id, name in DEFAULT_SERVICE_CATEGORIES
    ]
    result = await categories.bulk_write(operations, ordered=False)

    logger.info(
        f"  ✅ Categories seeded: {result.upserted_count} inserted, "
        f"{result.modified_count} updated"
    )


async def main():
    await connect_to_mongo()
    try:
        await create_indexes()
        await seed_categories()
        logger.info("🎉 Database ready")
    finally:
        await close_mongo_connection()


if __name__ == "__main__":
    asyncio.run(main())
