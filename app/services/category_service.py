"""
app/services/category_service.py

Purpose: Service category directory

- Lists the closed set of service categories
- Read-only; categories are seeded by scripts/init_db.py
"""

from typing import List

from pymongo import ASCENDING

from app.core.logging import get_logger
from app.db.mongo import get_service_categories_collection
from app.models.service_category import ServiceCategory

logger = get_logger(__name__)


class MongoCategoryDirectory:
    async def list_service_categories(self) -> List[ServiceCategory]:
        """
        Returns:
            All categories ordered by name
        """
        collection = get_service_categories_collection()
        cursor = collection.find({}, {"name": 1}).sort("name", ASCENDING)

        categories = [
            ServiceCategory(id=str(document["_id"]), name=document["name"])
            async for document in cursor
        ]

        logger.debug(f"Fetched {len(categories)} service categories")
        return categories
