"""
app/db/indexes.py

Purpose: Database index management

- Creates unique and performance indexes
- Ensures fast lookups and data integrity
"""

from app.db.mongo import (
    get_users_collection,
    get_service_categories_collection,
    get_service_providers_collection,
)
from app.core.logging import get_logger

logger = get_logger(__name__)


async def create_indexes():
    """
    Creates all necessary database indexes.
    This function is idempotent - safe to run multiple times.
    """
    try:
        users = get_users_collection()
        categories = get_service_categories_collection()
        providers = get_service_providers_collection()

        logger.info("Creating database indexes...")

        # ==============================================
        # USERS COLLECTION INDEXES
        # ==============================================

        await users.create_index("user_id", unique=True, name="user_id_unique")
        logger.debug("Created unique index on users.user_id")

        await users.create_index("role", name="role_idx")
        logger.debug("Created index on users.role")

        # ==============================================
        # SERVICE CATEGORIES COLLECTION INDEXES
        # ==============================================

        await categories.create_index("name", name="category_name_idx")
        logger.debug("Created index on service_categories.name")

        # ==============================================
        # SERVICE PROVIDERS COLLECTION INDEXES
        # ==============================================

        # _id is the user id, so one provider record per user is already enforced
        await providers.create_index("category_id", name="provider_category_idx")
        logger.debug("Created index on service_providers.category_id")

        await providers.create_index("verification_status", name="provider_verification_idx")
        logger.debug("Created index on service_providers.verification_status")

        logger.info("✅ All database indexes created successfully")

    except Exception as e:
        logger.error(f"Failed to create indexes: {str(e)}", exc_info=True)
        raise
