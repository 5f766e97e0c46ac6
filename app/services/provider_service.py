"""
app/services/provider_service.py

Purpose: Service provider records

- Creates the provider record for a provider-role user
- Refuses to overwrite an existing record
"""

from datetime import datetime
from pymongo.errors import DuplicateKeyError

from app.core.exceptions import ProviderAlreadyExistsError
from app.core.logging import get_logger, LogContext
from app.db.mongo import get_service_providers_collection
from app.models.service_provider import ServiceProviderProfile

logger = get_logger(__name__)


class MongoProviderStore:
    async def create_service_provider(self, record: ServiceProviderProfile) -> None:
        """
        Inserts the record keyed by the user id.

        Raises:
            ProviderAlreadyExistsError: If a record with the same id exists
        """
        with LogContext(user_id=record.id):
            providers = get_service_providers_collection()

            document = record.to_document()
            document["created_at"] = datetime.utcnow()

            try:
                await providers.insert_one(document)
            except DuplicateKeyError as e:
                logger.warning("Provider record already exists")
                raise ProviderAlreadyExistsError(record.id) from e

            logger.info(
                "Provider record inserted",
                extra={"category_id": record.category_id}
            )
