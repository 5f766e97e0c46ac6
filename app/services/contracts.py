"""
app/services/contracts.py

Purpose: Collaborator contracts used by the onboarding flow

- Profile store (current user + profile update)
- Category directory (reference data)
- Provider store (create-once provider records)
- Navigator (receives the route after a successful onboarding)

The flow only depends on these shapes; Mongo-backed implementations live
next to this module and tests plug in in-memory fakes.
"""

from typing import List, Optional, Protocol, TYPE_CHECKING

from app.models.service_category import ServiceCategory
from app.models.service_provider import ServiceProviderProfile
from app.models.user import ProfileUpdate, User

if TYPE_CHECKING:
    from app.flow.navigation import Route


class ProfileStore(Protocol):
    async def resolve_current_user(self) -> Optional[User]:
        """Returns the signed-in user, or None while unresolved."""
        ...

    async def update_profile(self, user_id: str, update: ProfileUpdate) -> None:
        """Overwrites name/phone. Repeating an identical write must succeed."""
        ...


class CategoryDirectory(Protocol):
    async def list_service_categories(self) -> List[ServiceCategory]:
        ...


class ProviderStore(Protocol):
    async def create_service_provider(self, record: ServiceProviderProfile) -> None:
        """
        Persists a new provider record.

        Raises:
            ProviderAlreadyExistsError: If a record already exists for record.id
        """
        ...


class Navigator(Protocol):
    def navigate(self, route: "Route") -> None:
        ...
