"""Shared fixtures: in-memory collaborators for the onboarding flow."""

import asyncio
import os
from typing import List, Optional

import pytest

# Keep tests off any real database and out of production mode
os.environ.setdefault("ENVIRONMENT", "development")
os.environ.setdefault("MONGODB_DB_NAME", "quickserve_test")

from app.core.exceptions import ProviderAlreadyExistsError
from app.models.service_category import ServiceCategory
from app.models.service_provider import ServiceProviderProfile
from app.models.user import ProfileUpdate, User, UserRole


class FakeProfileStore:
    def __init__(self, user: Optional[User], calls: list, error: Optional[Exception] = None):
        self.user = user
        self.calls = calls
        self.error = error
        self.updates: List[ProfileUpdate] = []
        self.gate: Optional[asyncio.Event] = None

    async def resolve_current_user(self) -> Optional[User]:
        return self.user

    async def update_profile(self, user_id: str, update: ProfileUpdate) -> None:
        self.calls.append("update_profile")
        if self.gate is not None:
            await self.gate.wait()
        if self.error is not None:
            raise self.error
        self.updates.append(update)
        if self.user is not None and self.user.id == user_id:
            self.user = self.user.model_copy(
                update={"full_name": update.full_name, "phone_number": update.phone_number}
            )


class FakeProviderStore:
    def __init__(self, calls: list):
        self.calls = calls
        self.records = {}
        self.errors: List[Exception] = []

    async def create_service_provider(self, record: ServiceProviderProfile) -> None:
        self.calls.append("create_service_provider")
        if self.errors:
            raise self.errors.pop(0)
        if record.id in self.records:
            raise ProviderAlreadyExistsError(record.id)
        self.records[record.id] = record


class FakeCategoryDirectory:
    def __init__(self, categories: List[ServiceCategory], error: Optional[Exception] = None):
        self.categories = categories
        self.error = error
        self.fetches = 0

    async def list_service_categories(self) -> List[ServiceCategory]:
        self.fetches += 1
        if self.error is not None:
            raise self.error
        return list(self.categories)


class RecordingNavigator:
    def __init__(self):
        self.routes = []

    def navigate(self, route) -> None:
        self.routes.append(route)


@pytest.fixture
def categories():
    return [
        ServiceCategory(id="cat-plumbing", name="Plumbing"),
        ServiceCategory(id="cat-electrical", name="Electrical"),
        ServiceCategory(id="cat-cleaning", name="Cleaning"),
    ]


@pytest.fixture
def customer():
    return User(id="user-customer-1", role=UserRole.CUSTOMER)


@pytest.fixture
def provider():
    return User(id="user-provider-1", role=UserRole.PROVIDER)


@pytest.fixture
def calls():
    """Ordered log of store calls shared by the fakes."""
    return []


@pytest.fixture
def provider_store(calls):
    return FakeProviderStore(calls)


@pytest.fixture
def directory(categories):
    return FakeCategoryDirectory(categories)


@pytest.fixture
def navigator():
    return RecordingNavigator()


@pytest.fixture
def make_profile_store(calls):
    def _make(user: Optional[User], error: Optional[Exception] = None) -> FakeProfileStore:
        return FakeProfileStore(user, calls, error=error)
    return _make


@pytest.fixture
def broken_directory(categories):
    return FakeCategoryDirectory(categories, error=ConnectionError("directory down"))
