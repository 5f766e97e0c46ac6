"""
app/api/onboarding.py

Purpose: Onboarding endpoints

- Lists service categories for the form
- Runs one onboarding submission through the state machine
- Returns the caller's navigation route (destination + tabs)
"""

from fastapi import APIRouter, Depends, Header
from typing import List, Optional

from app.core.exceptions import AuthenticationError, CommitError, FetchError, ValidationError
from app.core.logging import get_logger
from app.flow.commit import ProfileCommitProtocol
from app.flow.machine import OnboardingStateMachine, SubmitStatus
from app.flow.navigation import AuthContext, resolve_route
from app.schemas.onboarding import (
    CategoryResponse,
    OnboardingRequest,
    OnboardingResponse,
    RouteResponse,
)
from app.services.category_service import MongoCategoryDirectory
from app.services.contracts import CategoryDirectory, ProfileStore, ProviderStore
from app.services.provider_service import MongoProviderStore
from app.services.user_service import MongoProfileStore
from utils.constants import MESSAGE_CATEGORY_FETCH_FAILED, MESSAGE_USER_UNRESOLVED

logger = get_logger(__name__)
router = APIRouter()


def get_profile_store(x_user_id: Optional[str] = Header(None)) -> ProfileStore:
    return MongoProfileStore(x_user_id)


def get_category_directory() -> CategoryDirectory:
    return MongoCategoryDirectory()


def get_provider_store() -> ProviderStore:
    return MongoProviderStore()


@router.get("/categories", response_model=List[CategoryResponse])
async def list_categories(
    directory: CategoryDirectory = Depends(get_category_directory),
):
    try:
        categories = await directory.list_service_categories()
    except Exception as e:
        logger.error(f"Error loading categories: {e}", exc_info=True)
        raise FetchError(MESSAGE_CATEGORY_FETCH_FAILED, details={"reason": str(e)}) from e

    return [CategoryResponse(id=c.id, name=c.name) for c in categories]


@router.get("/navigation", response_model=RouteResponse)
async def navigation(profile_store: ProfileStore = Depends(get_profile_store)):
    """
    Route for the caller. An unknown caller gets the placeholder
    destination rather than an error.
    """
    user = await profile_store.resolve_current_user()
    return RouteResponse.from_route(resolve_route(AuthContext.resolved(user)))


@router.post("/onboarding", response_model=OnboardingResponse)
async def submit_onboarding(
    request: OnboardingRequest,
    profile_store: ProfileStore = Depends(get_profile_store),
    directory: CategoryDirectory = Depends(get_category_directory),
    provider_store: ProviderStore = Depends(get_provider_store),
):
    """
    Drives one onboarding screen: load categories, fill the form, submit.

    Responses:
        200: profile saved, route to navigate to
        401: caller could not be resolved
        422: a validation rule failed (nothing was written)
        502: a commit phase failed (details.phase says which)
    """
    user = await profile_store.resolve_current_user()
    if user is None:
        raise AuthenticationError(MESSAGE_USER_UNRESOLVED)

    machine = OnboardingStateMachine(
        user=user,
        category_directory=directory,
        commit_protocol=ProfileCommitProtocol(profile_store, provider_store),
    )
    await machine.load()

    machine.set_full_name(request.full_name)
    machine.set_phone(request.phone)
    if user.is_provider:
        machine.select_category(request.category_id)
        machine.set_experience_years(request.experience_years)
        machine.set_hourly_rate(request.hourly_rate)

    outcome = await machine.submit()

    if outcome.status is SubmitStatus.INVALID:
        raise ValidationError(outcome.message, field=outcome.field)

    if outcome.status is SubmitStatus.FAILED:
        raise CommitError(outcome.message, phase=outcome.commit_phase)

    logger.info(f"Onboarding finished for {user.id}: {outcome.route.destination.value}")

    return OnboardingResponse(
        route=RouteResponse.from_route(outcome.route),
        provider_profile=outcome.provider_profile,
        provider_already_existed=outcome.provider_already_existed,
    )
