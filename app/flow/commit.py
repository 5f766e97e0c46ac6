"""
app/flow/commit.py

Purpose: Two-phase onboarding commit

- Phase 1: write full name and phone onto the user record
- Phase 2 (providers only): create the pending provider record
- Strictly sequential; Phase 2 never starts if Phase 1 fails
- No rollback: a Phase 2 failure leaves Phase 1 applied, and a retry
  runs both phases again (Phase 1 is a repeatable overwrite)
"""

from dataclasses import dataclass
from typing import Literal, Optional

from app.core.config import settings
from app.core.exceptions import CommitError, ProviderAlreadyExistsError
from app.core.logging import get_logger, LogContext
from app.flow.form import OnboardingSubmission
from app.models.service_provider import ServiceProviderProfile
from app.models.user import ProfileUpdate, User
from app.services.contracts import ProfileStore, ProviderStore
from utils.constants import MESSAGE_PROFILE_UPDATE_FAILED, MESSAGE_PROVIDER_CREATE_FAILED

logger = get_logger(__name__)

ConflictPolicy = Literal["resume", "fail"]


@dataclass(frozen=True)
class CommitReceipt:
    profile_updated: bool
    provider_profile: Optional[ServiceProviderProfile] = None
    provider_already_existed: bool = False


def _error_message(exc: Exception, fallback: str) -> str:
    message = getattr(exc, "message", None) or str(exc)
    return message or fallback


class ProfileCommitProtocol:
    """
    Persists a validated onboarding submission.

    conflict_policy decides what happens when Phase 2 finds an existing
    provider record (a retry after a create whose outcome was lost):
    "resume" counts Phase 2 as done, "fail" reports it as a Phase 2 error.
    """

    def __init__(
        self,
        profile_store: ProfileStore,
        provider_store: ProviderStore,
        conflict_policy: Optional[ConflictPolicy] = None,
        service_area_radius_km: Optional[int] = None,
    ):
        self.profile_store = profile_store
        self.provider_store = provider_store
        if conflict_policy is None:
            conflict_policy = settings.PROVIDER_CONFLICT_POLICY
        if service_area_radius_km is None:
            service_area_radius_km = settings.DEFAULT_SERVICE_RADIUS_KM
        self.conflict_policy = conflict_policy
        self.service_area_radius_km = service_area_radius_km

    async def commit(self, user: User, submission: OnboardingSubmission) -> CommitReceipt:
        """
        Runs Phase 1 then, for providers, Phase 2.

        Args:
            user: Resolved current user
            submission: Parsed values from a valid form

        Returns:
            CommitReceipt describing what was written

        Raises:
            CommitError: If either phase fails (phase attribute says which).
                A provider submission without provider details is rejected
                as a Phase 2 error before anything is written.
        """
        with LogContext(user_id=user.id, role=user.role.value):
            if user.is_provider and not submission.has_provider_details:
                logger.error("Provider submission without provider details", extra={"commit_phase": 2})
                raise CommitError(MESSAGE_PROVIDER_CREATE_FAILED, phase=2)

            await self._update_profile(user, submission)

            if not user.is_provider:
                logger.info("Customer onboarding committed")
                return CommitReceipt(profile_updated=True)

            return await self._create_provider(user, submission)

    async def _update_profile(self, user: User, submission: OnboardingSubmission) -> None:
        update = ProfileUpdate(
            full_name=submission.full_name,
            phone_number=submission.phone_number,
        )
        try:
            await self.profile_store.update_profile(user.id, update)
        except Exception as e:
            logger.error(f"Profile update failed: {e}", extra={"commit_phase": 1})
            raise CommitError(_error_message(e, MESSAGE_PROFILE_UPDATE_FAILED), phase=1) from e

        logger.info("Profile updated", extra={"commit_phase": 1})

    async def _create_provider(self, user: User, submission: OnboardingSubmission) -> CommitReceipt:
        record = ServiceProviderProfile.pending(
            user_id=user.id,
            category_id=submission.category_id,
            experience_years=submission.experience_years,
            hourly_rate=submission.hourly_rate,
            service_area_radius_km=self.service_area_radius_km,
        )

        try:
            await self.provider_store.create_service_provider(record)
        except ProviderAlreadyExistsError as e:
            if self.conflict_policy == "resume":
                logger.warning(
                    "Provider record already exists, treating as created",
                    extra={"commit_phase": 2}
                )
                # The stored record may differ from this submission
                return CommitReceipt(profile_updated=True, provider_already_existed=True)
            logger.error(f"Provider record already exists: {e.message}", extra={"commit_phase": 2})
            raise CommitError(e.message, phase=2) from e
        except Exception as e:
            # Phase 1 stays applied; the user retries both phases
            logger.error(f"Provider creation failed: {e}", extra={"commit_phase": 2})
            raise CommitError(_error_message(e, MESSAGE_PROVIDER_CREATE_FAILED), phase=2) from e

        logger.info(
            "Provider record created",
            extra={"commit_phase": 2, "category_id": record.category_id}
        )
        return CommitReceipt(profile_updated=True, provider_profile=record)
