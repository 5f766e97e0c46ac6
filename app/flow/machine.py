"""
app/flow/machine.py

Purpose: Onboarding form state machine

- Loads category reference data once (LOADING -> EDITING)
- Accepts field edits only while EDITING
- Validates and submits (EDITING -> SUBMITTING -> SUCCEEDED | FAILED -> EDITING)
- Ignores submit while a submission is already in flight
- Hands the resolved route to the navigator on success
"""

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Tuple

from app.core.exceptions import CommitError, FetchError, InvalidTransitionError
from app.core.logging import get_logger, LogContext
from app.flow.commit import ProfileCommitProtocol
from app.flow.form import OnboardingFormState
from app.flow.navigation import AuthContext, Route, resolve_route
from app.flow.states import OnboardingPhase, get_phase_metadata, is_valid_transition
from app.flow.validation import build_submission, find_violation
from app.models.service_provider import ServiceProviderProfile
from app.models.user import User
from app.services.contracts import CategoryDirectory, Navigator
from utils.constants import MESSAGE_CATEGORY_FETCH_FAILED

logger = get_logger(__name__)


class SubmitStatus(str, Enum):
    IGNORED = "ignored"
    INVALID = "invalid"
    FAILED = "failed"
    SUCCEEDED = "succeeded"


@dataclass(frozen=True)
class SubmitOutcome:
    status: SubmitStatus
    message: Optional[str] = None
    field: Optional[str] = None
    commit_phase: Optional[int] = None
    route: Optional[Route] = None
    provider_profile: Optional[ServiceProviderProfile] = None
    provider_already_existed: bool = False


class OnboardingStateMachine:
    """
    Owns the onboarding form for the lifetime of one screen.

    Single-threaded and cooperative: the only suspension points are the
    category fetch and the commit. The phase is flipped to SUBMITTING before
    the commit is awaited, so a second submit() issued meanwhile is ignored.
    """

    def __init__(
        self,
        user: User,
        category_directory: CategoryDirectory,
        commit_protocol: ProfileCommitProtocol,
        navigator: Optional[Navigator] = None,
    ):
        self.user = user
        self.category_directory = category_directory
        self.commit_protocol = commit_protocol
        self.navigator = navigator

        self.form = OnboardingFormState()
        self.phase = OnboardingPhase.LOADING
        self.last_error: Optional[str] = None
        self.fetch_error: Optional[FetchError] = None
        self.history: List[Tuple[OnboardingPhase, OnboardingPhase]] = []

    @property
    def is_editable(self) -> bool:
        return get_phase_metadata(self.phase).accepts_input

    @property
    def is_provider(self) -> bool:
        return self.user.is_provider

    def _transition_to(self, new_phase: OnboardingPhase) -> None:
        if not is_valid_transition(self.phase, new_phase):
            raise InvalidTransitionError(self.phase.value, new_phase.value)

        logger.debug(f"Phase: {self.phase.value} -> {new_phase.value}")
        self.history.append((self.phase, new_phase))
        self.phase = new_phase

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    async def load(self) -> None:
        """
        Fetches categories once. A failed fetch is not fatal: the form opens
        with no categories, which still works for customers.
        """
        if self.phase is not OnboardingPhase.LOADING:
            return

        with LogContext(user_id=self.user.id, phase=self.phase.value):
            try:
                categories = await self.category_directory.list_service_categories()
                self.form.categories = tuple(categories)
                logger.info(f"Loaded {len(self.form.categories)} service categories")
            except Exception as e:
                self.fetch_error = FetchError(
                    MESSAGE_CATEGORY_FETCH_FAILED,
                    details={"reason": str(e)}
                )
                self.form.categories = ()
                logger.error(f"Error loading categories: {e}", exc_info=True)

        self._transition_to(OnboardingPhase.EDITING)

    # ------------------------------------------------------------------
    # Editing
    # ------------------------------------------------------------------

    def _edit(self, field_name: str, value) -> bool:
        if not self.is_editable:
            logger.debug(f"Ignoring edit of {field_name} while {self.phase.value}")
            return False
        setattr(self.form, field_name, value)
        return True

    def set_full_name(self, value: str) -> bool:
        return self._edit("full_name", value)

    def set_phone(self, value: str) -> bool:
        return self._edit("phone", value)

    def select_category(self, category_id: Optional[str]) -> bool:
        return self._edit("selected_category_id", category_id)

    def set_experience_years(self, value: str) -> bool:
        return self._edit("experience_years", value)

    def set_hourly_rate(self, value: str) -> bool:
        return self._edit("hourly_rate", value)

    # ------------------------------------------------------------------
    # Submitting
    # ------------------------------------------------------------------

    async def submit(self) -> SubmitOutcome:
        """
        Validates the form and, if it passes, commits it.

        Returns:
            SubmitOutcome; never raises for validation or commit failures
        """
        if self.phase is not OnboardingPhase.EDITING:
            logger.info(f"Submit ignored while {self.phase.value}")
            return SubmitOutcome(status=SubmitStatus.IGNORED)

        with LogContext(user_id=self.user.id, role=self.user.role.value):
            violation = find_violation(self.form, self.user.role)
            if violation is not None:
                self.last_error = violation.message
                logger.info(f"Validation failed on {violation.field}: {violation.message}")
                return SubmitOutcome(
                    status=SubmitStatus.INVALID,
                    message=violation.message,
                    field=violation.field,
                )

            submission = build_submission(self.form, self.user.role)
            self._transition_to(OnboardingPhase.SUBMITTING)

            try:
                receipt = await self.commit_protocol.commit(self.user, submission)
            except CommitError as e:
                self._transition_to(OnboardingPhase.FAILED)
                self.last_error = e.message
                self._transition_to(OnboardingPhase.EDITING)
                logger.warning(f"Onboarding commit failed in phase {e.phase}: {e.message}")
                return SubmitOutcome(
                    status=SubmitStatus.FAILED,
                    message=e.message,
                    commit_phase=e.phase,
                )

            self._transition_to(OnboardingPhase.SUCCEEDED)
            self.last_error = None

            route = resolve_route(AuthContext.resolved(self.user))
            logger.info(f"Onboarding complete, navigating to {route.destination.value}")
            if self.navigator is not None:
                self.navigator.navigate(route)

            return SubmitOutcome(
                status=SubmitStatus.SUCCEEDED,
                route=route,
                provider_profile=receipt.provider_profile,
                provider_already_existed=receipt.provider_already_existed,
            )
