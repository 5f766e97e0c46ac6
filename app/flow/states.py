"""
app/flow/states.py

Purpose: Defines the onboarding screen phases

- Enum for each phase (LOADING, EDITING, SUBMITTING, SUCCEEDED, FAILED)
- Single source of truth for phase transitions
- Metadata for each phase (accepts input, terminal)
"""

from enum import Enum
from typing import Dict, List
from dataclasses import dataclass


class OnboardingPhase(str, Enum):
    """
    Phases of the onboarding form.
    FAILED is transient: the machine returns to EDITING right after it.
    """

    LOADING = "LOADING"
    EDITING = "EDITING"
    SUBMITTING = "SUBMITTING"
    SUCCEEDED = "SUCCEEDED"
    FAILED = "FAILED"


@dataclass
class PhaseMetadata:
    """
    Metadata associated with each phase.
    """
    name: OnboardingPhase
    display_name: str
    accepts_input: bool = False  # Whether the form is editable
    is_terminal: bool = False
    description: str = ""


PHASE_METADATA: Dict[OnboardingPhase, PhaseMetadata] = {
    OnboardingPhase.LOADING: PhaseMetadata(
        name=OnboardingPhase.LOADING,
        display_name="Loading",
        description="Fetching service categories"
    ),
    OnboardingPhase.EDITING: PhaseMetadata(
        name=OnboardingPhase.EDITING,
        display_name="Complete Your Profile",
        accepts_input=True,
        description="Form is interactive"
    ),
    OnboardingPhase.SUBMITTING: PhaseMetadata(
        name=OnboardingPhase.SUBMITTING,
        display_name="Saving",
        description="Commit in flight, form locked"
    ),
    OnboardingPhase.SUCCEEDED: PhaseMetadata(
        name=OnboardingPhase.SUCCEEDED,
        display_name="Done",
        is_terminal=True,
        description="Profile saved, navigating away"
    ),
    OnboardingPhase.FAILED: PhaseMetadata(
        name=OnboardingPhase.FAILED,
        display_name="Error",
        description="Commit failed, returning to the form"
    ),
}


PHASE_TRANSITIONS: Dict[OnboardingPhase, List[OnboardingPhase]] = {
    OnboardingPhase.LOADING: [
        OnboardingPhase.EDITING,  # Categories loaded, or fetch failed
    ],
    OnboardingPhase.EDITING: [
        OnboardingPhase.SUBMITTING,
    ],
    OnboardingPhase.SUBMITTING: [
        OnboardingPhase.SUCCEEDED,
        OnboardingPhase.FAILED,
    ],
    OnboardingPhase.FAILED: [
        OnboardingPhase.EDITING,  # Retry with inputs preserved
    ],
    OnboardingPhase.SUCCEEDED: [],
}


def is_valid_transition(from_phase: OnboardingPhase, to_phase: OnboardingPhase) -> bool:
    """
    Checks if a phase transition is valid.

    Args:
        from_phase: Current phase
        to_phase: Target phase

    Returns:
        True if transition is allowed, False otherwise
    """
    return to_phase in PHASE_TRANSITIONS.get(from_phase, [])


def get_phase_metadata(phase: OnboardingPhase) -> PhaseMetadata:
    return PHASE_METADATA.get(phase, PhaseMetadata(
        name=phase,
        display_name=phase.value,
        description="Unknown phase"
    ))
