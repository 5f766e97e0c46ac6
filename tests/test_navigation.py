from app.flow.navigation import (
    AuthContext,
    Destination,
    resolve_destination,
    resolve_route,
    tabs_for,
)
from app.flow.states import OnboardingPhase, get_phase_metadata, is_valid_transition
from app.models.user import UserRole


def test_provider_gets_provider_home_and_three_tabs(provider):
    route = resolve_route(AuthContext.resolved(provider))

    assert route.destination is Destination.PROVIDER_HOME
    assert [tab.title for tab in route.tabs] == ["Home", "Bookings", "Profile"]
    assert route.tabs[0].name == "provider-home"


def test_customer_gets_home_and_four_tabs(customer):
    route = resolve_route(AuthContext.resolved(customer))

    assert route.destination is Destination.HOME
    assert [tab.title for tab in route.tabs] == ["Home", "Search", "Bookings", "Profile"]


def test_unresolved_user_gets_placeholder():
    route = resolve_route(AuthContext.resolved(None))
    assert route.destination is Destination.PLACEHOLDER
    assert route.tabs == ()


def test_loading_wins_over_a_known_user(provider):
    assert resolve_destination(AuthContext(user=provider, loading=True)) is Destination.PLACEHOLDER


def test_router_follows_role_changes(customer):
    promoted = customer.model_copy(update={"role": UserRole.PROVIDER})
    assert resolve_destination(AuthContext.resolved(customer)) is Destination.HOME
    assert resolve_destination(AuthContext.resolved(promoted)) is Destination.PROVIDER_HOME


def test_destination_selectors():
    assert Destination.PROVIDER_HOME.value == "provider-home"
    assert Destination.HOME.value == "home"
    assert Destination.PLACEHOLDER.value == "unresolved-placeholder"
    assert len(tabs_for(Destination.HOME)) == 4


def test_phase_transitions():
    assert is_valid_transition(OnboardingPhase.LOADING, OnboardingPhase.EDITING)
    assert is_valid_transition(OnboardingPhase.SUBMITTING, OnboardingPhase.FAILED)
    assert is_valid_transition(OnboardingPhase.FAILED, OnboardingPhase.EDITING)
    assert not is_valid_transition(OnboardingPhase.LOADING, OnboardingPhase.SUBMITTING)
    assert not is_valid_transition(OnboardingPhase.SUCCEEDED, OnboardingPhase.EDITING)


def test_only_editing_accepts_input():
    editable = [phase for phase in OnboardingPhase if get_phase_metadata(phase).accepts_input]
    assert editable == [OnboardingPhase.EDITING]
    assert get_phase_metadata(OnboardingPhase.SUCCEEDED).is_terminal
