"""
app/flow/navigation.py

Purpose: Role-based navigation

- Picks the home surface for the resolved user
- Picks the tab set that goes with it
- Stateless: re-evaluated every time the resolved role changes
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

from app.models.user import User, UserRole
from utils.constants import CUSTOMER_TABS, PROVIDER_TABS


class Destination(str, Enum):
    PLACEHOLDER = "unresolved-placeholder"
    PROVIDER_HOME = "provider-home"
    HOME = "home"


@dataclass(frozen=True)
class TabSpec:
    name: str
    title: str


@dataclass(frozen=True)
class AuthContext:
    """
    Explicit auth state handed to the router.
    loading is True while the current user is still being resolved.
    """
    user: Optional[User] = None
    loading: bool = False

    @classmethod
    def resolved(cls, user: Optional[User]) -> "AuthContext":
        return cls(user=user, loading=False)


@dataclass(frozen=True)
class Route:
    destination: Destination
    tabs: Tuple[TabSpec, ...]


_TABS = {
    Destination.PLACEHOLDER: (),
    Destination.PROVIDER_HOME: tuple(TabSpec(name, title) for name, title in PROVIDER_TABS),
    Destination.HOME: tuple(TabSpec(name, title) for name, title in CUSTOMER_TABS),
}


def resolve_destination(auth: AuthContext) -> Destination:
    """
    Args:
        auth: Current auth state

    Returns:
        PLACEHOLDER while loading or without a user, PROVIDER_HOME for
        providers, HOME for every other role
    """
    if auth.loading or auth.user is None:
        return Destination.PLACEHOLDER

    if auth.user.role is UserRole.PROVIDER:
        return Destination.PROVIDER_HOME

    return Destination.HOME


def tabs_for(destination: Destination) -> Tuple[TabSpec, ...]:
    return _TABS[destination]


def resolve_route(auth: AuthContext) -> Route:
    destination = resolve_destination(auth)
    return Route(destination=destination, tabs=tabs_for(destination))
