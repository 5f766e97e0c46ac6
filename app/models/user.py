"""
app/models/user.py

Purpose: User record model

- Stable external id and role
- Profile fields written during onboarding
- Phase 1 payload (ProfileUpdate)
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class UserRole(str, Enum):
    """
    Marketplace roles. Closed set: anything that is not a provider
    is routed and onboarded as a customer.
    """

    CUSTOMER = "customer"
    PROVIDER = "provider"


class User(BaseModel):
    """
    Identity record owned by the profile store.
    Onboarding only reads id/role and writes full_name/phone_number.
    """

    id: str = Field(..., min_length=1, description="Stable external identifier")
    role: UserRole = UserRole.CUSTOMER
    full_name: Optional[str] = None
    phone_number: Optional[str] = None

    @property
    def is_provider(self) -> bool:
        return self.role is UserRole.PROVIDER


class ProfileUpdate(BaseModel):
    """Fields written onto the user record by the first commit phase."""

    full_name: str
    phone_number: str
