"""
app/models/service_provider.py

Purpose: Service provider profile model

- One record per provider-role user, keyed by the user's id
- Created once during onboarding with verification_status=pending
- Optional fields are filled in later by other workflows
"""

from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from utils.constants import (
    DEFAULT_SERVICE_RADIUS_KM,
    MAX_EXPERIENCE_YEARS,
    MAX_HOURLY_RATE,
    MIN_EXPERIENCE_YEARS,
    MIN_HOURLY_RATE,
)


class VerificationStatus(str, Enum):
    """Provider trust state. Onboarding only ever writes PENDING."""

    PENDING = "pending"
    VERIFIED = "verified"
    REJECTED = "rejected"


class ServiceProviderProfile(BaseModel):
    id: str = Field(..., min_length=1, description="Same as the owning user's id")
    category_id: str = Field(..., min_length=1)
    experience_years: int = Field(..., ge=MIN_EXPERIENCE_YEARS, le=MAX_EXPERIENCE_YEARS)
    hourly_rate: float = Field(..., ge=MIN_HOURLY_RATE, le=MAX_HOURLY_RATE)
    verification_status: VerificationStatus = VerificationStatus.PENDING

    # Not collected at onboarding
    service_description: Optional[str] = None
    service_area_radius_km: int = DEFAULT_SERVICE_RADIUS_KM
    verification_documents: Optional[List[str]] = None
    id_proof_url: Optional[str] = None
    address_proof_url: Optional[str] = None
    certifications: Optional[List[str]] = None
    response_time_minutes: Optional[int] = None

    @classmethod
    def pending(
        cls,
        user_id: str,
        category_id: str,
        experience_years: int,
        hourly_rate: float,
        service_area_radius_km: int = DEFAULT_SERVICE_RADIUS_KM,
    ) -> "ServiceProviderProfile":
        """Builds the record written when a provider finishes onboarding."""
        return cls(
            id=user_id,
            category_id=category_id,
            experience_years=experience_years,
            hourly_rate=hourly_rate,
            verification_status=VerificationStatus.PENDING,
            service_area_radius_km=service_area_radius_km,
        )

    def to_document(self) -> Dict[str, Any]:
        """Mongo document keyed by the user id."""
        data = self.model_dump(mode="json")
        data["_id"] = data.pop("id")
        return data
