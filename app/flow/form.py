"""
app/flow/form.py

Purpose: Onboarding form data

- Raw text as typed by the user (parsed only at validation time)
- Category reference snapshot loaded at mount
- Sanitized submission handed to the commit protocol
"""

from dataclasses import dataclass, field
from typing import Optional, Tuple

from app.models.service_category import ServiceCategory


@dataclass
class OnboardingFormState:
    full_name: str = ""
    phone: str = ""
    selected_category_id: Optional[str] = None
    experience_years: str = ""
    hourly_rate: str = ""
    categories: Tuple[ServiceCategory, ...] = field(default_factory=tuple)

    def has_category(self, category_id: Optional[str]) -> bool:
        """True if the id belongs to the loaded category snapshot."""
        if category_id is None:
            return False
        return any(category.id == category_id for category in self.categories)


@dataclass(frozen=True)
class OnboardingSubmission:
    """
    Values that passed validation, already parsed.
    Provider fields are None for customers.
    """
    full_name: str
    phone_number: str
    category_id: Optional[str] = None
    experience_years: Optional[int] = None
    hourly_rate: Optional[float] = None

    @property
    def has_provider_details(self) -> bool:
        return (
            self.category_id is not None
            and self.experience_years is not None
            and self.hourly_rate is not None
        )
