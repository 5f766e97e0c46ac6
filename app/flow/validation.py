"""
app/flow/validation.py

Purpose: Form-level validation rules

- Checks rules in priority order and stops at the first failure
- Provider-only rules run only for provider users
- Never mutates the form
"""

from dataclasses import dataclass
from typing import Optional

from app.core.exceptions import ValidationError
from app.flow.form import OnboardingFormState, OnboardingSubmission
from app.models.user import UserRole
from utils.constants import (
    MESSAGE_INVALID_CATEGORY,
    MESSAGE_INVALID_EXPERIENCE,
    MESSAGE_INVALID_HOURLY_RATE,
    MESSAGE_INVALID_PHONE,
    MESSAGE_MISSING_FIELDS,
    MESSAGE_MISSING_PROVIDER_DETAILS,
)
from utils.validation_utils import (
    is_blank,
    parse_experience_years,
    parse_hourly_rate,
    sanitize_name,
    validate_phone_number,
)


@dataclass(frozen=True)
class FieldViolation:
    """The first rule the form breaks."""
    field: str
    message: str


def find_violation(form: OnboardingFormState, role: UserRole) -> Optional[FieldViolation]:
    """
    Classifies the form as valid (None) or returns the first failing rule.

    Order:
        1. full name / phone present
        2. phone format
        3. provider details present (providers only)
        4. category belongs to the loaded set
        5. experience in range
        6. hourly rate in range
    """
    if is_blank(form.full_name):
        return FieldViolation("full_name", MESSAGE_MISSING_FIELDS)
    if is_blank(form.phone):
        return FieldViolation("phone", MESSAGE_MISSING_FIELDS)

    if not validate_phone_number(form.phone):
        return FieldViolation("phone", MESSAGE_INVALID_PHONE)

    if role is not UserRole.PROVIDER:
        return None

    if is_blank(form.selected_category_id):
        return FieldViolation("category_id", MESSAGE_MISSING_PROVIDER_DETAILS)
    if is_blank(form.experience_years):
        return FieldViolation("experience_years", MESSAGE_MISSING_PROVIDER_DETAILS)
    if is_blank(form.hourly_rate):
        return FieldViolation("hourly_rate", MESSAGE_MISSING_PROVIDER_DETAILS)

    if not form.has_category(form.selected_category_id):
        return FieldViolation("category_id", MESSAGE_INVALID_CATEGORY)

    if parse_experience_years(form.experience_years) is None:
        return FieldViolation("experience_years", MESSAGE_INVALID_EXPERIENCE)

    if parse_hourly_rate(form.hourly_rate) is None:
        return FieldViolation("hourly_rate", MESSAGE_INVALID_HOURLY_RATE)

    return None


def build_submission(form: OnboardingFormState, role: UserRole) -> OnboardingSubmission:
    """
    Turns a valid form into parsed values for the commit protocol.

    Raises:
        ValidationError: If any rule fails
    """
    violation = find_violation(form, role)
    if violation is not None:
        raise ValidationError(violation.message, field=violation.field)

    full_name = sanitize_name(form.full_name)

    if role is not UserRole.PROVIDER:
        return OnboardingSubmission(full_name=full_name, phone_number=form.phone)

    return OnboardingSubmission(
        full_name=full_name,
        phone_number=form.phone,
        category_id=form.selected_category_id,
        experience_years=parse_experience_years(form.experience_years),
        hourly_rate=parse_hourly_rate(form.hourly_rate),
    )
