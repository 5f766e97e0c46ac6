"""
utils/validation_utils.py

Purpose: Input validation

- Required-field and phone number checks
- Experience and hourly rate parsing with range checks
- Input sanitization
"""

import re
from decimal import Decimal, InvalidOperation
from typing import Optional

from utils.constants import (
    MAX_EXPERIENCE_YEARS,
    MAX_HOURLY_RATE,
    MIN_EXPERIENCE_YEARS,
    MIN_HOURLY_RATE,
    PHONE_NUMBER_LENGTH,
)

PHONE_PATTERN = re.compile(rf"[0-9]{{{PHONE_NUMBER_LENGTH}}}")
INTEGER_PATTERN = re.compile(r"[+-]?[0-9]+")


def is_blank(value: Optional[str]) -> bool:
    """
    Checks whether a required text value is missing.

    Args:
        value: Raw input (may be None)

    Returns:
        True if None, empty or whitespace-only
    """
    return value is None or not value.strip()


def validate_phone_number(phone: Optional[str]) -> bool:
    """
    Validates a local phone number.

    Exactly 10 characters, every one an ASCII digit. No country code,
    spaces or separators are accepted, and nothing is stripped first.

    Args:
        phone: Phone number string

    Returns:
        True if valid
    """
    if not phone:
        return False

    return PHONE_PATTERN.fullmatch(phone) is not None


def parse_experience_years(text: Optional[str]) -> Optional[int]:
    """
    Parses years of experience.

    Args:
        text: Raw input, e.g. "5"

    Returns:
        Integer in [0, 50], or None when the text is not an integer
        or is out of range (both count as the same invalid outcome)
    """
    if is_blank(text):
        return None

    text = text.strip()
    if not INTEGER_PATTERN.fullmatch(text):
        return None

    years = int(text)
    if years < MIN_EXPERIENCE_YEARS or years > MAX_EXPERIENCE_YEARS:
        return None

    return years


def parse_hourly_rate(text: Optional[str]) -> Optional[float]:
    """
    Parses an hourly rate.

    Bounds are checked on the exact decimal value so "10000.01"
    is rejected even though it is close to the limit.

    Args:
        text: Raw input, e.g. "500" or "499.50"

    Returns:
        Rate in [0, 10000] as float, or None when unparseable,
        non-finite or out of range
    """
    if is_blank(text):
        return None

    try:
        rate = Decimal(text.strip())
    except InvalidOperation:
        return None

    if not rate.is_finite():
        return None

    if rate < MIN_HOURLY_RATE or rate > MAX_HOURLY_RATE:
        return None

    return float(rate)


def sanitize_name(text: Optional[str]) -> str:
    """
    Normalizes a person's name for storage. Length is left untouched.

    Args:
        text: Input text

    Returns:
        Name with whitespace collapsed and trimmed
    """
    if not text:
        return ""

    return " ".join(text.split())
