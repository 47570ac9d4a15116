"""Shared validation utilities

Validators raise ``ValueError`` whose message is an i18n message key, so
pydantic field validators and service code can share them.
"""

import re
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

PHONE_PATTERN = re.compile(r"^\+?\d+$")
SLUG_PATTERN = re.compile(r"^[a-z0-9]+(?:-[a-z0-9]+)*$")
DISPLAY_TIME_PATTERN = re.compile(r"^([01]\d|2[0-3]):([0-5]\d)$")

ALLOWED_BOOKING_INTERVALS = (15, 30)
MAX_CLIENT_NOTES_LENGTH = 100
MAX_NAME_LENGTH = 255
MAX_USERNAME_LENGTH = 150
MAX_SLUG_LENGTH = 100
MAX_PHONE_LENGTH = 50


def require_text(
    value: Optional[str], message_key: str, max_length: Optional[int] = None, too_long_key: Optional[str] = None
) -> str:
    """Strip ``value`` and reject it when empty or longer than ``max_length``"""
    if value is None or not value.strip():
        raise ValueError(message_key)

    value = value.strip()
    if max_length is not None and len(value) > max_length:
        raise ValueError(too_long_key or message_key)
    return value


def validate_phone(phone: Optional[str]) -> str:
    """
    Validate and normalize a phone number.

    Args:
        phone: Phone number string, digits with an optional leading "+"

    Returns:
        The trimmed phone number

    Raises:
        ValueError: If phone number is empty or contains anything but digits
    """
    if phone is None:
        raise ValueError("validation.phoneInvalid")

    phone = phone.strip()
    if len(phone) > MAX_PHONE_LENGTH or not PHONE_PATTERN.match(phone):
        raise ValueError("validation.phoneInvalid")

    return phone


def validate_slug(slug: Optional[str]) -> str:
    """Lowercase and validate an organization slug"""
    if slug is None or not slug.strip():
        raise ValueError("validation.organizationNameSlugRequired")

    slug = slug.strip().lower()
    if not SLUG_PATTERN.match(slug):
        raise ValueError("validation.slugInvalid")
    if len(slug) > MAX_SLUG_LENGTH:
        raise ValueError("validation.slugTooLong")

    return slug


def validate_display_time(value: Optional[str]) -> str:
    """Validate an HH:MM calendar display time on a quarter hour"""
    if value is None:
        raise ValueError("validation.displayTimeInvalid")

    value = value.strip()
    match = DISPLAY_TIME_PATTERN.match(value)
    if not match or int(match.group(2)) not in (0, 15, 30, 45):
        raise ValueError("validation.displayTimeInvalid")

    return value


def validate_booking_interval(value: int) -> int:
    if value not in ALLOWED_BOOKING_INTERVALS:
        raise ValueError("validation.bookingIntervalInvalid")
    return value


def validate_timezone(name: Optional[str]) -> str:
    """Validate an IANA timezone name"""
    if not name or not name.strip():
        raise ValueError("validation.timezoneInvalid")

    name = name.strip()
    try:
        ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError):
        raise ValueError("validation.timezoneInvalid") from None

    return name
