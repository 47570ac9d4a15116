"""Organization timezone helpers.

Bookings are stored as naive UTC datetimes. Callers send and receive wall
clock times in the organization's timezone.
"""

import logging
from datetime import datetime, timezone
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

logger = logging.getLogger(__name__)


def get_zone(tz_name: Optional[str]) -> ZoneInfo:
    """Return the zone for ``tz_name``, falling back to UTC for unknown names"""
    try:
        return ZoneInfo(tz_name or "UTC")
    except (ZoneInfoNotFoundError, ValueError):
        logger.warning(f"⚠️ Unknown timezone '{tz_name}', falling back to UTC")
        return ZoneInfo("UTC")


def utcnow() -> datetime:
    """Current time as naive UTC, the storage format"""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def parse_datetime(value: str) -> datetime:
    """Parse an ISO-8601 string (a trailing ``Z`` is accepted)"""
    try:
        return datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
    except (AttributeError, ValueError):
        raise ValueError("validation.invalidDate") from None


def to_utc(value: datetime, tz_name: Optional[str]) -> datetime:
    """
    Convert an organization-local time to naive UTC.

    Naive values are interpreted in the organization's timezone; aware values
    keep their own offset. Instants that cannot be represented both in UTC
    and in the organization's timezone raise ``ValueError``.
    """
    zone = get_zone(tz_name)
    if value.tzinfo is None:
        value = value.replace(tzinfo=zone)
    try:
        value.astimezone(zone)
        return value.astimezone(timezone.utc).replace(tzinfo=None)
    except (OverflowError, ValueError):
        raise ValueError("validation.invalidDate") from None


def to_org_time(value: Optional[datetime], tz_name: Optional[str]) -> Optional[datetime]:
    """Convert a stored naive UTC datetime to naive organization-local time"""
    if value is None:
        return None
    return value.replace(tzinfo=timezone.utc).astimezone(get_zone(tz_name)).replace(tzinfo=None)


def month_range_utc(year: int, month: int, tz_name: Optional[str]) -> tuple[datetime, datetime]:
    """Half-open UTC range covering a calendar month in the organization's timezone"""
    start = datetime(year, month, 1)
    end = datetime(year + 1, 1, 1) if month == 12 else datetime(year, month + 1, 1)
    return to_utc(start, tz_name), to_utc(end, tz_name)
