"""
Centralized DateTime Utilities
==============================

Provides consistent datetime handling across the entire application.
All datetime operations use the timezone configured in sitecms.core.config.

Functions:
- now(): Returns timezone-aware datetime object
- now_iso(): Returns ISO 8601 string
- parse_iso(): Safely parse ISO 8601 string to datetime
- to_iso(): Convert datetime object to ISO 8601 string
- to_storage() / from_storage(): Convert datetimes written to and read from MongoDB
- at_time(): Build an aware datetime from a date and an "HH:MM" string
"""
import logging
import zoneinfo
from datetime import date, datetime, time, timezone as dt_timezone, tzinfo
from typing import Optional

from sitecms.core.config import get_settings

logger = logging.getLogger(__name__)


def app_timezone() -> tzinfo:
    """
    Get the application timezone from config.
    Returns timezone object (defaults to UTC if invalid).
    """
    tz_str = get_settings().timezone

    # Handle UTC explicitly
    if tz_str.upper() == "UTC":
        return dt_timezone.utc

    try:
        return zoneinfo.ZoneInfo(tz_str)
    except (zoneinfo.ZoneInfoNotFoundError, ValueError):
        logger.warning("Invalid timezone '%s', falling back to UTC", tz_str)
        return dt_timezone.utc


def now() -> datetime:
    """
    Get current datetime with application-configured timezone.

    Returns:
        timezone-aware datetime object
    """
    return datetime.now(app_timezone())


def today() -> date:
    """Current date in the application timezone."""
    return now().date()


def now_iso() -> str:
    """
    Get current datetime as ISO 8601 string with application-configured timezone.

    Returns:
        ISO 8601 formatted string (e.g., "2025-12-24T10:30:00+01:00" or "2025-12-24T10:30:00Z")
    """
    return to_iso(now())


def parse_iso(dt_str: Optional[str]) -> Optional[datetime]:
    """
    Parse ISO 8601 string to datetime object.
    Handles both timezone-aware and naive strings.
    If string is naive, assumes application timezone.

    Args:
        dt_str: ISO 8601 string (e.g., "2025-12-24T10:30:00Z" or "2025-12-24T10:30:00+05:30")

    Returns:
        timezone-aware datetime object, or None if parsing fails
    """
    if not dt_str:
        return None

    try:
        # Replace 'Z' with '+00:00' for parsing
        normalized = dt_str.replace("Z", "+00:00")
        dt = datetime.fromisoformat(normalized)
    except (TypeError, ValueError):
        return None

    # If timezone-naive, assume application timezone
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=app_timezone())
    return dt


def to_iso(dt: Optional[datetime]) -> Optional[str]:
    """
    Convert datetime object to ISO 8601 string.
    If datetime is naive, assumes application timezone.

    Args:
        dt: datetime object (timezone-aware or naive)

    Returns:
        ISO 8601 formatted string, or None if dt is None
    """
    if dt is None:
        return None

    # If naive, assume application timezone
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=app_timezone())

    # Format with timezone offset, or 'Z' if UTC
    if dt.tzinfo == dt_timezone.utc:
        return dt.replace(microsecond=0).isoformat().replace("+00:00", "Z")
    return dt.replace(microsecond=0).isoformat()


def from_storage(dt: Optional[datetime]) -> Optional[datetime]:
    """
    Normalize a datetime read from MongoDB.

    pymongo returns naive UTC datetimes unless the client is tz-aware; the
    result is converted to the application timezone.
    """
    if dt is None:
        return None
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=dt_timezone.utc)
    return dt.astimezone(app_timezone())


def to_storage(dt: Optional[datetime]) -> Optional[datetime]:
    """
    Convert a datetime for storage in MongoDB.

    Stored and queried datetimes are naive UTC, which is what BSON keeps.
    """
    if dt is None:
        return None
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=app_timezone())
    return dt.astimezone(dt_timezone.utc).replace(tzinfo=None)


def at_time(day: date, hhmm: str) -> datetime:
    """
    Build an aware datetime for ``day`` at ``hhmm`` in the application timezone.

    Args:
        day: Calendar date
        hhmm: Time of day as "HH:MM"
    """
    hours, minutes = (int(part) for part in hhmm.split(":"))
    return datetime.combine(day, time(hours, minutes), tzinfo=app_timezone())


def local(dt: datetime) -> datetime:
    """Express an aware datetime in the application timezone."""
    if dt.tzinfo is None:
        return dt.replace(tzinfo=app_timezone())
    return dt.astimezone(app_timezone())
