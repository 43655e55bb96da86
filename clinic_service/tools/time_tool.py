"""
Time Tool

Lenient date/time parsing for data coming back from the clinic data store.

Availability windows are clinic wall-clock times, so every instant read from
the store (offset strings, "Z" strings, epoch timestamps) is converted to the
clinic timezone before it is reduced to a date or a minute of the day. Naive
strings are taken to be clinic wall time already.

Functions:
- utcnow(): Current UTC time (naive)
- utcnow_iso(): Current UTC time as ISO string
- clinic_timezone(name): pytz timezone of the clinic (CLINIC_TIMEZONE)
- parse_iso_datetime(value, tz): Parse ISO datetime strings or store timestamps
- parse_iso_date(value, tz): Parse date strings to date objects
- minutes_of_day(value, tz): Minutes from midnight of a datetime
- minutes_between(a, b, tz): Minutes between two timestamps

All parse functions are safe (never raise on bad input, return None).
Strict "HH:MM" validation lives in algorithms.slot_generator.
"""

import logging
from datetime import datetime, date, timezone, tzinfo
from typing import Any, Optional

import pytz

logger = logging.getLogger(__name__)


def utcnow() -> datetime:
    """Current UTC time as a naive datetime."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def utcnow_iso() -> str:
    """
    Current UTC time as ISO 8601 string with 'Z' suffix.

    Example:
        >>> utcnow_iso().endswith('Z')
        True
    """
    return utcnow().isoformat() + "Z"


def clinic_timezone(name: Optional[str] = None) -> tzinfo:
    """
    Timezone the clinic's availability windows are expressed in.

    Raises:
        pytz.UnknownTimeZoneError: If the name is not a known zone
    """
    if name is None:
        from clinic_service.core.config import settings
        name = settings.CLINIC_TIMEZONE
    return pytz.timezone(name)


def _to_wall_time(value: datetime, tz: Optional[tzinfo]) -> datetime:
    if value.tzinfo is None:
        return value
    return value.astimezone(tz or pytz.UTC).replace(tzinfo=None)


def parse_iso_datetime(value: Any, tz: Optional[tzinfo] = None) -> Optional[datetime]:
    """
    Parse an ISO datetime string or store timestamp to naive wall time in `tz`.

    Supports:
    - "2026-02-05T09:30:00Z" (UTC)
    - "2026-02-05T09:30:00+02:00" (converted from its offset)
    - {"seconds": 1770283800, "nanoseconds": 0} (epoch seconds)
    - "2026-02-05T09:30:00" / "2026-02-05 09:30:00" (already wall time, kept)

    Args:
        value: Raw store value
        tz: Target timezone; UTC when None

    Returns:
        Naive datetime or None if parsing fails
    """
    if value is None:
        return None

    if isinstance(value, datetime):
        return _to_wall_time(value, tz)

    # Document store timestamp objects
    if isinstance(value, dict):
        seconds = value.get("seconds", value.get("_seconds"))
        if isinstance(seconds, (int, float)) and not isinstance(seconds, bool):
            return _to_wall_time(datetime.fromtimestamp(seconds, tz=timezone.utc), tz)
        return None

    value_str = str(value).strip()
    if not value_str:
        return None

    if value_str.endswith("Z"):
        value_str = value_str[:-1] + "+00:00"

    try:
        return _to_wall_time(datetime.fromisoformat(value_str), tz)
    except ValueError:
        pass

    logger.debug(f"Failed to parse datetime: {value}")
    return None


def parse_iso_date(value: Any, tz: Optional[tzinfo] = None) -> Optional[date]:
    """
    Parse a date string to a date object.

    Accepts "YYYY-MM-DD" or any value parse_iso_datetime accepts; instants
    are dated in `tz`.

    Example:
        >>> parse_iso_date("2026-02-05")
        datetime.date(2026, 2, 5)
    """
    if value is None:
        return None

    if isinstance(value, datetime) or isinstance(value, dict):
        parsed = parse_iso_datetime(value, tz)
        return parsed.date() if parsed else None

    if isinstance(value, date):
        return value

    value_str = str(value).strip()
    if not value_str:
        return None

    if len(value_str) == 10:
        try:
            return date.fromisoformat(value_str)
        except ValueError:
            pass

    parsed = parse_iso_datetime(value_str, tz)
    if parsed is not None:
        return parsed.date()

    logger.debug(f"Failed to parse date: {value}")
    return None


def minutes_of_day(value: Any, tz: Optional[tzinfo] = None) -> Optional[int]:
    """
    Minutes from midnight of a datetime value, in `tz` wall time.

    Example:
        >>> minutes_of_day("2026-02-05T09:30:00")
        570
        >>> minutes_of_day("2026-02-05T07:30:00Z", pytz.timezone("Africa/Johannesburg"))
        570
    """
    parsed = parse_iso_datetime(value, tz)
    if parsed is None:
        return None
    return parsed.hour * 60 + parsed.minute


def minutes_between(a: Any, b: Any, tz: Optional[tzinfo] = None) -> Optional[int]:
    """
    Whole minutes from a to b (negative if b is before a).

    Example:
        >>> minutes_between("2026-02-05T09:00:00Z", "2026-02-05T10:30:00Z")
        90
    """
    dt_a = parse_iso_datetime(a, tz)
    dt_b = parse_iso_datetime(b, tz)

    if dt_a is None or dt_b is None:
        return None

    return int((dt_b - dt_a).total_seconds() // 60)
