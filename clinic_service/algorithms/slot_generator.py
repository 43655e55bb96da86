"""
Slot Generation Algorithm

Computes free appointment start times for one staff member on one date from
their weekly working-hour windows and the day's existing bookings.

For every available window of the date's weekday, candidate starts are
walked from the window start in fixed steps while the whole service still
fits before the window end. A candidate is kept only if it does not overlap
any booking (half-open intervals, see overlap.py).

Pure and deterministic: no I/O, no clock, no shared state.
"""

import logging
import re
from datetime import date, datetime
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Union

from pydantic import ValidationError as SchemaValidationError

from clinic_service.algorithms.overlap import overlaps_any
from clinic_service.constants import (
    DATE_FORMAT,
    MINUTES_PER_DAY,
    SLOT_GRANULARITY_MINUTES,
    WEEKDAY_NAMES,
)
from clinic_service.core.errors import ValidationError
from clinic_service.schemas.scheduling import Booking, CandidateSlot, TimeWindow

logger = logging.getLogger(__name__)

_TIME_PATTERN = re.compile(r"^(\d{1,2}):(\d{2})$")


# ============================================================================
# Time Helpers
# ============================================================================


def parse_time_to_minutes(value: str) -> int:
    """
    Parse a 24-hour "HH:MM" string into minutes from midnight.

    "24:00" is accepted as the end of the day.

    Raises:
        ValidationError: If the string is not a valid time
    """
    if not isinstance(value, str):
        raise ValidationError(
            f"Time must be an 'HH:MM' string, got {type(value).__name__}",
            details={"value": repr(value)}
        )

    match = _TIME_PATTERN.match(value.strip())
    if not match:
        raise ValidationError(
            f"Invalid time '{value}': expected HH:MM",
            details={"value": value}
        )

    hours, minutes = int(match.group(1)), int(match.group(2))
    total = hours * 60 + minutes
    if minutes > 59 or total > MINUTES_PER_DAY:
        raise ValidationError(
            f"Invalid time '{value}': out of range",
            details={"value": value}
        )

    return total


def format_minutes(total_minutes: int) -> str:
    """
    Format minutes from midnight as "HH:MM".

    Example:
        >>> format_minutes(570)
        '09:30'
    """
    hours, minutes = divmod(total_minutes, 60)
    return f"{hours:02d}:{minutes:02d}"


def weekday_name(value: Union[date, str]) -> str:
    """
    Lower-case English weekday name for a date.

    Uses a fixed table indexed by date.weekday(), so the result never
    depends on the process locale.

    Raises:
        ValidationError: If a string date is not YYYY-MM-DD
    """
    return WEEKDAY_NAMES[_parse_date(value).weekday()]


def _parse_date(value: Union[date, str]) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return datetime.strptime(str(value).strip(), DATE_FORMAT).date()
    except ValueError:
        raise ValidationError(
            f"Invalid date '{value}': expected YYYY-MM-DD",
            details={"value": str(value)}
        )


# ============================================================================
# Input Coercion
# ============================================================================


def _coerce_windows(windows: Iterable[Any]) -> List[TimeWindow]:
    result = []
    for window in windows or []:
        if isinstance(window, TimeWindow):
            result.append(window)
            continue
        try:
            result.append(TimeWindow.model_validate(window))
        except SchemaValidationError as e:
            raise ValidationError(
                "Invalid availability window",
                details={"window": repr(window), "errors": str(e)}
            )
    return result


def _coerce_bookings(bookings: Optional[Iterable[Any]]) -> List[Booking]:
    result = []
    for booking in bookings or []:
        if isinstance(booking, Booking):
            result.append(booking)
            continue
        try:
            result.append(Booking.model_validate(booking))
        except SchemaValidationError as e:
            raise ValidationError(
                "Invalid booking",
                details={"booking": repr(booking), "errors": str(e)}
            )
    return result


def _windows_for_day(
    availability: Optional[Mapping[str, Sequence[Any]]],
    day: str
) -> List[TimeWindow]:
    if not availability:
        return []
    for key, windows in availability.items():
        if str(key).strip().lower() == day:
            return _coerce_windows(windows)
    return []


def _window_bounds(window: TimeWindow) -> Dict[str, int]:
    start = parse_time_to_minutes(window.start)
    end = parse_time_to_minutes(window.end)
    if start >= end:
        raise ValidationError(
            f"Invalid availability window {window.start}-{window.end}: start must be before end",
            details={"start": window.start, "end": window.end}
        )
    return {"start": start, "end": end}


def _check_int(value: Any, field: str) -> int:
    # bool is an int subclass but never a meaningful duration
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(
            f"{field} must be an integer number of minutes",
            details={"field": field, "value": repr(value)}
        )
    return value


# ============================================================================
# Slot Generation
# ============================================================================


def candidate_slots(
    availability: Optional[Mapping[str, Sequence[Any]]],
    existing_bookings: Optional[Iterable[Any]],
    service_duration_minutes: int,
    date: Union[date, str],
    step_minutes: int = SLOT_GRANULARITY_MINUTES
) -> List[CandidateSlot]:
    """
    Compute free slots as typed CandidateSlot objects.

    Args:
        availability: Weekly availability keyed by weekday name
        existing_bookings: Bookings already filtered to the same staff member and date
        service_duration_minutes: Length of the service being booked
        date: Target date (YYYY-MM-DD or date)
        step_minutes: Step between candidate starts

    Returns:
        Free slots in window order, ascending within each window, each start
        time appearing once.

    Raises:
        ValidationError: On malformed times, inverted windows, a bad date, a
            non-integer duration or a non-positive step
    """
    duration = _check_int(service_duration_minutes, "service_duration_minutes")
    step = _check_int(step_minutes, "step_minutes")
    if step <= 0:
        raise ValidationError(
            "step_minutes must be positive",
            details={"step_minutes": step}
        )

    day = weekday_name(date)
    bookings = _coerce_bookings(existing_bookings)
    windows = [w for w in _windows_for_day(availability, day) if w.is_available]

    if not windows or duration <= 0:
        logger.debug(f"No slots for {day}: windows={len(windows)} duration={duration}")
        return []

    slots: List[CandidateSlot] = []
    seen = set()

    for window in windows:
        bounds = _window_bounds(window)
        start = bounds["start"]

        while start + duration <= bounds["end"]:
            end = start + duration
            if start not in seen and not overlaps_any(start, end, bookings):
                seen.add(start)
                slots.append(CandidateSlot(
                    start_minute=start,
                    duration_minutes=duration,
                    start=format_minutes(start),
                    end=format_minutes(end)
                ))
            start += step

    logger.debug(
        f"Generated {len(slots)} slots for {day} "
        f"({len(windows)} windows, {len(bookings)} bookings, {duration}min service)"
    )
    return slots


def generate_slots(
    availability: Optional[Mapping[str, Sequence[Any]]],
    existing_bookings: Optional[Iterable[Any]],
    service_duration_minutes: int,
    date: Union[date, str],
    step_minutes: int = SLOT_GRANULARITY_MINUTES
) -> List[str]:
    """
    Compute free appointment start times as "HH:MM" strings.

    Example:
        >>> generate_slots(
        ...     {"monday": [{"isAvailable": True, "start": "09:00", "end": "10:00"}]},
        ...     [], 30, "2026-02-02"
        ... )
        ['09:00', '09:15', '09:30']
    """
    return [
        slot.start for slot in candidate_slots(
            availability,
            existing_bookings,
            service_duration_minutes,
            date,
            step_minutes=step_minutes
        )
    ]
