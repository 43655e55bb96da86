"""
Interval Overlap Check

Half-open interval intersection used by slot generation and booking
conflict checks. All values are integer minutes from midnight.

Two intervals [a_start, a_end) and [b_start, b_end) overlap when
a_start < b_end and a_end > b_start. Touching intervals (one ends exactly
where the other starts) do not overlap, so back-to-back appointments are
allowed.
"""

from typing import Iterable, List

from clinic_service.schemas.scheduling import Booking


def overlaps(a_start: int, a_end: int, b_start: int, b_end: int) -> bool:
    """
    Check whether two half-open intervals intersect.

    Example:
        >>> overlaps(9 * 60, 10 * 60, 10 * 60, 11 * 60)
        False
        >>> overlaps(9 * 60, 10 * 60, 9 * 60 + 30, 10 * 60 + 30)
        True
    """
    return a_start < b_end and a_end > b_start


def conflicting_bookings(start: int, end: int, bookings: Iterable[Booking]) -> List[Booking]:
    """Bookings whose interval intersects [start, end), in input order."""
    return [
        booking for booking in bookings
        if overlaps(start, end, booking.start_minute, booking.end_minute)
    ]


def overlaps_any(start: int, end: int, bookings: Iterable[Booking]) -> bool:
    """True if [start, end) intersects at least one booking."""
    return any(
        overlaps(start, end, booking.start_minute, booking.end_minute)
        for booking in bookings
    )
