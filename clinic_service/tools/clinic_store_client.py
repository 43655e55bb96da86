"""
Clinic Data Store HTTP Client

Async read-only interface to the clinic data store (clients, staff,
services, appointments). Uses a module-level httpx.AsyncClient singleton for
connection pooling.

Functions:
- list_clients: All client records
- get_staff_availability: Weekly availability of a staff member
- get_service_duration: Duration of a service in minutes
- list_bookings: A staff member's bookings on a date
- aclose_client: Close HTTP client (call during shutdown)

Failures are raised as AppError subclasses (NotFoundError,
ServiceUnavailableError, ...) so callers can tell "no data" from "lookup
failed". Nothing here returns an empty list on error.
"""

import os
import re
import logging
from datetime import tzinfo
from typing import Any, Dict, List, Optional, Tuple

import httpx

from clinic_service.algorithms.slot_generator import parse_time_to_minutes
from clinic_service.core.config import settings
from clinic_service.core.errors import (
    InternalError,
    ValidationError,
    NotFoundError,
    ServiceUnavailableError,
    from_http_exception,
)
from clinic_service.core.logging import get_trace_id
from clinic_service.schemas.clients import ClientRecord
from clinic_service.schemas.scheduling import Booking
from clinic_service.tools.time_tool import (
    clinic_timezone,
    minutes_between,
    minutes_of_day,
    parse_iso_date,
)

logger = logging.getLogger(__name__)

# ============================================================================
# Configuration
# ============================================================================

CLIENTS_PATH = os.getenv("STORE_CLIENTS_PATH", "/clients")
STAFF_PATH = os.getenv("STORE_STAFF_PATH", "/staff/{staff_id}")
SERVICE_PATH = os.getenv("STORE_SERVICE_PATH", "/services/{service_id}")
APPOINTMENTS_PATH = os.getenv("STORE_APPOINTMENTS_PATH", "/appointments")

CANCELLED_STATUSES = {"cancelled", "canceled"}

# Appointment document fields, first present wins
START_KEYS = ("startTime", "start_time", "start")
END_KEYS = ("endTime", "end_time", "end")
DURATION_KEYS = ("duration", "durationMinutes", "duration_minutes")

_CLOCK_TIME = re.compile(r"^\d{1,2}:\d{2}$")


# ============================================================================
# Module-level HTTP Client
# ============================================================================

_client: Optional[httpx.AsyncClient] = None


def get_client() -> httpx.AsyncClient:
    """Get or create module-level httpx.AsyncClient singleton."""
    global _client

    if _client is None or _client.is_closed:
        limits = httpx.Limits(
            max_connections=settings.STORE_CLIENT_MAX_CONNECTIONS,
            max_keepalive_connections=settings.STORE_CLIENT_MAX_KEEPALIVE
        )

        _client = httpx.AsyncClient(
            timeout=settings.STORE_CLIENT_TIMEOUT,
            limits=limits,
            follow_redirects=False
        )
        logger.info(f"Initialized clinic store httpx.AsyncClient for {settings.CLINIC_STORE_URL}")

    return _client


async def aclose_client() -> None:
    """Close module-level httpx.AsyncClient gracefully."""
    global _client

    if _client is not None and not _client.is_closed:
        await _client.aclose()
        logger.info("Closed clinic store httpx.AsyncClient")
    _client = None


# ============================================================================
# Helpers
# ============================================================================


def _build_headers(auth_header: Optional[str] = None) -> Dict[str, str]:
    """Build request headers, forwarding auth and the current trace id."""
    headers = {
        "Accept": "application/json",
    }

    if auth_header:
        headers["Authorization"] = auth_header

    trace_id = get_trace_id()
    if trace_id and trace_id != "-":
        headers["x-request-id"] = trace_id

    return headers


async def _get_json(
    path: str,
    params: Optional[Dict[str, Any]] = None,
    auth_header: Optional[str] = None,
    not_found_message: Optional[str] = None
) -> Any:
    """GET a store path and decode JSON, mapping failures to AppError."""
    url = f"{settings.CLINIC_STORE_URL}{path}"

    try:
        client = get_client()
        response = await client.get(url, params=params, headers=_build_headers(auth_header))
        response.raise_for_status()
        return response.json()

    except httpx.HTTPStatusError as e:
        status_code = e.response.status_code
        logger.warning(f"Clinic store error {status_code} for {path}")
        if status_code == 404 and not_found_message:
            raise NotFoundError(not_found_message)
        raise from_http_exception(e, default_code="store_error")
    except httpx.RequestError as e:
        logger.error(f"Clinic store request failed: {type(e).__name__}: {e}")
        raise ServiceUnavailableError(
            f"Clinic store request failed: {type(e).__name__}"
        )
    except ValueError:
        logger.error(f"Clinic store returned invalid JSON for {path}")
        raise ServiceUnavailableError("Clinic store returned an invalid response")


def _extract_items(data: Any) -> List[Any]:
    """Accept {"data": [...]}, {"items": [...]} or a bare list."""
    if isinstance(data, list):
        return data
    if isinstance(data, dict):
        items = data.get("data") if "data" in data else data.get("items")
        if isinstance(items, list):
            return items
    return []


def _extract_document(data: Any) -> Dict[str, Any]:
    """Accept {"data": {...}} or a bare document."""
    if isinstance(data, dict) and isinstance(data.get("data"), dict):
        return data["data"]
    if isinstance(data, dict):
        return data
    return {}


def _normalize_availability(raw: Any) -> Dict[str, List[Dict[str, Any]]]:
    """
    Normalize staff availability to {weekday: [window, ...]}.

    Accepts the list form ({"monday": [{"start", "end", "isAvailable"}]}) and
    the older single-window working-hours form
    ({"monday": {"start", "end", "closed"}}).
    """
    if not isinstance(raw, dict):
        return {}

    availability: Dict[str, List[Dict[str, Any]]] = {}
    for day, windows in raw.items():
        key = str(day).strip().lower()
        if isinstance(windows, dict):
            availability[key] = [{
                "start": windows.get("start"),
                "end": windows.get("end"),
                "is_available": not windows.get("closed", False),
            }]
        elif isinstance(windows, list):
            availability[key] = windows
        else:
            availability[key] = []

    return availability


def _first_present(document: Dict[str, Any], keys: Tuple[str, ...]) -> Any:
    """First value among keys that is present and not None (0 counts as present)."""
    for key in keys:
        if document.get(key) is not None:
            return document[key]
    return None


def _whole_minutes(value: Any) -> Optional[int]:
    """A minute count as int; None for non-numeric or fractional values."""
    if isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if not number.is_integer():
        return None
    return int(number)


def _is_clock_time(value: Any) -> bool:
    return isinstance(value, str) and bool(_CLOCK_TIME.match(value.strip()))


def _clock_minutes(value: Any, tz: tzinfo) -> Optional[int]:
    """Minutes from midnight of an "HH:MM" string or a datetime value in clinic time."""
    if _is_clock_time(value):
        try:
            return parse_time_to_minutes(value.strip())
        except ValidationError:
            return None
    return minutes_of_day(value, tz)


def _booking_start_minute(appointment: Dict[str, Any], tz: tzinfo) -> Optional[int]:
    start = _first_present(appointment, START_KEYS)
    if start is not None:
        return _clock_minutes(start, tz)

    time_str = appointment.get("time")
    if time_str:
        return _clock_minutes(str(time_str), tz)

    return None


def _booking_duration(appointment: Dict[str, Any], start_minute: int, tz: tzinfo) -> Optional[int]:
    duration = _first_present(appointment, DURATION_KEYS)
    if duration is not None:
        return _whole_minutes(duration)

    end = _first_present(appointment, END_KEYS)
    if end is None:
        return None

    start = _first_present(appointment, START_KEYS)
    if start is None or _is_clock_time(start) or _is_clock_time(end):
        end_minute = _clock_minutes(end, tz)
        return None if end_minute is None else end_minute - start_minute

    return minutes_between(start, end, tz)


def _normalize_booking(appointment: Dict[str, Any], staff_id: str, date: str, tz: tzinfo) -> Booking:
    """
    Reduce an appointment document to a Booking in clinic wall time.

    Raises:
        InternalError: If the document has no usable start time or duration
    """
    start_minute = _booking_start_minute(appointment, tz)
    duration = None if start_minute is None else _booking_duration(appointment, start_minute, tz)

    if start_minute is None or duration is None or duration <= 0:
        raise InternalError(
            "Appointment has no usable start time or duration",
            details={"appointment_id": str(appointment.get("id", ""))}
        )

    return Booking(
        staff_id=staff_id,
        date=date,
        start_minute=start_minute,
        duration_minutes=duration
    )


def _appointment_date(appointment: Dict[str, Any], tz: tzinfo) -> Optional[str]:
    """Clinic-local date of an appointment, or None when it carries no date."""
    raw = _first_present(appointment, ("date",) + START_KEYS)
    if raw is None or _is_clock_time(raw):
        return None
    parsed_date = parse_iso_date(raw, tz)
    return parsed_date.isoformat() if parsed_date else None


# ============================================================================
# Public API
# ============================================================================


async def list_clients(auth_header: Optional[str] = None) -> List[ClientRecord]:
    """
    Fetch all client records.

    Raises:
        AppError: On store errors
    """
    data = await _get_json(CLIENTS_PATH, auth_header=auth_header)

    clients = []
    for item in _extract_items(data):
        if not isinstance(item, dict) or item.get("id") is None:
            logger.warning("Skipping client document without an id")
            continue
        clients.append(ClientRecord.model_validate(item))

    logger.info(f"Retrieved {len(clients)} clients from clinic store")
    return clients


async def get_staff_availability(
    staff_id: str,
    auth_header: Optional[str] = None
) -> Dict[str, List[Dict[str, Any]]]:
    """
    Fetch a staff member's weekly availability.

    Returns:
        {weekday: [window dicts]}; empty when no availability is configured

    Raises:
        NotFoundError: If the staff member does not exist
        AppError: On other store errors
    """
    data = await _get_json(
        STAFF_PATH.format(staff_id=staff_id),
        auth_header=auth_header,
        not_found_message=f"Staff member {staff_id} not found"
    )
    document = _extract_document(data)
    return _normalize_availability(document.get("availability") or document.get("workingHours"))


async def get_service_duration(
    service_id: str,
    auth_header: Optional[str] = None
) -> int:
    """
    Fetch the duration (minutes) of a service.

    Raises:
        NotFoundError: If the service does not exist
        InternalError: If the service has no valid duration
        AppError: On other store errors
    """
    data = await _get_json(
        SERVICE_PATH.format(service_id=service_id),
        auth_header=auth_header,
        not_found_message=f"Service {service_id} not found"
    )
    document = _extract_document(data)
    duration = _whole_minutes(_first_present(document, DURATION_KEYS))

    if duration is None or duration <= 0:
        raise InternalError(
            f"Service {service_id} has no valid duration",
            details={"service_id": service_id}
        )

    return duration


async def list_bookings(
    staff_id: str,
    date: str,
    auth_header: Optional[str] = None
) -> List[Booking]:
    """
    Fetch a staff member's active bookings on a date.

    Cancelled appointments and appointments on other dates are left out.

    Raises:
        InternalError: If an appointment has no usable start time or duration
        AppError: On store errors
    """
    data = await _get_json(
        APPOINTMENTS_PATH,
        params={"staffId": staff_id, "date": date},
        auth_header=auth_header
    )
    tz = clinic_timezone()

    bookings = []
    for item in _extract_items(data):
        if not isinstance(item, dict):
            continue
        if str(item.get("status", "")).lower() in CANCELLED_STATUSES:
            continue
        appointment_date = _appointment_date(item, tz)
        if appointment_date is not None and appointment_date != date:
            continue
        bookings.append(_normalize_booking(item, staff_id, date, tz))

    logger.info(f"Retrieved {len(bookings)} bookings for staff {staff_id} on {date}")
    return bookings


__all__ = [
    "get_client",
    "aclose_client",
    "list_clients",
    "get_staff_availability",
    "get_service_duration",
    "list_bookings",
]
