"""
Slots API Endpoints

Free appointment slot generation and conflict checks.

Endpoints:
- POST /slots/generate - Generate slots from availability and bookings in the body
- GET /slots/available - Generate slots for a staff member, service and date from the store
- POST /slots/check-conflict - Check a proposed appointment against bookings
"""

import asyncio
import logging
from time import perf_counter

from fastapi import APIRouter, Query, Request

from clinic_service.algorithms.overlap import conflicting_bookings
from clinic_service.algorithms.slot_generator import (
    candidate_slots,
    format_minutes,
    parse_time_to_minutes,
    weekday_name,
)
from clinic_service.api.common import build_proofs, get_auth_header, get_trace_id, standard_response
from clinic_service.constants import short_request_id
from clinic_service.core.config import settings
from clinic_service.core.errors import AppError, InternalError, to_http_exception
from clinic_service.schemas.scheduling import ConflictCheckRequest, SlotGenerationRequest, SlotListResult

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/slots", tags=["slots"])

SLOT_ALGORITHM = "half_open_slot_walk"


# ============================================================================
# Endpoints
# ============================================================================

@router.post("/generate")
async def generate(body: SlotGenerationRequest, request: Request):
    """
    Generate free slots from the availability and bookings in the request.

    Pure computation, no store access.
    """
    trace_id = get_trace_id(request)
    started = perf_counter()
    step = body.step_minutes or settings.SLOT_STEP_MINUTES

    try:
        slots = candidate_slots(
            body.availability,
            body.bookings,
            body.service_duration_minutes,
            body.date,
            step_minutes=step
        )

        result = SlotListResult(
            date=body.date,
            weekday=weekday_name(body.date),
            service_duration_minutes=body.service_duration_minutes,
            step_minutes=step,
            slots=[slot.start for slot in slots],
            slot_details=slots,
            total_count=len(slots)
        )

        return standard_response(
            message=f"Found {len(slots)} available slots on {body.date}",
            data=result.model_dump(),
            proofs=build_proofs(SLOT_ALGORITHM, ["request_body"], started),
            trace_id=trace_id
        )

    except AppError as e:
        raise to_http_exception(e)
    except Exception as e:
        logger.exception(f"[{short_request_id(trace_id)}] Slot generation failed: {e}")
        raise to_http_exception(InternalError("Slot generation failed"))


@router.get("/available")
async def available(
    request: Request,
    staff_id: str = Query(..., min_length=1, description="Staff member ID"),
    service_id: str = Query(..., min_length=1, description="Service ID"),
    date: str = Query(..., description="Date in YYYY-MM-DD format")
):
    """
    Free slots for a staff member and service on a date.

    Reads the staff member's weekly availability, the service duration and
    the day's bookings from the clinic store.
    """
    trace_id = get_trace_id(request)
    auth_header = get_auth_header(request)
    started = perf_counter()
    step = settings.SLOT_STEP_MINUTES

    try:
        from clinic_service.tools import clinic_store_client

        # Reject a bad date before touching the store
        weekday = weekday_name(date)

        availability, duration, bookings = await asyncio.gather(
            clinic_store_client.get_staff_availability(staff_id, auth_header=auth_header),
            clinic_store_client.get_service_duration(service_id, auth_header=auth_header),
            clinic_store_client.list_bookings(staff_id, date, auth_header=auth_header)
        )

        slots = candidate_slots(availability, bookings, duration, date, step_minutes=step)

        result = SlotListResult(
            date=date,
            weekday=weekday,
            service_duration_minutes=duration,
            step_minutes=step,
            slots=[slot.start for slot in slots],
            slot_details=slots,
            total_count=len(slots),
            staff_id=staff_id,
            service_id=service_id
        )

        sources = [
            {"type": "staff", "id": staff_id},
            {"type": "service", "id": service_id},
            {"type": "appointments", "count": len(bookings)},
        ]

        return standard_response(
            message=f"Found {len(slots)} available slots for staff {staff_id} on {date}",
            data=result.model_dump(),
            proofs=build_proofs(SLOT_ALGORITHM, sources, started),
            trace_id=trace_id
        )

    except AppError as e:
        raise to_http_exception(e)
    except Exception as e:
        logger.exception(f"[{short_request_id(trace_id)}] Failed to compute available slots: {e}")
        raise to_http_exception(InternalError("Failed to compute available slots"))


@router.post("/check-conflict")
async def check_conflict(body: ConflictCheckRequest, request: Request):
    """Check whether a proposed appointment overlaps any of the given bookings."""
    trace_id = get_trace_id(request)
    started = perf_counter()

    try:
        start = parse_time_to_minutes(body.start)
        end = start + body.duration_minutes
        conflicts = conflicting_bookings(start, end, body.bookings)

        data = {
            "start": format_minutes(start),
            "end": format_minutes(end),
            "conflict": bool(conflicts),
            "conflicts": [booking.model_dump() for booking in conflicts],
        }

        message = (
            f"Proposed time conflicts with {len(conflicts)} booking(s)"
            if conflicts else "No conflicting bookings"
        )

        return standard_response(
            message=message,
            data=data,
            proofs=build_proofs("half_open_overlap", ["request_body"], started),
            trace_id=trace_id
        )

    except AppError as e:
        raise to_http_exception(e)
    except Exception as e:
        logger.exception(f"[{short_request_id(trace_id)}] Conflict check failed: {e}")
        raise to_http_exception(InternalError("Conflict check failed"))
