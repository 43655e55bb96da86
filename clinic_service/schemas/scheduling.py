"""
Scheduling Schemas

Pydantic models for staff availability, bookings and generated slots.
Field names are snake_case; the camelCase names used by the clinic data
store (isAvailable, startMinute, ...) are accepted on input.

Time strings ("HH:MM") are kept as raw strings here and validated by the
slot generator, so a malformed value produces a ValidationError naming the
offending value rather than a generic schema error.
"""

from typing import Dict, List, Optional
from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class TimeWindow(BaseModel):
    """One working-hour window on a weekday."""
    is_available: bool = Field(
        True,
        validation_alias=AliasChoices("is_available", "isAvailable"),
        description="Whether the staff member can be booked in this window",
    )
    start: str = Field(..., description="Window start (HH:MM, 24-hour)")
    end: str = Field(..., description="Window end (HH:MM, 24-hour)")

    model_config = ConfigDict(frozen=True)


# weekday name ("monday" .. "sunday") -> ordered windows
WeeklyAvailability = Dict[str, List[TimeWindow]]


class Booking(BaseModel):
    """
    Existing appointment, reduced to what slot computation needs.

    Occupies the half-open interval [start_minute, start_minute + duration_minutes).
    """
    staff_id: Optional[str] = Field(
        None, validation_alias=AliasChoices("staff_id", "staffId")
    )
    date: Optional[str] = Field(None, description="Appointment date (YYYY-MM-DD)")
    start_minute: int = Field(
        ...,
        ge=0,
        lt=24 * 60,
        validation_alias=AliasChoices("start_minute", "startMinute"),
        description="Start time in minutes from midnight",
    )
    duration_minutes: int = Field(
        ...,
        gt=0,
        validation_alias=AliasChoices("duration_minutes", "durationMinutes"),
    )

    model_config = ConfigDict(frozen=True)

    @property
    def end_minute(self) -> int:
        return self.start_minute + self.duration_minutes


class CandidateSlot(BaseModel):
    """A free appointment start time of fixed duration."""
    start_minute: int
    duration_minutes: int
    start: str = Field(..., description="Slot start (HH:MM)")
    end: str = Field(..., description="Slot end (HH:MM)")

    @property
    def end_minute(self) -> int:
        return self.start_minute + self.duration_minutes


# ============================================================================
# Request / Response Bodies
# ============================================================================

class SlotGenerationRequest(BaseModel):
    """Request body for pure slot generation."""
    availability: WeeklyAvailability = Field(
        default_factory=dict, description="Weekly availability keyed by weekday name"
    )
    bookings: List[Booking] = Field(
        default_factory=list, description="Bookings for the same staff member and date"
    )
    service_duration_minutes: int = Field(
        ...,
        gt=0,
        validation_alias=AliasChoices("service_duration_minutes", "serviceDurationMinutes"),
    )
    date: str = Field(..., description="Date in YYYY-MM-DD format")
    step_minutes: Optional[int] = Field(
        None,
        gt=0,
        validation_alias=AliasChoices("step_minutes", "stepMinutes"),
        description="Step between candidate starts (defaults to configuration)",
    )


class ConflictCheckRequest(BaseModel):
    """Request body for checking a proposed appointment against bookings."""
    start: str = Field(..., description="Proposed start (HH:MM)")
    duration_minutes: int = Field(
        ..., gt=0, validation_alias=AliasChoices("duration_minutes", "durationMinutes")
    )
    bookings: List[Booking] = Field(default_factory=list)


class SlotListResult(BaseModel):
    """Generated slots for one staff member on one date."""
    date: str
    weekday: str
    service_duration_minutes: int
    step_minutes: int
    slots: List[str] = Field(..., description="Free start times (HH:MM)")
    slot_details: List[CandidateSlot] = Field(default_factory=list)
    total_count: int = Field(..., ge=0)
    staff_id: Optional[str] = None
    service_id: Optional[str] = None
