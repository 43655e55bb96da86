"""
Pydantic Schemas Package

Typed models for the scheduling and matching algorithms and for the
HTTP request/response bodies.

Export Groups:
- Base: Proofs, ApiResponse, ErrorDetail
- Scheduling: TimeWindow, WeeklyAvailability, Booking, CandidateSlot, ...
- Clients: ClientRecord, MatchScore, MatchRequest, ClientSearchRequest
- Scans: ScanPathValue, ScanFile, ScanIngestRequest, ScanIngestResult
"""

# Base schemas
from clinic_service.schemas.base import (
    Proofs,
    ApiResponse,
    ErrorDetail
)

# Scheduling schemas
from clinic_service.schemas.scheduling import (
    TimeWindow,
    WeeklyAvailability,
    Booking,
    CandidateSlot,
    SlotGenerationRequest,
    ConflictCheckRequest,
    SlotListResult
)

# Client schemas
from clinic_service.schemas.clients import (
    ClientRecord,
    MatchScore,
    MatchRequest,
    ClientSearchRequest
)

# Scan schemas
from clinic_service.schemas.scans import (
    ScanPathValue,
    ScanFile,
    ScanIngestRequest,
    ScanIngestResult
)

__all__ = [
    # Base
    "Proofs",
    "ApiResponse",
    "ErrorDetail",

    # Scheduling
    "TimeWindow",
    "WeeklyAvailability",
    "Booking",
    "CandidateSlot",
    "SlotGenerationRequest",
    "ConflictCheckRequest",
    "SlotListResult",

    # Clients
    "ClientRecord",
    "MatchScore",
    "MatchRequest",
    "ClientSearchRequest",

    # Scans
    "ScanPathValue",
    "ScanFile",
    "ScanIngestRequest",
    "ScanIngestResult",
]
