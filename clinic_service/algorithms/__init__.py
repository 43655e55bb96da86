"""
Algorithms Package

Deterministic scheduling and matching algorithms:
- overlap: Half-open interval overlap check
- slot_generator: Free appointment slots from weekly availability and bookings
- client_matcher: Scan identifier to client matching, client search
- scan_identifier: Scan CSV parsing and file identifier extraction

All algorithms are pure functions (no I/O, no randomness).
"""

from clinic_service.algorithms.overlap import overlaps, overlaps_any, conflicting_bookings
from clinic_service.algorithms.slot_generator import generate_slots, candidate_slots
from clinic_service.algorithms.client_matcher import (
    score,
    find_best_match,
    match_client,
    rank_candidates,
    search_clients,
    display_name,
)
from clinic_service.algorithms.scan_identifier import (
    parse_scan_csv,
    identifier_for_matching,
    extract_client_identifier,
)

__all__ = [
    "overlaps",
    "overlaps_any",
    "conflicting_bookings",
    "generate_slots",
    "candidate_slots",
    "score",
    "find_best_match",
    "match_client",
    "rank_candidates",
    "search_clients",
    "display_name",
    "parse_scan_csv",
    "identifier_for_matching",
    "extract_client_identifier",
]
