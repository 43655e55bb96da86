"""
Constants Package

Centralized constants for the clinic scheduling service.

Exports:
- Threshold values (slot granularity, match and search weights)
- Global constants (headers, weekday names, scan statuses)

Safe to import anywhere - no heavy dependencies or circular imports.
"""

# Threshold constants
from .thresholds import (
    SLOT_GRANULARITY_MINUTES,
    MINUTES_PER_DAY,
    MATCH_WEIGHT_FULL_NAME,
    MATCH_WEIGHT_REVERSED_NAME,
    MATCH_WEIGHT_TOKEN_CONTAINED,
    MATCH_WEIGHT_TOKEN_EXACT,
    MATCH_WEIGHT_TOKEN_PREFIX,
    MIN_MATCH_SCORE,
    ID_NUMBER_MIN_LENGTH,
    ID_NUMBER_MAX_LENGTH,
    SEARCH_WEIGHT_FIELD_CONTAINS,
    SEARCH_WEIGHT_FIELD_EXACT,
    SEARCH_WEIGHT_NAME_EXACT,
    SEARCH_WEIGHT_FIELD_PREFIX,
    is_match,
)

# Global constants
from .constants import (
    TRACE_HEADER_NAME,
    WEEKDAY_NAMES,
    DATE_FORMAT,
    SCAN_STATUS_MATCHED,
    SCAN_STATUS_UNMATCHED,
    ASSIGNMENT_AUTO,
    ASSIGNMENT_MANUAL,
    UPLOAD_SOURCE_MANUAL,
    ID_NUMBER_PATTERN,
    MATCH_PATH_ID_NUMBER,
    MATCH_PATH_FUZZY,
    MATCH_PATH_NONE,
    normalize_trace_id,
    short_request_id,
)

__all__ = [
    # Thresholds
    "SLOT_GRANULARITY_MINUTES",
    "MINUTES_PER_DAY",
    "MATCH_WEIGHT_FULL_NAME",
    "MATCH_WEIGHT_REVERSED_NAME",
    "MATCH_WEIGHT_TOKEN_CONTAINED",
    "MATCH_WEIGHT_TOKEN_EXACT",
    "MATCH_WEIGHT_TOKEN_PREFIX",
    "MIN_MATCH_SCORE",
    "ID_NUMBER_MIN_LENGTH",
    "ID_NUMBER_MAX_LENGTH",
    "SEARCH_WEIGHT_FIELD_CONTAINS",
    "SEARCH_WEIGHT_FIELD_EXACT",
    "SEARCH_WEIGHT_NAME_EXACT",
    "SEARCH_WEIGHT_FIELD_PREFIX",
    "is_match",
    # Global
    "TRACE_HEADER_NAME",
    "WEEKDAY_NAMES",
    "DATE_FORMAT",
    "SCAN_STATUS_MATCHED",
    "SCAN_STATUS_UNMATCHED",
    "ASSIGNMENT_AUTO",
    "ASSIGNMENT_MANUAL",
    "UPLOAD_SOURCE_MANUAL",
    "ID_NUMBER_PATTERN",
    "MATCH_PATH_ID_NUMBER",
    "MATCH_PATH_FUZZY",
    "MATCH_PATH_NONE",
    "normalize_trace_id",
    "short_request_id",
]
