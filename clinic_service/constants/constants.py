"""
Global Constants

Non-business constants used throughout the application: HTTP headers,
calendar names, scan statuses and small helpers around them.
"""

import re
import uuid
from typing import Optional, Tuple

from .thresholds import ID_NUMBER_MIN_LENGTH, ID_NUMBER_MAX_LENGTH

# ============================================================================
# HTTP Headers
# ============================================================================

TRACE_HEADER_NAME = "x-request-id"


# ============================================================================
# Calendar
# ============================================================================

# Indexed by date.weekday(); fixed so weekday lookup never depends on locale
WEEKDAY_NAMES: Tuple[str, ...] = (
    "monday",
    "tuesday",
    "wednesday",
    "thursday",
    "friday",
    "saturday",
    "sunday",
)

DATE_FORMAT = "%Y-%m-%d"


# ============================================================================
# Scans
# ============================================================================

SCAN_STATUS_MATCHED = "matched"
SCAN_STATUS_UNMATCHED = "unmatched"

ASSIGNMENT_AUTO = "auto"
ASSIGNMENT_MANUAL = "manual"

UPLOAD_SOURCE_MANUAL = "manual"

ID_NUMBER_PATTERN = re.compile(rf"^\d{{{ID_NUMBER_MIN_LENGTH},{ID_NUMBER_MAX_LENGTH}}}$")


# ============================================================================
# Match Paths
# ============================================================================

MATCH_PATH_ID_NUMBER = "id_number"
MATCH_PATH_FUZZY = "fuzzy"
MATCH_PATH_NONE = "none"


# ============================================================================
# Helper Functions
# ============================================================================

def normalize_trace_id(trace_id: Optional[str]) -> str:
    """
    Normalize trace ID, generate new one if missing/invalid.

    Example:
        >>> normalize_trace_id("abc123")
        'abc123'
        >>> len(normalize_trace_id(None))
        36
    """
    if not trace_id or not isinstance(trace_id, str) or not trace_id.strip():
        return str(uuid.uuid4())
    return trace_id.strip()


def short_request_id(trace_id: str) -> str:
    """First 8 characters of a trace ID, for log prefixes."""
    return trace_id[:8]
