"""
Threshold Constants

Tunable policy values used by the scheduling and matching algorithms.

IMPORTANT: These values are the single source of truth. Algorithms import
them rather than repeating the numbers inline.
"""

# ============================================================================
# Slot Generation
# SYNC WITH: clinic_service/algorithms/slot_generator.py
# ============================================================================

# Step between candidate appointment start times (minutes)
SLOT_GRANULARITY_MINUTES = 15

# Minutes in a day; "24:00" is the latest valid window end
MINUTES_PER_DAY = 24 * 60


# ============================================================================
# Client Matching Weights
# SYNC WITH: clinic_service/algorithms/client_matcher.py
# ============================================================================

MATCH_WEIGHT_FULL_NAME = 10       # "first last" equals the identifier
MATCH_WEIGHT_REVERSED_NAME = 9    # "last first" equals the identifier
MATCH_WEIGHT_TOKEN_CONTAINED = 1  # token is a substring of the full name
MATCH_WEIGHT_TOKEN_EXACT = 3      # token equals first or last name
MATCH_WEIGHT_TOKEN_PREFIX = 2     # token is a prefix of first or last name

# Candidates must score above this to be considered a match
MIN_MATCH_SCORE = 0

# National ID numbers are all digits, 10 to 13 long
ID_NUMBER_MIN_LENGTH = 10
ID_NUMBER_MAX_LENGTH = 13


# ============================================================================
# Client Search Weights
# SYNC WITH: clinic_service/algorithms/client_matcher.py (search_clients)
# ============================================================================

SEARCH_WEIGHT_FIELD_CONTAINS = 1  # field contains the term
SEARCH_WEIGHT_FIELD_EXACT = 2     # field equals the term
SEARCH_WEIGHT_NAME_EXACT = 3      # first or last name equals the term
SEARCH_WEIGHT_FIELD_PREFIX = 1    # field starts with the term


# ============================================================================
# Helper Functions
# ============================================================================

def is_match(score: int) -> bool:
    """True if a client match score clears the minimum."""
    return score > MIN_MATCH_SCORE
