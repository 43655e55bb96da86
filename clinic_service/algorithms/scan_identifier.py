"""
Scan Identifier Extraction

Parses uploaded scan CSV files and pulls the client identifier, scan date and
scan time out of the scanner's file identifier.

Scanner identifiers look like:
    "7802035087081 2025-4-20T21_10^004_brv.txt"
     ^ID number    ^date     ^time ^sequence/suffix

When the identifier has no leading digits it is treated as a person's name
and the scan needs matching by name.

CSV layout:
    row 1: (blank), path ids...
    row 2: (blank), descriptions...
    row 3: file identifier, values...
"""

import csv
import io
import logging
import re
from datetime import datetime
from typing import Any, List, Optional, Union

from clinic_service.constants import (
    ASSIGNMENT_AUTO,
    ASSIGNMENT_MANUAL,
    ID_NUMBER_PATTERN,
    SCAN_STATUS_MATCHED,
    SCAN_STATUS_UNMATCHED,
    UPLOAD_SOURCE_MANUAL,
)
from clinic_service.core.errors import ValidationError
from clinic_service.schemas.scans import ScanFile, ScanPathValue
from clinic_service.tools.time_tool import utcnow

logger = logging.getLogger(__name__)

_LEADING_DIGITS = re.compile(r"^(\d+)")
_DATE_IN_ID = re.compile(r"(\d{4})-(\d{1,2})-(\d{1,2})")
_TIME_IN_ID = re.compile(r"T(\d{1,2})_(\d{1,2})")
# Start of the scanner suffix when the identifier carries no date
_SUFFIX_START = re.compile(r"T\d{1,2}_|[_^]")

_TRUTHY_WORDS = {"yes", "true"}

MIN_SCAN_ROWS = 3


# ============================================================================
# Identifier Parsing
# ============================================================================


def extract_user_id(file_id: str) -> Optional[str]:
    """
    Leading run of digits of a file identifier.

    Example:
        >>> extract_user_id("7802035087081 2025-4-20T21_10^004_brv.txt")
        '7802035087081'
        >>> extract_user_id("Jane Smith") is None
        True
    """
    match = _LEADING_DIGITS.match(file_id or "")
    return match.group(1) if match else None


def extract_scan_date(file_id: str) -> Optional[str]:
    """
    First Y-M-D date in a file identifier, zero-padded to YYYY-MM-DD.

    Example:
        >>> extract_scan_date("7802035087081 2025-4-20T21_10^004_brv.txt")
        '2025-04-20'
    """
    match = _DATE_IN_ID.search(file_id or "")
    if not match:
        return None
    year, month, day = match.groups()
    return f"{year}-{month.zfill(2)}-{day.zfill(2)}"


def extract_scan_time(file_id: str) -> Optional[str]:
    """
    Scan time ("T<hour>_<minute>") of a file identifier as HH:MM.

    Example:
        >>> extract_scan_time("7802035087081 2025-4-20T9_5^004_brv.txt")
        '09:05'
    """
    match = _TIME_IN_ID.search(file_id or "")
    if not match:
        return None
    hours, minutes = match.groups()
    return f"{hours.zfill(2)}:{minutes.zfill(2)}"


def extract_client_identifier(file_id: str) -> Optional[str]:
    """
    Client part of a file identifier: the text before the scan date, or
    before the scanner suffix when there is no date.

    Example:
        >>> extract_client_identifier("Jane Smith 2025-4-20T21_10^004_brv.txt")
        'Jane Smith'
        >>> extract_client_identifier("RIANA RAATH T8_52^004")
        'RIANA RAATH'
    """
    file_id = file_id or ""
    match = _DATE_IN_ID.search(file_id)
    if match:
        head = file_id[:match.start()]
    else:
        head = _SUFFIX_START.split(file_id, maxsplit=1)[0]
    return head.strip() or None


def is_id_number(identifier: str) -> bool:
    """True if the identifier has the shape of a national ID number."""
    return bool(ID_NUMBER_PATTERN.match((identifier or "").strip()))


def normalize_scan_value(value: Any) -> int:
    """
    Collapse a raw scan reading to 0 or 1.

    Positive numbers and "yes"/"true" become 1; anything else becomes 0.
    """
    text = str(value).strip().lower() if value is not None else ""
    if text in _TRUTHY_WORDS:
        return 1
    try:
        return 1 if float(text) > 0 else 0
    except ValueError:
        return 0


def _path_id(value: str) -> Union[int, str]:
    text = value.strip()
    try:
        return int(text)
    except ValueError:
        return text


# ============================================================================
# CSV Parsing
# ============================================================================


def parse_scan_csv(content: str, filename: str, now: Optional[datetime] = None) -> ScanFile:
    """
    Parse a scan CSV into a ScanFile.

    Args:
        content: Raw CSV text
        filename: Original upload file name
        now: Clock used when the identifier carries no date/time (defaults to UTC now)

    Returns:
        ScanFile with status "matched"/assignment "auto" when the identifier
        starts with an ID number, otherwise "unmatched"/"manual" with the
        identifier kept as person_name.

    Raises:
        ValidationError: If the file has fewer than 3 non-blank rows
    """
    rows: List[List[str]] = [
        row for row in csv.reader(io.StringIO(content))
        if any(cell.strip() for cell in row)
    ]

    if len(rows) < MIN_SCAN_ROWS:
        raise ValidationError(
            f"Invalid scan file: expected at least {MIN_SCAN_ROWS} rows, got {len(rows)}",
            details={"filename": filename, "rows": len(rows)}
        )

    file_id = rows[2][0].strip() if rows[2] else ""
    user_id = extract_user_id(file_id)
    person_name = None if user_id else (file_id or None)

    path_ids = [_path_id(cell) for cell in rows[0][1:]]
    descriptions = rows[1][1:]
    raw_values = rows[2][1:]

    path_data = []
    for index, path_id in enumerate(path_ids):
        path_data.append(ScanPathValue(
            path_id=path_id,
            description=descriptions[index].strip() if index < len(descriptions) else "",
            value=normalize_scan_value(raw_values[index]) if index < len(raw_values) else 0
        ))

    clock = now or utcnow()
    scan_date = extract_scan_date(file_id) or clock.strftime("%Y-%m-%d")
    scan_time = extract_scan_time(file_id) or clock.strftime("%H:%M")

    logger.info(
        f"Parsed scan '{filename}': {len(path_data)} paths, "
        f"{'ID number' if user_id else 'name'} identifier"
    )

    return ScanFile(
        file_identifier=file_id,
        user_id=user_id,
        person_name=person_name,
        original_filename=filename,
        upload_source=UPLOAD_SOURCE_MANUAL,
        scan_date=scan_date,
        scan_time=scan_time,
        status=SCAN_STATUS_MATCHED if user_id else SCAN_STATUS_UNMATCHED,
        assignment_type=ASSIGNMENT_AUTO if user_id else ASSIGNMENT_MANUAL,
        path_data=path_data
    )


def identifier_for_matching(scan: ScanFile) -> Optional[str]:
    """The string to hand to the client matcher: the ID number, else the name without the scanner suffix."""
    if scan.user_id:
        return scan.user_id
    return extract_client_identifier(scan.file_identifier) or scan.person_name
