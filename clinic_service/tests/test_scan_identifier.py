"""
Scan Identifier Tests

Tests for scan CSV parsing and file identifier extraction.

Run: pytest clinic_service/tests/test_scan_identifier.py -v
"""

import pytest
from datetime import datetime


ID_SCAN = (
    ",1,2,3\n"
    ",Path A,Path B,Path C\n"
    "7802035087081 2025-4-20T21_10^004_brv.txt,yes,0,0.5\n"
)

NAME_SCAN = (
    ",101,102\n"
    ",Liver,Kidney\n"
    "Jane Smith,1,no\n"
)


# ==================== Identifier Parsing Tests ====================

def test_extract_parts_from_scanner_identifier():
    from clinic_service.algorithms.scan_identifier import (
        extract_scan_date,
        extract_scan_time,
        extract_user_id,
    )

    file_id = "7802035087081 2025-4-20T21_10^004_brv.txt"

    assert extract_user_id(file_id) == "7802035087081"
    assert extract_scan_date(file_id) == "2025-04-20"
    assert extract_scan_time(file_id) == "21:10"


def test_extract_parts_missing():
    from clinic_service.algorithms.scan_identifier import (
        extract_scan_date,
        extract_scan_time,
        extract_user_id,
    )

    assert extract_user_id("Jane Smith") is None
    assert extract_scan_date("Jane Smith") is None
    assert extract_scan_time("Jane Smith") is None
    assert extract_user_id("") is None


def test_extract_client_identifier():
    from clinic_service.algorithms.scan_identifier import extract_client_identifier

    assert extract_client_identifier("Jane Smith 2025-4-20T21_10^004_brv.txt") == "Jane Smith"
    assert extract_client_identifier("RIANA RAATH T8_52^004") == "RIANA RAATH"
    assert extract_client_identifier("Jane Smith_004_brv.txt") == "Jane Smith"
    assert extract_client_identifier("Thabo Mokoena") == "Thabo Mokoena"
    assert extract_client_identifier("Thabo Mokoena T9_05^001") == "Thabo Mokoena"
    assert extract_client_identifier("2025-4-20T21_10^004") is None
    assert extract_client_identifier("") is None


def test_is_id_number():
    from clinic_service.algorithms.scan_identifier import is_id_number

    assert is_id_number("7802035087081") is True
    assert is_id_number("1234567890") is True
    assert is_id_number("123456789") is False
    assert is_id_number("12345678901234") is False
    assert is_id_number("Jane Smith") is False


def test_normalize_scan_value():
    from clinic_service.algorithms.scan_identifier import normalize_scan_value

    assert normalize_scan_value("yes") == 1
    assert normalize_scan_value("TRUE") == 1
    assert normalize_scan_value("0.25") == 1
    assert normalize_scan_value("0") == 0
    assert normalize_scan_value("no") == 0
    assert normalize_scan_value("") == 0
    assert normalize_scan_value(None) == 0


# ==================== CSV Parsing Tests ====================

def test_parse_scan_csv_with_id_number():
    from clinic_service.algorithms.scan_identifier import identifier_for_matching, parse_scan_csv

    scan = parse_scan_csv(ID_SCAN, "scan.csv")

    assert scan.file_identifier == "7802035087081 2025-4-20T21_10^004_brv.txt"
    assert scan.user_id == "7802035087081"
    assert scan.person_name is None
    assert scan.scan_date == "2025-04-20"
    assert scan.scan_time == "21:10"
    assert scan.status == "matched"
    assert scan.assignment_type == "auto"
    assert scan.upload_source == "manual"
    assert [(p.path_id, p.description, p.value) for p in scan.path_data] == [
        (1, "Path A", 1),
        (2, "Path B", 0),
        (3, "Path C", 1),
    ]
    assert identifier_for_matching(scan) == "7802035087081"


def test_parse_scan_csv_with_name_uses_clock():
    """A name identifier carries no date/time, so the supplied clock is used."""
    from clinic_service.algorithms.scan_identifier import identifier_for_matching, parse_scan_csv

    scan = parse_scan_csv(NAME_SCAN, "jane.csv", now=datetime(2026, 2, 2, 8, 5))

    assert scan.user_id is None
    assert scan.person_name == "Jane Smith"
    assert scan.status == "unmatched"
    assert scan.assignment_type == "manual"
    assert scan.scan_date == "2026-02-02"
    assert scan.scan_time == "08:05"
    assert [p.value for p in scan.path_data] == [1, 0]
    assert identifier_for_matching(scan) == "Jane Smith"


def test_identifier_for_matching_drops_scanner_suffix():
    from clinic_service.algorithms.scan_identifier import identifier_for_matching, parse_scan_csv

    content = ",101,102\n,Liver,Kidney\nJane Smith 2025-4-20T21_10^004_brv.txt,1,0\n"

    scan = parse_scan_csv(content, "jane.csv")

    assert scan.user_id is None
    assert scan.person_name == "Jane Smith 2025-4-20T21_10^004_brv.txt"
    assert scan.scan_date == "2025-04-20"
    assert scan.scan_time == "21:10"
    assert identifier_for_matching(scan) == "Jane Smith"


def test_parse_scan_csv_ignores_blank_rows_and_short_value_rows():
    from clinic_service.algorithms.scan_identifier import parse_scan_csv

    content = "\n,1,2,3\n\n,A,B,C\n,,,\n7802035087081,1\n"

    scan = parse_scan_csv(content, "gaps.csv", now=datetime(2026, 2, 2, 8, 5))

    assert scan.user_id == "7802035087081"
    assert [p.value for p in scan.path_data] == [1, 0, 0]


def test_parse_scan_csv_too_few_rows():
    from clinic_service.algorithms.scan_identifier import parse_scan_csv
    from clinic_service.core.errors import ValidationError

    with pytest.raises(ValidationError) as exc_info:
        parse_scan_csv(",1,2\n,A,B\n", "short.csv")

    assert exc_info.value.details["rows"] == 2


# ==================== Run Tests ====================

if __name__ == "__main__":
    pytest.main([__file__, "-v"])
