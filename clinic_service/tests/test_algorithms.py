"""
Algorithm Tests

Tests for deterministic algorithm functions:
- overlap.overlaps() / conflicting_bookings()
- slot_generator.generate_slots() / candidate_slots()
- client_matcher.find_best_match() / match_client() / search_clients()

Run: pytest clinic_service/tests/test_algorithms.py -v
"""

import pytest


# 2026-02-02 is a Monday
MONDAY = "2026-02-02"
TUESDAY = "2026-02-03"
WEDNESDAY = "2026-02-04"


def _booking(start_minute, duration_minutes):
    from clinic_service.schemas.scheduling import Booking
    return Booking(start_minute=start_minute, duration_minutes=duration_minutes)


# ==================== Overlap Tests ====================

def test_overlap_touching_intervals_do_not_overlap():
    """Back-to-back intervals share only an endpoint."""
    from clinic_service.algorithms.overlap import overlaps

    assert overlaps(540, 600, 600, 660) is False
    assert overlaps(600, 660, 540, 600) is False


def test_overlap_partial_and_contained():
    """Partial and full containment both count as overlap."""
    from clinic_service.algorithms.overlap import overlaps

    assert overlaps(540, 600, 570, 630) is True
    assert overlaps(540, 660, 570, 600) is True
    assert overlaps(570, 600, 540, 660) is True


def test_overlap_is_symmetric():
    from clinic_service.algorithms.overlap import overlaps

    pairs = [(540, 600, 570, 630), (540, 600, 600, 660), (0, 30, 60, 90)]
    for a_start, a_end, b_start, b_end in pairs:
        assert overlaps(a_start, a_end, b_start, b_end) == overlaps(b_start, b_end, a_start, a_end)


def test_conflicting_bookings_keeps_input_order():
    """Only intersecting bookings are returned, in the order given."""
    from clinic_service.algorithms.overlap import conflicting_bookings, overlaps_any

    bookings = [_booking(600, 30), _booking(480, 30), _booking(555, 30)]

    conflicts = conflicting_bookings(540, 610, bookings)

    assert [b.start_minute for b in conflicts] == [600, 555]
    assert overlaps_any(540, 610, bookings) is True
    assert overlaps_any(510, 540, bookings) is False


# ==================== Slot Generation Tests ====================

def test_generate_slots_one_hour_window(monday_availability):
    """09:00-10:00 window, 30 minute service, no bookings."""
    from clinic_service.algorithms.slot_generator import generate_slots

    slots = generate_slots(monday_availability, [], 30, MONDAY)

    assert slots == ["09:00", "09:15", "09:30"]


def test_generate_slots_count_without_bookings():
    """floor((end - start - duration) / step) + 1 slots when the service fits."""
    from clinic_service.algorithms.slot_generator import generate_slots

    cases = [
        ("09:00", "12:00", 45, 10),
        ("09:00", "10:00", 60, 1),
        ("09:00", "09:20", 15, 1),
        ("09:00", "09:20", 30, 0),
    ]

    for start, end, duration, expected in cases:
        availability = {"monday": [{"start": start, "end": end}]}
        assert len(generate_slots(availability, [], duration, MONDAY)) == expected


def test_generate_slots_excludes_bookings():
    """A 09:30-10:00 booking removes every overlapping candidate, touching allowed."""
    from clinic_service.algorithms.slot_generator import generate_slots

    availability = {"monday": [{"start": "09:00", "end": "11:00"}]}
    bookings = [_booking(570, 30)]

    slots = generate_slots(availability, bookings, 30, MONDAY)

    assert slots == ["09:00", "10:00", "10:15", "10:30"]


def test_generate_slots_never_overlap_bookings():
    from clinic_service.algorithms.overlap import overlaps
    from clinic_service.algorithms.slot_generator import candidate_slots

    availability = {"monday": [{"start": "08:00", "end": "17:00"}]}
    bookings = [_booking(545, 20), _booking(720, 60), _booking(900, 45)]

    slots = candidate_slots(availability, bookings, 40, MONDAY)

    assert slots
    for slot in slots:
        for booking in bookings:
            assert not overlaps(slot.start_minute, slot.end_minute, booking.start_minute, booking.end_minute)


def test_generate_slots_accepts_booking_dicts():
    """Bookings may be given in the store's camelCase form."""
    from clinic_service.algorithms.slot_generator import generate_slots

    availability = {"monday": [{"start": "09:00", "end": "10:00"}]}
    bookings = [{"startMinute": 540, "durationMinutes": 30}]

    assert generate_slots(availability, bookings, 30, MONDAY) == ["09:30"]


def test_generate_slots_skips_unavailable_windows():
    from clinic_service.algorithms.slot_generator import generate_slots

    availability = {
        "monday": [
            {"isAvailable": False, "start": "08:00", "end": "09:00"},
            {"isAvailable": True, "start": "14:00", "end": "14:30"},
        ]
    }

    assert generate_slots(availability, [], 30, MONDAY) == ["14:00"]


def test_generate_slots_deduplicates_overlapping_windows():
    """A start time reachable from two windows is returned once, window order kept."""
    from clinic_service.algorithms.slot_generator import generate_slots

    availability = {
        "monday": [
            {"start": "09:00", "end": "10:00"},
            {"start": "09:30", "end": "10:30"},
        ]
    }

    slots = generate_slots(availability, [], 30, MONDAY)

    assert slots == ["09:00", "09:15", "09:30", "09:45", "10:00"]
    assert len(slots) == len(set(slots))


def test_generate_slots_keeps_window_order():
    """Windows listed out of order are walked in the order given."""
    from clinic_service.algorithms.slot_generator import generate_slots

    availability = {
        "monday": [
            {"start": "14:00", "end": "14:30"},
            {"start": "09:00", "end": "09:30"},
        ]
    }

    assert generate_slots(availability, [], 30, MONDAY) == ["14:00", "09:00"]


def test_generate_slots_day_without_windows(monday_availability):
    """Empty or missing weekday entries produce no slots."""
    from clinic_service.algorithms.slot_generator import generate_slots

    assert generate_slots(monday_availability, [], 30, TUESDAY) == []
    assert generate_slots(monday_availability, [], 30, WEDNESDAY) == []
    assert generate_slots({}, [], 30, MONDAY) == []
    assert generate_slots(None, None, 30, MONDAY) == []


def test_generate_slots_weekday_keys_case_insensitive():
    from clinic_service.algorithms.slot_generator import generate_slots

    availability = {"Monday": [{"start": "09:00", "end": "09:30"}]}

    assert generate_slots(availability, [], 30, MONDAY) == ["09:00"]


def test_generate_slots_non_positive_duration(monday_availability):
    from clinic_service.algorithms.slot_generator import generate_slots

    assert generate_slots(monday_availability, [], 0, MONDAY) == []
    assert generate_slots(monday_availability, [], -15, MONDAY) == []


def test_generate_slots_custom_step(monday_availability):
    from clinic_service.algorithms.slot_generator import generate_slots

    assert generate_slots(monday_availability, [], 30, MONDAY, step_minutes=30) == ["09:00", "09:30"]
    assert generate_slots(monday_availability, [], 30, MONDAY, step_minutes=5)[:3] == ["09:00", "09:05", "09:10"]


def test_generate_slots_window_ending_at_midnight():
    from clinic_service.algorithms.slot_generator import generate_slots

    availability = {"monday": [{"start": "23:00", "end": "24:00"}]}

    assert generate_slots(availability, [], 30, MONDAY) == ["23:00", "23:15", "23:30"]


def test_generate_slots_malformed_time():
    """Malformed window times raise instead of producing garbage slots."""
    from clinic_service.algorithms.slot_generator import generate_slots
    from clinic_service.core.errors import ValidationError

    for bad in ("9h00", "25:00", "09:60", "", "09:00:00"):
        availability = {"monday": [{"start": bad, "end": "10:00"}]}
        with pytest.raises(ValidationError):
            generate_slots(availability, [], 30, MONDAY)


def test_generate_slots_inverted_window():
    from clinic_service.algorithms.slot_generator import generate_slots
    from clinic_service.core.errors import ValidationError

    availability = {"monday": [{"start": "10:00", "end": "09:00"}]}

    with pytest.raises(ValidationError) as exc_info:
        generate_slots(availability, [], 30, MONDAY)

    assert exc_info.value.status_code == 400
    assert exc_info.value.details == {"start": "10:00", "end": "09:00"}


def test_generate_slots_invalid_arguments(monday_availability):
    from clinic_service.algorithms.slot_generator import generate_slots
    from clinic_service.core.errors import ValidationError

    with pytest.raises(ValidationError):
        generate_slots(monday_availability, [], 30, "02/02/2026")

    with pytest.raises(ValidationError):
        generate_slots(monday_availability, [], "30", MONDAY)

    with pytest.raises(ValidationError):
        generate_slots(monday_availability, [], 30, MONDAY, step_minutes=0)

    with pytest.raises(ValidationError):
        generate_slots(monday_availability, [{"startMinute": 540}], 30, MONDAY)


def test_generate_slots_idempotent(monday_availability):
    from clinic_service.algorithms.slot_generator import generate_slots

    bookings = [_booking(555, 15)]

    first = generate_slots(monday_availability, bookings, 15, MONDAY)
    second = generate_slots(monday_availability, bookings, 15, MONDAY)

    assert first == second == ["09:00", "09:30", "09:45"]


def test_weekday_name_independent_of_locale():
    from datetime import date
    from clinic_service.algorithms.slot_generator import weekday_name

    assert weekday_name(MONDAY) == "monday"
    assert weekday_name(date(2026, 2, 8)) == "sunday"


def test_time_helpers():
    from clinic_service.algorithms.slot_generator import format_minutes, parse_time_to_minutes

    assert parse_time_to_minutes("09:30") == 570
    assert parse_time_to_minutes("9:05") == 545
    assert parse_time_to_minutes("24:00") == 1440
    assert format_minutes(570) == "09:30"
    assert format_minutes(0) == "00:00"


# ==================== Client Matching Tests ====================

def test_find_best_match_by_name(clients):
    """Exact full name beats a near-miss."""
    from clinic_service.algorithms.client_matcher import find_best_match, score

    best = find_best_match("Jane Smith", clients)

    assert best.id == "c1"
    assert score("Jane Smith", clients[0]) == 22
    assert score("Jane Smith", clients[1]) == 3


def test_find_best_match_reversed_and_case_insensitive(clients):
    from clinic_service.algorithms.client_matcher import find_best_match

    assert find_best_match("smith  JANE", clients).id == "c1"
    assert find_best_match("jones", clients).id == "c3"


def test_find_best_match_by_id_number(clients):
    """An ID number matching exactly one client skips name scoring."""
    from clinic_service.algorithms.client_matcher import find_best_match, match_client

    outcome = match_client("7802035087081", clients)

    assert outcome["client"].id == "c1"
    assert outcome["match_path"] == "id_number"
    assert outcome["ranking"] == []
    assert find_best_match(" 7802035087081 ", clients).id == "c1"


def test_find_best_match_duplicate_id_number_falls_back(clients):
    """Two clients with the same ID number: no ID match, name scoring finds nothing."""
    from clinic_service.algorithms.client_matcher import match_client
    from clinic_service.schemas.clients import ClientRecord

    duplicated = clients + [ClientRecord(id="c4", first_name="Janet", id_number="7802035087081")]

    outcome = match_client("7802035087081", duplicated)

    assert outcome["client"] is None
    assert outcome["match_path"] == "none"


def test_find_best_match_no_match(clients):
    from clinic_service.algorithms.client_matcher import find_best_match, match_client

    assert find_best_match("Nobody Here", clients) is None
    assert find_best_match("1234567890", clients) is None
    assert find_best_match("Jane Smith", []) is None
    assert match_client("Nobody Here", clients)["match_path"] == "none"


def test_find_best_match_tie_keeps_input_order():
    from clinic_service.algorithms.client_matcher import find_best_match, rank_candidates
    from clinic_service.schemas.clients import ClientRecord

    twins = [
        ClientRecord(id="first", first_name="Sam", last_name="Lee"),
        ClientRecord(id="second", first_name="Sam", last_name="Lee"),
    ]

    assert find_best_match("Sam Lee", twins).id == "first"
    assert [item.client_id for item in rank_candidates("Sam Lee", twins)] == ["first", "second"]
    assert find_best_match("Sam Lee", list(reversed(twins))).id == "second"


def test_rank_candidates_drops_zero_scores(clients):
    from clinic_service.algorithms.client_matcher import rank_candidates

    ranking = rank_candidates("Jane Smith", clients)

    assert [(item.client_id, item.score) for item in ranking] == [("c1", 22), ("c2", 3)]


def test_find_best_match_accepts_dicts():
    from clinic_service.algorithms.client_matcher import find_best_match

    candidates = [
        {"id": "a", "firstName": "Lebo", "lastName": "Mokoena"},
        {"id": "b", "firstName": "Thabo", "lastName": "Mokoena", "idNumber": 9001015009087},
    ]

    assert find_best_match("Lebo Mokoena", candidates).id == "a"
    assert find_best_match("9001015009087", candidates).id == "b"


def test_find_best_match_empty_identifier(clients):
    from clinic_service.algorithms.client_matcher import find_best_match
    from clinic_service.core.errors import ValidationError

    with pytest.raises(ValidationError):
        find_best_match("", clients)

    with pytest.raises(ValidationError):
        find_best_match("   ", clients)


def test_find_best_match_idempotent(clients):
    from clinic_service.algorithms.client_matcher import find_best_match

    assert find_best_match("Jan Smithy", clients) == find_best_match("Jan Smithy", clients)
    assert find_best_match("Jan Smithy", clients).id == "c2"


def test_display_name_fallbacks():
    from clinic_service.algorithms.client_matcher import display_name
    from clinic_service.schemas.clients import ClientRecord

    assert display_name(ClientRecord(id="1", full_name="Dr. Jane Smith", first_name="Jane")) == "Dr. Jane Smith"
    assert display_name(ClientRecord(id="2", first_name="Jane", last_name="Smith")) == "Jane Smith"
    assert display_name(ClientRecord(id="3", last_name="Smith")) == "Smith"
    assert display_name(ClientRecord(id="4", email="jane@example.com")) == "jane@example.com"
    assert display_name(ClientRecord(id="5", full_name="  ")) == "5"


# ==================== Client Search Tests ====================

def test_search_clients_ranks_exact_name_first(clients):
    from clinic_service.algorithms.client_matcher import search_clients

    results = search_clients("smith", clients)

    assert [client.id for client in results] == ["c1", "c2", "c3"]


def test_search_clients_every_token_must_match(clients):
    from clinic_service.algorithms.client_matcher import search_clients

    assert [c.id for c in search_clients("nurse", clients)] == ["c2"]
    assert [c.id for c in search_clients("jane cape", clients)] == ["c1"]
    assert search_clients("jane durban", clients) == []


def test_search_clients_empty_term_returns_all(clients):
    from clinic_service.algorithms.client_matcher import search_clients

    assert [c.id for c in search_clients("", clients)] == ["c1", "c2", "c3"]
    assert [c.id for c in search_clients("   ", clients)] == ["c1", "c2", "c3"]


# ==================== Run Tests ====================

if __name__ == "__main__":
    pytest.main([__file__, "-v"])
