"""
Tests for cyclic venue assignment.
"""

from rrsched.models.venue import Venue
from rrsched.services.lifecycle import record_result, update_match
from rrsched.services.matchup_generator import generate_round_robin
from rrsched.services.venue_assigner import assign_venues, venue_for_index
from tests.helpers import make_teams, make_venues


def test_one_venue_per_match_when_enough_venues():
    schedule = generate_round_robin(make_teams("A", "B", "C", "D", "E", "F"))
    assigned = assign_venues(schedule, make_venues("V1", "V2", "V3"))

    for rnd in assigned.rounds:
        assert [m.venue_id for m in rnd.matches] == ["V1", "V2", "V3"]


def test_wraps_around_when_matches_outnumber_venues():
    schedule = generate_round_robin(make_teams("A", "B", "C", "D", "E", "F"))
    assigned = assign_venues(schedule, make_venues("V1", "V2"))

    for rnd in assigned.rounds:
        assert [m.venue_id for m in rnd.matches] == ["V1", "V2", "V1"]


def test_unavailable_venues_are_skipped():
    schedule = generate_round_robin(make_teams("A", "B", "C", "D"))
    assigned = assign_venues(schedule, make_venues("V1", "V2", "V3", unavailable=("V1",)))

    for rnd in assigned.rounds:
        assert [m.venue_id for m in rnd.matches] == ["V2", "V3"]


def test_no_available_venues_clears_venue_without_error():
    schedule = generate_round_robin(make_teams("A", "B", "C", "D"))
    with_venues = assign_venues(schedule, make_venues("V1"))
    cleared = assign_venues(with_venues, make_venues("V1", unavailable=("V1",)))

    assert all(m.venue_id is None for m in cleared.iter_matches())
    assert all(m.venue_id is None for m in assign_venues(schedule, []).iter_matches())


def test_original_schedule_is_untouched():
    schedule = generate_round_robin(make_teams("A", "B", "C", "D"))
    assign_venues(schedule, make_venues("V1", "V2"))
    assert all(m.venue_id is None for m in schedule.iter_matches())


def test_other_match_fields_survive_reassignment():
    schedule = generate_round_robin(make_teams("A", "B", "C", "D"))
    schedule = update_match(schedule, "R01-M01", status="completed", notes="close round")
    schedule = record_result(schedule, "R01-M01", "A")

    assigned = assign_venues(schedule, make_venues("V1"))
    match = assigned.get_match("R01-M01")
    assert match.venue_id == "V1"
    assert match.status == "completed"
    assert match.winner_id == "A"
    assert match.notes == "close round"


def test_venue_for_index_is_modular():
    venues = [Venue(id="x", name="X"), Venue(id="y", name="Y")]
    assert venue_for_index(venues, 0).id == "x"
    assert venue_for_index(venues, 3).id == "y"
    assert venue_for_index([], 5) is None
