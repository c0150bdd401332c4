"""
API tests: generate, venue / time assignment, conflicts, export / import, print.
"""

import pytest
from fastapi.testclient import TestClient


@pytest.fixture
def generated(client: TestClient, tournament_with_roster):
    resp = client.post(
        f"/api/tournaments/{tournament_with_roster}/schedule/generate", json={"side_strategy": "round_parity"}
    )
    assert resp.status_code == 200
    return tournament_with_roster


def matches_of(schedule):
    return [m for r in schedule["rounds"] for m in r["matches"]]


def test_generate_four_teams(client: TestClient, tournament_with_roster):
    tid = tournament_with_roster
    before = client.get(f"/api/tournaments/{tid}").json()["revision"]

    resp = client.post(f"/api/tournaments/{tid}/schedule/generate", json={"side_strategy": "round_parity"})
    assert resp.status_code == 200
    data = resp.json()

    assert data["revision"] == before + 1
    rounds = data["schedule"]["rounds"]
    assert len(rounds) == 3
    first = rounds[0]["matches"]
    assert [(m["side_a"], m["side_b"], m["venue_id"]) for m in first] == [
        ("Alpha", "Delta", "Room 101"),
        ("Bravo", "Charlie", "Room 102"),
    ]


def test_generate_without_venues(client: TestClient, tournament_with_roster):
    resp = client.post(f"/api/tournaments/{tournament_with_roster}/schedule/generate", json={"assign_venues": False})
    assert all(m["venue_id"] is None for m in matches_of(resp.json()["schedule"]))


def test_generate_with_repeats_and_shuffle(client: TestClient, tournament_with_roster):
    tid = tournament_with_roster
    body = {"repeats": 2, "shuffle": True, "seed": 11}
    first = client.post(f"/api/tournaments/{tid}/schedule/generate", json=body).json()["schedule"]
    second = client.post(f"/api/tournaments/{tid}/schedule/generate", json=body).json()["schedule"]

    assert len(first["rounds"]) == 6
    assert first == second


def test_generate_rejects_bad_input(client: TestClient, tournament_with_roster):
    tid = tournament_with_roster
    assert client.post(f"/api/tournaments/{tid}/schedule/generate", json={"repeats": 0}).status_code == 422
    resp = client.post(f"/api/tournaments/{tid}/schedule/generate", json={"side_strategy": "coin_flip"})
    assert resp.status_code == 422


def test_generate_needs_two_teams(client: TestClient):
    tid = client.post("/api/tournaments", json={"name": "Tiny"}).json()["id"]
    client.post(f"/api/tournaments/{tid}/teams", json={"name": "Solo"})

    resp = client.post(f"/api/tournaments/{tid}/schedule/generate", json={})
    assert resp.status_code == 422
    assert "At least 2 teams" in resp.json()["detail"]
    assert client.get(f"/api/tournaments/{tid}/schedule").json()["rounds"] == []


def test_auto_times_and_venue_reassignment_need_schedule(client: TestClient, tournament_with_roster):
    tid = tournament_with_roster
    assert client.post(f"/api/tournaments/{tid}/schedule/auto-times", json={}).status_code == 422
    assert client.post(f"/api/tournaments/{tid}/schedule/assign-venues", json={}).status_code == 422


def test_auto_times_uses_tournament_format(client: TestClient, generated):
    resp = client.post(f"/api/tournaments/{generated}/schedule/auto-times", json={"base_time": "13:00"})
    assert resp.status_code == 200
    rounds = resp.json()["schedule"]["rounds"]
    assert [r["start_time"] for r in rounds] == ["13:00:00", "13:50:00", "14:40:00"]


def test_reassign_venues_after_availability_change(client: TestClient, generated):
    tid = generated
    client.patch(f"/api/tournaments/{tid}/venues/Room 101", json={"available": False})

    # Existing assignments are left alone until venues are reassigned
    schedule = client.get(f"/api/tournaments/{tid}/schedule").json()
    assert matches_of(schedule)[0]["venue_id"] == "Room 101"

    resp = client.post(f"/api/tournaments/{tid}/schedule/assign-venues", json={})
    assert resp.status_code == 200
    assert {m["venue_id"] for m in matches_of(resp.json()["schedule"])} == {"Room 102"}


# -----------------------------------------------------------------------------
# Conflicts
# -----------------------------------------------------------------------------


def test_clean_schedule_has_no_conflicts(client: TestClient, generated):
    resp = client.get(f"/api/tournaments/{generated}/conflicts")
    assert resp.status_code == 200
    assert resp.json() == {"total": 0, "errors": 0, "warnings": 0, "conflicts": []}


def test_insufficient_venues_warning(client: TestClient, generated):
    client.patch(f"/api/tournaments/{generated}/venues/Room 102", json={"available": False})

    summary = client.get(f"/api/tournaments/{generated}/conflicts").json()
    assert summary["total"] == 3
    assert summary["warnings"] == 3
    assert [c["round_number"] for c in summary["conflicts"]] == [1, 2, 3]
    assert all(c["type"] == "insufficient-venues" for c in summary["conflicts"])
    assert summary["conflicts"][0]["message"] == "Round 1 has 2 matches but only 1 venues available"


def test_venue_double_booking_error(client: TestClient, generated):
    tid = generated
    client.patch(f"/api/tournaments/{tid}/matches/R01-M02", json={"venue_id": "Room 101"})
    client.post(f"/api/tournaments/{tid}/schedule/auto-times", json={"base_time": "09:00"})

    summary = client.get(f"/api/tournaments/{tid}/conflicts").json()
    assert summary["errors"] == 1
    conflict = summary["conflicts"][0]
    assert conflict["type"] == "venue-double-booked"
    assert conflict["venue_id"] == "Room 101"
    assert conflict["round_number"] == 1


def test_conflicts_are_read_only(client: TestClient, generated):
    before = client.get(f"/api/tournaments/{generated}").json()
    client.get(f"/api/tournaments/{generated}/conflicts")
    assert client.get(f"/api/tournaments/{generated}").json() == before


# -----------------------------------------------------------------------------
# Export / import / print
# -----------------------------------------------------------------------------


def test_export_import_into_new_tournament(client: TestClient, generated):
    exported = client.get(f"/api/tournaments/{generated}/schedule/export").json()
    assert exported["tournament_name"] == "Spring Invitational"
    assert exported["format"] == "pf"

    target = client.post("/api/tournaments", json={"name": "Copy"}).json()["id"]
    resp = client.post(f"/api/tournaments/{target}/schedule/import", json=exported)
    assert resp.status_code == 200
    body = resp.json()
    assert body["success"] is True
    assert body["counts"] == {"teams": 4, "venues": 2, "rounds": 3, "matches": 6}
    assert body["revision"] == 2

    copy = client.get(f"/api/tournaments/{target}").json()
    source = client.get(f"/api/tournaments/{generated}").json()
    assert copy["name"] == "Spring Invitational"
    assert copy["schedule"] == source["schedule"]
    assert copy["roster"] == source["roster"]


def test_failed_import_leaves_state_untouched(client: TestClient, generated):
    before = client.get(f"/api/tournaments/{generated}").json()

    resp = client.post(
        f"/api/tournaments/{generated}/schedule/import",
        json={"tournament_name": "Broken", "format": "pf", "rounds": "not a list"},
    )
    assert resp.status_code == 200
    assert resp.json()["success"] is False
    assert resp.json()["message"] == "'rounds' must be an array"
    assert resp.json()["revision"] == before["revision"]

    assert client.get(f"/api/tournaments/{generated}").json() == before


def test_print_listing(client: TestClient, generated):
    client.post(f"/api/tournaments/{generated}/schedule/auto-times", json={"base_time": "09:00"})

    resp = client.get(f"/api/tournaments/{generated}/schedule/print")
    assert resp.status_code == 200
    assert resp.headers["content-type"].startswith("text/plain")
    text = resp.text
    assert text.startswith("Spring Invitational\n")
    assert "Format: Public Forum | Teams: 4 | Rounds: 3" in text
    assert "Round 2 - 09:50" in text
    assert "  1. Alpha vs Delta @ Room 101" in text
