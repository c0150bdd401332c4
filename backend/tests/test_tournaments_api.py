"""
API tests: tournaments, roster CRUD, error mapping and revision guard.
"""

from fastapi.testclient import TestClient


def test_health(client: TestClient):
    resp = client.get("/api/health")
    assert resp.status_code == 200
    assert resp.json()["status"] == "healthy"


def test_list_formats(client: TestClient):
    resp = client.get("/api/formats")
    assert resp.status_code == 200
    by_key = {f["key"]: f for f in resp.json()}
    assert set(by_key) == {"policy", "ld", "pf", "congress", "parli"}
    assert by_key["pf"]["round_duration_seconds"] == 40 * 60
    assert by_key["pf"]["break_duration_seconds"] == 10 * 60


def test_create_and_get_tournament(client: TestClient):
    resp = client.post("/api/tournaments", json={"name": "Winter Open", "date": "2025-01-18", "format": "ld"})
    assert resp.status_code == 201
    data = resp.json()
    assert data["name"] == "Winter Open"
    assert data["date"] == "2025-01-18"
    assert data["format"] == "ld"
    assert data["revision"] == 1
    assert data["schedule"]["rounds"] == []

    resp = client.get(f"/api/tournaments/{data['id']}")
    assert resp.status_code == 200
    assert resp.json() == data


def test_unknown_format_is_422(client: TestClient):
    resp = client.post("/api/tournaments", json={"name": "X", "format": "worlds"})
    assert resp.status_code == 422
    assert "Unknown format" in resp.json()["detail"]


def test_unknown_tournament_is_404(client: TestClient):
    resp = client.get("/api/tournaments/999")
    assert resp.status_code == 404
    assert "not found" in resp.json()["detail"]


def test_roster_listing_keeps_order(client: TestClient, tournament_with_roster):
    tid = tournament_with_roster
    teams = client.get(f"/api/tournaments/{tid}/teams").json()
    assert [t["id"] for t in teams] == ["Alpha", "Bravo", "Charlie", "Delta"]
    assert all(t["affiliation"] == "North HS" for t in teams)

    venues = client.get(f"/api/tournaments/{tid}/venues").json()
    assert [(v["id"], v["available"]) for v in venues] == [("Room 101", True), ("Room 102", True)]


def test_team_gets_generated_id(client: TestClient, tournament_with_roster):
    resp = client.post(f"/api/tournaments/{tournament_with_roster}/teams", json={"name": "Echo"})
    assert resp.status_code == 201
    assert resp.json()["id"]
    assert resp.json()["name"] == "Echo"


def test_blank_team_name_is_422(client: TestClient, tournament_with_roster):
    resp = client.post(f"/api/tournaments/{tournament_with_roster}/teams", json={"name": "  "})
    assert resp.status_code == 422


def test_update_and_delete_team(client: TestClient, tournament_with_roster):
    tid = tournament_with_roster
    resp = client.patch(f"/api/tournaments/{tid}/teams/Bravo", json={"name": "Bravo B"})
    assert resp.status_code == 200
    assert resp.json()["name"] == "Bravo B"

    assert client.delete(f"/api/tournaments/{tid}/teams/Bravo").status_code == 204
    assert client.delete(f"/api/tournaments/{tid}/teams/Bravo").status_code == 404


def test_toggle_venue_availability(client: TestClient, tournament_with_roster):
    tid = tournament_with_roster
    resp = client.patch(f"/api/tournaments/{tid}/venues/Room 102", json={"available": False})
    assert resp.status_code == 200
    assert resp.json()["available"] is False


def test_referenced_team_cannot_be_deleted(client: TestClient, tournament_with_roster):
    tid = tournament_with_roster
    assert client.post(f"/api/tournaments/{tid}/schedule/generate", json={}).status_code == 200

    resp = client.delete(f"/api/tournaments/{tid}/teams/Alpha")
    assert resp.status_code == 422

    assert client.delete(f"/api/tournaments/{tid}/schedule").status_code == 204
    assert client.delete(f"/api/tournaments/{tid}/teams/Alpha").status_code == 204


def test_stale_expected_revision_is_409(client: TestClient, tournament_with_roster):
    tid = tournament_with_roster
    current = client.get(f"/api/tournaments/{tid}").json()["revision"]

    resp = client.post(f"/api/tournaments/{tid}/teams", json={"name": "Echo", "expected_revision": current})
    assert resp.status_code == 201

    resp = client.post(f"/api/tournaments/{tid}/teams", json={"name": "Foxtrot", "expected_revision": current})
    assert resp.status_code == 409
    assert "REVISION_CONFLICT" in resp.json()["detail"]

    names = [t["name"] for t in client.get(f"/api/tournaments/{tid}/teams").json()]
    assert "Foxtrot" not in names


def test_reset_schedule_with_stale_revision(client: TestClient, tournament_with_roster):
    tid = tournament_with_roster
    resp = client.delete(f"/api/tournaments/{tid}/schedule", params={"expected_revision": 1})
    assert resp.status_code == 409
