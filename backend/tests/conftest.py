import pytest
from fastapi.testclient import TestClient

from rrsched.main import app
from rrsched.store import TournamentStore, get_store


@pytest.fixture(name="store")
def store_fixture() -> TournamentStore:
    """Fresh in-memory store per test"""
    return TournamentStore()


@pytest.fixture(name="client")
def client_fixture(store: TournamentStore):
    """Test client with get_store overridden BEFORE the client is created"""
    app.dependency_overrides[get_store] = lambda: store

    with TestClient(app) as client:
        yield client

    app.dependency_overrides.clear()


@pytest.fixture
def tournament_with_roster(client: TestClient):
    """Tournament with 4 teams and 2 venues (ids are the names)"""
    resp = client.post("/api/tournaments", json={"name": "Spring Invitational", "format": "pf"})
    assert resp.status_code == 201
    tid = resp.json()["id"]

    for name in ["Alpha", "Bravo", "Charlie", "Delta"]:
        resp = client.post(f"/api/tournaments/{tid}/teams", json={"id": name, "name": name, "affiliation": "North HS"})
        assert resp.status_code == 201
    for name in ["Room 101", "Room 102"]:
        resp = client.post(f"/api/tournaments/{tid}/venues", json={"id": name, "name": name})
        assert resp.status_code == 201

    return tid
