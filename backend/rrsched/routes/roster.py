"""
Roster API Routes
CRUD for the teams and venues of a tournament.

Roster edits never alter an already-generated schedule; removing a team or
venue the schedule still references is refused.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel

from rrsched.models.team import Team
from rrsched.models.venue import Venue
from rrsched.services import roster as roster_ops
from rrsched.store import TournamentStore, get_store

router = APIRouter()


# ============================================================================
# Request Models
# ============================================================================


class TeamCreateRequest(BaseModel):
    name: str
    affiliation: Optional[str] = None
    id: Optional[str] = None
    expected_revision: Optional[int] = None


class TeamUpdateRequest(BaseModel):
    name: Optional[str] = None
    affiliation: Optional[str] = None
    expected_revision: Optional[int] = None


class VenueCreateRequest(BaseModel):
    name: str
    available: bool = True
    id: Optional[str] = None
    expected_revision: Optional[int] = None


class VenueUpdateRequest(BaseModel):
    name: Optional[str] = None
    available: Optional[bool] = None
    expected_revision: Optional[int] = None


# ============================================================================
# Teams
# ============================================================================


@router.get("/tournaments/{tournament_id}/teams", response_model=List[Team])
def get_teams(tournament_id: int, store: TournamentStore = Depends(get_store)):
    """Teams in roster order (the order generation uses)"""
    return list(store.get(tournament_id).roster.teams)


@router.post("/tournaments/{tournament_id}/teams", response_model=Team, status_code=201)
def create_team(tournament_id: int, request: TeamCreateRequest, store: TournamentStore = Depends(get_store)):
    team_id = request.id or roster_ops.new_id()
    state = store.mutate(
        tournament_id,
        lambda s: {"roster": roster_ops.add_team(s.roster, request.name, request.affiliation, team_id=team_id)},
        request.expected_revision,
    )
    return state.roster.find_team(team_id)


@router.patch("/tournaments/{tournament_id}/teams/{team_id}", response_model=Team)
def update_team(
    tournament_id: int, team_id: str, request: TeamUpdateRequest, store: TournamentStore = Depends(get_store)
):
    state = store.mutate(
        tournament_id,
        lambda s: {"roster": roster_ops.update_team(s.roster, team_id, request.name, request.affiliation)},
        request.expected_revision,
    )
    return state.roster.find_team(team_id)


@router.delete("/tournaments/{tournament_id}/teams/{team_id}", status_code=204)
def delete_team(
    tournament_id: int,
    team_id: str,
    expected_revision: Optional[int] = Query(default=None),
    store: TournamentStore = Depends(get_store),
):
    store.mutate(
        tournament_id,
        lambda s: {"roster": roster_ops.remove_team(s.roster, team_id, s.schedule)},
        expected_revision,
    )
    return None


# ============================================================================
# Venues
# ============================================================================


@router.get("/tournaments/{tournament_id}/venues", response_model=List[Venue])
def get_venues(tournament_id: int, store: TournamentStore = Depends(get_store)):
    return list(store.get(tournament_id).roster.venues)


@router.post("/tournaments/{tournament_id}/venues", response_model=Venue, status_code=201)
def create_venue(tournament_id: int, request: VenueCreateRequest, store: TournamentStore = Depends(get_store)):
    venue_id = request.id or roster_ops.new_id()
    state = store.mutate(
        tournament_id,
        lambda s: {"roster": roster_ops.add_venue(s.roster, request.name, request.available, venue_id=venue_id)},
        request.expected_revision,
    )
    return state.roster.find_venue(venue_id)


@router.patch("/tournaments/{tournament_id}/venues/{venue_id}", response_model=Venue)
def update_venue(
    tournament_id: int, venue_id: str, request: VenueUpdateRequest, store: TournamentStore = Depends(get_store)
):
    """Toggle availability or rename. Already-assigned matches keep their venue."""
    state = store.mutate(
        tournament_id,
        lambda s: {"roster": roster_ops.update_venue(s.roster, venue_id, request.name, request.available)},
        request.expected_revision,
    )
    return state.roster.find_venue(venue_id)


@router.delete("/tournaments/{tournament_id}/venues/{venue_id}", status_code=204)
def delete_venue(
    tournament_id: int,
    venue_id: str,
    expected_revision: Optional[int] = Query(default=None),
    store: TournamentStore = Depends(get_store),
):
    store.mutate(
        tournament_id,
        lambda s: {"roster": roster_ops.remove_venue(s.roster, venue_id, s.schedule)},
        expected_revision,
    )
    return None
