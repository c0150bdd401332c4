"""
Read-only projections: conflict report and standings.
Both are recomputed on every request and never stored.
"""

from typing import List

from fastapi import APIRouter, Depends

from rrsched.models.conflict import ConflictSummary
from rrsched.models.standing import Standing
from rrsched.services.conflict_detector import summarize_conflicts
from rrsched.services.standings import compute_standings
from rrsched.store import TournamentStore, get_store

router = APIRouter()


@router.get("/tournaments/{tournament_id}/conflicts", response_model=ConflictSummary)
def get_conflicts(tournament_id: int, store: TournamentStore = Depends(get_store)):
    """
    Advisory conflict report for the current schedule.

    Ordered by round, then team double-booking, venue double-booking,
    insufficient venues.
    """
    state = store.get(tournament_id)
    return summarize_conflicts(state.schedule, state.roster.teams, state.roster.venues)


@router.get("/tournaments/{tournament_id}/standings", response_model=List[Standing])
def get_standings(tournament_id: int, store: TournamentStore = Depends(get_store)):
    """Wins desc, losses asc; full ties keep roster order."""
    state = store.get(tournament_id)
    return compute_standings(state.schedule, state.roster.teams)
