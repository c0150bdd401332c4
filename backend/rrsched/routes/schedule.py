"""
Schedule API Routes
Generate / shuffle, venue and time assignment, export / import, printable listing.
"""

import random
from datetime import time
from typing import Any, Dict, Optional

from fastapi import APIRouter, Body, Depends
from fastapi.responses import PlainTextResponse
from pydantic import BaseModel, Field

from rrsched.exceptions import ScheduleValidationError
from rrsched.models.document import ScheduleDocument
from rrsched.models.schedule import Schedule
from rrsched.services.lifecycle import auto_assign_times
from rrsched.services.matchup_generator import generate_round_robin, get_side_strategy, shuffle_round_robin
from rrsched.services.roster import schedulable_teams
from rrsched.services.schedule_io import (
    build_document,
    document_roster,
    document_schedule,
    import_document,
    render_listing,
)
from rrsched.services.venue_assigner import assign_venues
from rrsched.store import TournamentState, TournamentStore, get_store

router = APIRouter()


# ============================================================================
# Request/Response Models
# ============================================================================


class GenerateRequest(BaseModel):
    repeats: int = Field(default=1, ge=1)
    shuffle: bool = False
    seed: Optional[int] = None  # Only used with shuffle=True
    side_strategy: Optional[str] = None  # "round_parity" | "balanced"; default from config
    assign_venues: bool = True
    expected_revision: Optional[int] = None


class RevisionRequest(BaseModel):
    expected_revision: Optional[int] = None


class AutoTimesRequest(BaseModel):
    base_time: Optional[time] = None  # Defaults to RRS_DAY_START
    expected_revision: Optional[int] = None


class ImportResponse(BaseModel):
    success: bool
    message: str
    counts: Dict[str, int] = {}
    revision: int


def _document(state: TournamentState) -> ScheduleDocument:
    return build_document(state.name, state.roster, state.schedule, state.format, state.date)


def _require_schedule(state: TournamentState) -> None:
    if state.schedule.is_empty():
        raise ScheduleValidationError("No schedule has been generated yet")


# ============================================================================
# Generation
# ============================================================================


@router.post("/tournaments/{tournament_id}/schedule/generate", response_model=TournamentState)
def generate_schedule(tournament_id: int, request: GenerateRequest, store: TournamentStore = Depends(get_store)):
    """
    Generate (or shuffle) a fresh round-robin schedule, replacing any existing one.

    Venues are auto-assigned from the available pool unless assign_venues=False.
    """
    strategy = get_side_strategy(request.side_strategy)

    def change(state: TournamentState) -> dict:
        teams = schedulable_teams(state.roster)
        if request.shuffle:
            schedule = shuffle_round_robin(
                teams, repeats=request.repeats, rng=random.Random(request.seed), side_strategy=strategy
            )
        else:
            schedule = generate_round_robin(teams, repeats=request.repeats, side_strategy=strategy)
        if request.assign_venues:
            schedule = assign_venues(schedule, state.roster.venues)
        return {"schedule": schedule}

    return store.mutate(tournament_id, change, request.expected_revision)


@router.post("/tournaments/{tournament_id}/schedule/assign-venues", response_model=TournamentState)
def assign_schedule_venues(tournament_id: int, request: RevisionRequest, store: TournamentStore = Depends(get_store)):
    def change(state: TournamentState) -> dict:
        _require_schedule(state)
        return {"schedule": assign_venues(state.schedule, state.roster.venues)}

    return store.mutate(tournament_id, change, request.expected_revision)


@router.post("/tournaments/{tournament_id}/schedule/auto-times", response_model=TournamentState)
def auto_assign_schedule_times(
    tournament_id: int, request: AutoTimesRequest, store: TournamentStore = Depends(get_store)
):
    """Walk round start times forward using the tournament format's round + break duration."""

    def change(state: TournamentState) -> dict:
        _require_schedule(state)
        return {"schedule": auto_assign_times(state.schedule, state.preset, request.base_time)}

    return store.mutate(tournament_id, change, request.expected_revision)


@router.get("/tournaments/{tournament_id}/schedule", response_model=Schedule)
def get_schedule(tournament_id: int, store: TournamentStore = Depends(get_store)):
    return store.get(tournament_id).schedule


# ============================================================================
# Export / Import / Print
# ============================================================================


@router.get("/tournaments/{tournament_id}/schedule/export", response_model=ScheduleDocument)
def export_schedule(tournament_id: int, store: TournamentStore = Depends(get_store)):
    return _document(store.get(tournament_id))


@router.post("/tournaments/{tournament_id}/schedule/import", response_model=ImportResponse)
def import_schedule(
    tournament_id: int,
    payload: Any = Body(...),
    store: TournamentStore = Depends(get_store),
):
    """
    Replace the tournament's roster and schedule with an exported document.

    Bad documents return success=false and leave the current state untouched.
    """
    current = store.get(tournament_id)
    result = import_document(payload)
    if not result.success:
        return ImportResponse(success=False, message=result.message, revision=current.revision)

    document = result.document
    state = store.mutate(
        tournament_id,
        lambda s: {
            "name": document.tournament_name,
            "date": document.date,
            "format": document.format,
            "roster": document_roster(document),
            "schedule": document_schedule(document),
        },
    )
    return ImportResponse(success=True, message=result.message, counts=result.counts, revision=state.revision)


@router.get("/tournaments/{tournament_id}/schedule/print", response_class=PlainTextResponse)
def print_schedule(tournament_id: int, store: TournamentStore = Depends(get_store)):
    return render_listing(_document(store.get(tournament_id)))
