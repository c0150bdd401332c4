"""
Tournament API Routes
Create a tournament, read its full state, and reset its schedule.
"""

import datetime as dt
from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel

from rrsched.models.format_preset import FORMAT_PRESETS, FormatPreset
from rrsched.models.schedule import Schedule
from rrsched.store import TournamentState, TournamentStore, get_store

router = APIRouter()


class TournamentCreateRequest(BaseModel):
    name: str = "Tournament"
    date: Optional[dt.date] = None
    format: Optional[str] = None  # Preset key; defaults to RRS_DEFAULT_FORMAT


@router.get("/formats", response_model=List[FormatPreset])
def list_formats():
    """Built-in debate format presets"""
    return list(FORMAT_PRESETS.values())


@router.post("/tournaments", response_model=TournamentState, status_code=201)
def create_tournament(request: TournamentCreateRequest, store: TournamentStore = Depends(get_store)):
    return store.create(request.name, tournament_date=request.date, format_key=request.format)


@router.get("/tournaments/{tournament_id}", response_model=TournamentState)
def get_tournament(tournament_id: int, store: TournamentStore = Depends(get_store)):
    return store.get(tournament_id)


@router.delete("/tournaments/{tournament_id}/schedule", status_code=204)
def reset_schedule(
    tournament_id: int,
    expected_revision: Optional[int] = Query(default=None),
    store: TournamentStore = Depends(get_store),
):
    """Discard the whole schedule. Rounds and matches are only ever destroyed this way (or by regenerating)."""
    store.mutate(tournament_id, lambda state: {"schedule": Schedule()}, expected_revision)
    return None
