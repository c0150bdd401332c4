"""
Runtime: match / round status, venue and time edits, result recording.
Matches and rounds are never created or deleted here; only their per-field state changes.
"""

from datetime import time
from typing import Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from rrsched.exceptions import NotFoundError
from rrsched.models.match import Match, MatchStatus
from rrsched.models.round import Round, RoundStatus
from rrsched.services.lifecycle import record_result, update_match, update_round
from rrsched.store import TournamentState, TournamentStore, get_store

router = APIRouter()


class MatchUpdateRequest(BaseModel):
    status: Optional[MatchStatus] = None
    venue_id: Optional[str] = None  # Explicit null clears the venue
    time_slot: Optional[time] = None  # Explicit null clears the slot
    notes: Optional[str] = None
    expected_revision: Optional[int] = None


class MatchResultRequest(BaseModel):
    winner_id: Optional[str] = None  # null clears the recorded winner
    expected_revision: Optional[int] = None


class RoundUpdateRequest(BaseModel):
    status: Optional[RoundStatus] = None
    start_time: Optional[time] = None  # Explicit null clears the start time
    expected_revision: Optional[int] = None


class MatchStateResponse(BaseModel):
    match: Match
    revision: int


class RoundStateResponse(BaseModel):
    round: Round
    completed_matches: int
    progress: float  # 0.0 - 1.0
    revision: int


@router.patch("/tournaments/{tournament_id}/matches/{match_id}", response_model=MatchStateResponse)
def patch_match(
    tournament_id: int, match_id: str, payload: MatchUpdateRequest, store: TournamentStore = Depends(get_store)
) -> MatchStateResponse:
    """
    Update match status / venue / time slot / notes.

    Allowed status moves: scheduled -> in_progress -> completed,
    scheduled -> completed, scheduled|in_progress -> cancelled.
    """
    # Only forward fields the client actually sent so null can mean "clear"
    sent = payload.model_fields_set
    optional = {key: getattr(payload, key) for key in ("venue_id", "time_slot") if key in sent}

    def change(state: TournamentState) -> dict:
        venue_id = optional.get("venue_id")
        if venue_id is not None and state.roster.find_venue(venue_id) is None:
            raise NotFoundError(f"Venue {venue_id} not found")
        return {
            "schedule": update_match(
                state.schedule, match_id, status=payload.status, notes=payload.notes, **optional
            )
        }

    state = store.mutate(tournament_id, change, payload.expected_revision)
    return MatchStateResponse(match=state.schedule.get_match(match_id), revision=state.revision)


@router.post("/tournaments/{tournament_id}/matches/{match_id}/result", response_model=MatchStateResponse)
def post_match_result(
    tournament_id: int, match_id: str, payload: MatchResultRequest, store: TournamentStore = Depends(get_store)
) -> MatchStateResponse:
    """Record the winner. Whether the match must be completed first depends on RRS_STRICT_RESULTS."""
    state = store.mutate(
        tournament_id,
        lambda s: {"schedule": record_result(s.schedule, match_id, payload.winner_id)},
        payload.expected_revision,
    )
    return MatchStateResponse(match=state.schedule.get_match(match_id), revision=state.revision)


@router.patch("/tournaments/{tournament_id}/rounds/{round_number}", response_model=RoundStateResponse)
def patch_round(
    tournament_id: int, round_number: int, payload: RoundUpdateRequest, store: TournamentStore = Depends(get_store)
) -> RoundStateResponse:
    """Set round status (pending -> in_progress -> completed) or start time. Match time slots are not touched."""
    optional = {"start_time": payload.start_time} if "start_time" in payload.model_fields_set else {}

    state = store.mutate(
        tournament_id,
        lambda s: {"schedule": update_round(s.schedule, round_number, status=payload.status, **optional)},
        payload.expected_revision,
    )
    rnd = state.schedule.get_round(round_number)
    return RoundStateResponse(
        round=rnd, completed_matches=rnd.completed_count(), progress=rnd.progress(), revision=state.revision
    )
