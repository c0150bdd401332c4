"""
Lifecycle Manager: round and match state transitions.

Every operation takes a Schedule and returns a new Schedule; nothing is
mutated in place. Round status is set manually by the caller and is never
derived from match completion.
"""

import logging
from datetime import time
from typing import Dict, FrozenSet, Optional, Union

from rrsched import config
from rrsched.exceptions import InvalidTransitionError, ScheduleValidationError
from rrsched.models.format_preset import FormatPreset
from rrsched.models.match import Match, MatchStatus
from rrsched.models.round import RoundStatus
from rrsched.models.schedule import Schedule

logger = logging.getLogger(__name__)

_UNSET = object()

SECONDS_PER_DAY = 24 * 60 * 60

# Allowed status transitions (completed / cancelled are terminal)
MATCH_TRANSITIONS: Dict[MatchStatus, FrozenSet[MatchStatus]] = {
    MatchStatus.scheduled: frozenset({MatchStatus.in_progress, MatchStatus.completed, MatchStatus.cancelled}),
    MatchStatus.in_progress: frozenset({MatchStatus.completed, MatchStatus.cancelled}),
    MatchStatus.completed: frozenset(),
    MatchStatus.cancelled: frozenset(),
}

ROUND_TRANSITIONS: Dict[RoundStatus, FrozenSet[RoundStatus]] = {
    RoundStatus.pending: frozenset({RoundStatus.in_progress, RoundStatus.completed}),
    RoundStatus.in_progress: frozenset({RoundStatus.completed}),
    RoundStatus.completed: frozenset(),
}


def _coerce_match_status(value: Union[str, MatchStatus]) -> MatchStatus:
    try:
        return MatchStatus(value)
    except ValueError:
        raise ScheduleValidationError(f"Invalid match status: {value}")


def _coerce_round_status(value: Union[str, RoundStatus]) -> RoundStatus:
    try:
        return RoundStatus(value)
    except ValueError:
        raise ScheduleValidationError(f"Invalid round status: {value}")


def validate_match_transition(current: MatchStatus, new: MatchStatus) -> None:
    if current == new:
        return
    if new not in MATCH_TRANSITIONS[current]:
        raise InvalidTransitionError("Match", current.value, new.value)


def validate_round_transition(current: RoundStatus, new: RoundStatus) -> None:
    if current == new:
        return
    if new not in ROUND_TRANSITIONS[current]:
        raise InvalidTransitionError("Round", current.value, new.value)


def _rebuild_match(match: Match, **changes) -> Match:
    # model_copy skips validators; rebuild so winner/side invariants are rechecked
    try:
        return Match.model_validate({**match.model_dump(), **changes})
    except ValueError as exc:
        raise ScheduleValidationError(str(exc))


# =============================================================================
# Match updates
# =============================================================================


def update_match(
    schedule: Schedule,
    match_id: str,
    *,
    status: Optional[Union[str, MatchStatus]] = None,
    venue_id=_UNSET,
    time_slot=_UNSET,
    notes: Optional[str] = None,
) -> Schedule:
    """
    Update a match's status, venue, time slot or notes.

    venue_id / time_slot accept None to clear the field; leave them out to keep
    the current value. Teams and round placement never change.
    """
    match = schedule.get_match(match_id)
    changes = {}

    if status is not None:
        new_status = _coerce_match_status(status)
        validate_match_transition(match.status, new_status)
        changes["status"] = new_status
    if venue_id is not _UNSET:
        changes["venue_id"] = venue_id
    if time_slot is not _UNSET:
        changes["time_slot"] = time_slot
    if notes is not None:
        changes["notes"] = notes

    if not changes:
        return schedule

    updated = _rebuild_match(match, **changes)
    logger.debug("Match %s updated: %s", match_id, sorted(changes))
    return schedule.replace_match(updated)


# =============================================================================
# Result recording
# =============================================================================


class ResultPolicy:
    """Precondition check applied before a winner is recorded."""

    name = "base"

    def check(self, match: Match) -> None:
        raise NotImplementedError


class PermissiveResultPolicy(ResultPolicy):
    """A winner may be recorded at any match status."""

    name = "permissive"

    def check(self, match: Match) -> None:
        return None


class StrictResultPolicy(ResultPolicy):
    """A winner may only be recorded once the match is completed."""

    name = "strict"

    def check(self, match: Match) -> None:
        if match.status != MatchStatus.completed:
            raise ScheduleValidationError(
                f"Match {match.id} is '{match.status.value}'; a winner can only be recorded on a completed match"
            )


def get_result_policy(strict: Optional[bool] = None) -> ResultPolicy:
    if strict is None:
        strict = config.STRICT_RESULTS
    return StrictResultPolicy() if strict else PermissiveResultPolicy()


def record_result(
    schedule: Schedule,
    match_id: str,
    winner_id: Optional[str],
    policy: Optional[ResultPolicy] = None,
) -> Schedule:
    """
    Record (or clear, with winner_id=None) the winner of a match.

    Raises:
        ScheduleValidationError: winner is not one of the match's teams, or the
            policy refuses the match's current status
    """
    match = schedule.get_match(match_id)

    if winner_id is not None:
        if not match.involves(winner_id):
            raise ScheduleValidationError(
                f"Winner {winner_id} is not a team in match {match_id} ({match.side_a} vs {match.side_b})"
            )
        (policy or get_result_policy()).check(match)

    updated = _rebuild_match(match, winner_id=winner_id)
    logger.info("Match %s result recorded: winner=%s", match_id, winner_id)
    return schedule.replace_match(updated)


# =============================================================================
# Round updates
# =============================================================================


def update_round(
    schedule: Schedule,
    round_number: int,
    *,
    status: Optional[Union[str, RoundStatus]] = None,
    start_time=_UNSET,
) -> Schedule:
    """
    Update a round's status and/or start time.

    Changing start_time does not touch the matches' time slots; use
    auto_assign_times for that.
    """
    rnd = schedule.get_round(round_number)
    changes = {}

    if status is not None:
        new_status = _coerce_round_status(status)
        validate_round_transition(rnd.status, new_status)
        changes["status"] = new_status
    if start_time is not _UNSET:
        changes["start_time"] = start_time

    if not changes:
        return schedule

    logger.debug("Round %d updated: %s", round_number, sorted(changes))
    return schedule.replace_round(rnd.model_copy(update=changes))


def _time_from_seconds(total_seconds: int) -> time:
    return time(total_seconds // 3600, (total_seconds % 3600) // 60, total_seconds % 60)


def auto_assign_times(schedule: Schedule, preset: FormatPreset, base_time: Optional[time] = None) -> Schedule:
    """
    Give each round a start time, walking forward from base_time by the
    preset's round + break duration. Each match's time slot is set to its
    round's start time.

    Raises:
        ScheduleValidationError: a round would start after midnight
    """
    base = base_time or config.DAY_START
    current = base.hour * 3600 + base.minute * 60 + base.second

    rounds = []
    for rnd in schedule.rounds:
        if current >= SECONDS_PER_DAY:
            raise ScheduleValidationError(
                f"Round {rnd.round_number} would start after midnight; "
                f"use an earlier base time or fewer rounds"
            )
        start = _time_from_seconds(current)
        matches = tuple(m.model_copy(update={"time_slot": start}) for m in rnd.matches)
        rounds.append(rnd.model_copy(update={"start_time": start, "matches": matches}))
        current += preset.slot_seconds

    logger.info(
        "Auto-assigned start times for %d rounds from %s (%s, %ds per slot)",
        len(rounds),
        base.strftime("%H:%M"),
        preset.key,
        preset.slot_seconds,
    )
    return schedule.model_copy(update={"rounds": tuple(rounds)})
