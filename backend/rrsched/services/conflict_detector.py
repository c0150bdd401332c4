"""
Conflict Detector

Pure deterministic scan of a schedule for structural problems. This service:
- Takes only the schedule, teams and venues as input
- Does NOT mutate anything (conflicts are advisory, never enforced)
- Returns conflicts in round order, then check order within a round
"""

import logging
from collections import defaultdict
from typing import Dict, List, Sequence, Tuple

from rrsched.models.conflict import Conflict, ConflictSeverity, ConflictSummary, ConflictType
from rrsched.models.round import Round
from rrsched.models.schedule import Schedule
from rrsched.models.team import Team
from rrsched.models.venue import Venue

logger = logging.getLogger(__name__)


class ConflictDetector:
    """
    Per-round checks, in this order:
    1. Team double-booking (error)
    2. Venue double-booking at the same time slot (error, only when the round has a start time)
    3. More matches than available venues (warning, skipped when no venues exist at all)
    """

    def compute(self, schedule: Schedule, teams: Sequence[Team], venues: Sequence[Venue]) -> List[Conflict]:
        team_names = {t.id: t.name for t in teams}
        venue_names = {v.id: v.name for v in venues}
        available_count = sum(1 for v in venues if v.available)

        conflicts: List[Conflict] = []
        for rnd in schedule.rounds:
            conflicts.extend(self._team_double_bookings(rnd, team_names))
            conflicts.extend(self._venue_double_bookings(rnd, venue_names))
            conflicts.extend(self._insufficient_venues(rnd, len(venues), available_count))

        logger.debug("Conflict scan: %d rounds, %d conflicts", len(schedule.rounds), len(conflicts))
        return conflicts

    # ------------------------------------------------------------------------
    # Checks
    # ------------------------------------------------------------------------

    def _team_double_bookings(self, rnd: Round, team_names: Dict[str, str]) -> List[Conflict]:
        appearances: Dict[str, int] = defaultdict(int)
        for match in rnd.matches:
            for team_id in match.team_ids:
                appearances[team_id] += 1

        # One conflict per offending team, in first-appearance order
        conflicts = []
        for team_id, count in appearances.items():
            if count < 2:
                continue
            name = team_names.get(team_id, team_id)
            conflicts.append(
                Conflict(
                    type=ConflictType.team_double_booked,
                    severity=ConflictSeverity.error,
                    round_number=rnd.round_number,
                    team_id=team_id,
                    message=f'Team "{name}" has {count} matches in Round {rnd.round_number}',
                )
            )
        return conflicts

    def _venue_double_bookings(self, rnd: Round, venue_names: Dict[str, str]) -> List[Conflict]:
        if rnd.start_time is None:
            return []

        groups: Dict[Tuple[str, object], int] = defaultdict(int)
        for match in rnd.matches:
            if match.venue_id and match.time_slot is not None:
                groups[(match.venue_id, match.time_slot)] += 1

        conflicts = []
        for (venue_id, slot), count in groups.items():
            if count < 2:
                continue
            name = venue_names.get(venue_id, venue_id)
            conflicts.append(
                Conflict(
                    type=ConflictType.venue_double_booked,
                    severity=ConflictSeverity.error,
                    round_number=rnd.round_number,
                    venue_id=venue_id,
                    message=(
                        f'Venue "{name}" is double-booked in Round {rnd.round_number} '
                        f"({count} matches at {slot.strftime('%H:%M')})"
                    ),
                )
            )
        return conflicts

    def _insufficient_venues(self, rnd: Round, venue_count: int, available_count: int) -> List[Conflict]:
        # Skipped only when no venues are configured at all; a configured pool with
        # every venue unavailable still warns
        if venue_count == 0 or len(rnd.matches) <= available_count:
            return []
        return [
            Conflict(
                type=ConflictType.insufficient_venues,
                severity=ConflictSeverity.warning,
                round_number=rnd.round_number,
                message=(
                    f"Round {rnd.round_number} has {len(rnd.matches)} matches "
                    f"but only {available_count} venues available"
                ),
            )
        ]


def detect_conflicts(schedule: Schedule, teams: Sequence[Team], venues: Sequence[Venue]) -> List[Conflict]:
    return ConflictDetector().compute(schedule, teams, venues)


def summarize_conflicts(schedule: Schedule, teams: Sequence[Team], venues: Sequence[Venue]) -> ConflictSummary:
    return ConflictSummary.from_conflicts(detect_conflicts(schedule, teams, venues))
