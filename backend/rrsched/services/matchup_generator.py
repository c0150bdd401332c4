"""
Matchup Generator: circle-method round robin.

Produces a complete round-robin pairing schedule for a roster:
1. Odd rosters are padded with a BYE placeholder; BYE pairings are dropped
2. (N'-1) rounds per repeat; position 0 is fixed and the rest rotate
3. Position i plays position N'-1-i
4. Side A / side B assignment is delegated to a SideStrategy
"""

import logging
import random
from typing import Dict, List, Optional, Sequence, Tuple

from rrsched.exceptions import ScheduleValidationError
from rrsched.models.match import Match, match_code
from rrsched.models.round import Round
from rrsched.models.schedule import Schedule
from rrsched.models.team import Team

logger = logging.getLogger(__name__)

# Padding slot for odd rosters; never materialized as a Match
BYE = None


# =============================================================================
# Side strategies
# =============================================================================


class SideStrategy:
    """
    Decides which team of a pairing takes side A.

    `tally` maps team id -> (side A count - side B count) so far; the generator
    keeps it up to date after every assignment.
    """

    name = "base"

    def assign(self, round_index: int, first: str, second: str, tally: Dict[str, int]) -> Tuple[str, str]:
        raise NotImplementedError


class RoundParitySides(SideStrategy):
    """Even round index: first of pair is side A. Odd: swapped. Not balanced per team."""

    name = "round_parity"

    def assign(self, round_index: int, first: str, second: str, tally: Dict[str, int]) -> Tuple[str, str]:
        if round_index % 2 == 0:
            return first, second
        return second, first


class BalancedSides(SideStrategy):
    """Team with the lower side-A surplus takes side A; ties fall back to round parity."""

    name = "balanced"

    def assign(self, round_index: int, first: str, second: str, tally: Dict[str, int]) -> Tuple[str, str]:
        first_surplus = tally.get(first, 0)
        second_surplus = tally.get(second, 0)
        if first_surplus < second_surplus:
            return first, second
        if second_surplus < first_surplus:
            return second, first
        return RoundParitySides().assign(round_index, first, second, tally)


SIDE_STRATEGIES = {
    RoundParitySides.name: RoundParitySides,
    BalancedSides.name: BalancedSides,
}


def get_side_strategy(name: Optional[str] = None) -> SideStrategy:
    """Look up a side strategy by name; None means the configured default."""
    if name is None:
        from rrsched import config

        name = config.SIDE_STRATEGY
    try:
        return SIDE_STRATEGIES[name]()
    except KeyError:
        allowed = ", ".join(sorted(SIDE_STRATEGIES))
        raise ScheduleValidationError(f"Unknown side strategy '{name}' (expected one of: {allowed})")


# =============================================================================
# Counting helpers
# =============================================================================


def padded_size(team_count: int) -> int:
    """Working size after BYE padding."""
    return team_count + 1 if team_count % 2 == 1 else team_count


def round_count(team_count: int, repeats: int = 1) -> int:
    """Even n: n-1 rounds per repeat. Odd n: n rounds per repeat (with BYE)."""
    if team_count < 2:
        return 0
    return (padded_size(team_count) - 1) * repeats


def matches_per_round(team_count: int) -> int:
    """Real matches in every round: floor(n / 2)."""
    return team_count // 2


# =============================================================================
# Generation
# =============================================================================


def _rotate(positions: List[Optional[Team]], rotations: int) -> List[Optional[Team]]:
    # Keep position 0, rotate the rest right (last moves to second)
    rest = positions[1:]
    shift = rotations % len(rest)
    if shift:
        rest = rest[-shift:] + rest[:-shift]
    return [positions[0]] + rest


def _validate_roster(teams: Sequence[Team], repeats: int) -> None:
    if len(teams) < 2:
        raise ScheduleValidationError(f"At least 2 teams are required to generate a schedule, got {len(teams)}")
    if repeats < 1:
        raise ScheduleValidationError(f"repeats must be at least 1, got {repeats}")

    seen = set()
    for team in teams:
        if team.id in seen:
            raise ScheduleValidationError(f"Duplicate team id '{team.id}' in roster")
        seen.add(team.id)


def generate_round_robin(
    teams: Sequence[Team],
    repeats: int = 1,
    side_strategy: Optional[SideStrategy] = None,
) -> Schedule:
    """
    Generate a full round-robin schedule.

    Args:
        teams: Roster in order; the first team holds the fixed circle position
        repeats: How many times every pair meets (R >= 1)
        side_strategy: Side A/B assignment; defaults to the configured strategy

    Returns:
        Schedule with (N'-1) * repeats rounds, every real pair met `repeats` times

    Raises:
        ScheduleValidationError: fewer than 2 teams, repeats < 1, duplicate ids
    """
    _validate_roster(teams, repeats)
    strategy = side_strategy or get_side_strategy()

    positions: List[Optional[Team]] = list(teams)
    if len(positions) % 2 == 1:
        positions.append(BYE)

    n2 = len(positions)
    half = n2 // 2
    cycle = n2 - 1
    tally: Dict[str, int] = {}

    rounds: List[Round] = []
    for round_index in range(cycle * repeats):
        round_number = round_index + 1
        rotated = _rotate(positions, round_index % cycle)

        matches: List[Match] = []
        for i in range(half):
            first, second = rotated[i], rotated[n2 - 1 - i]
            if first is BYE or second is BYE:
                continue

            side_a, side_b = strategy.assign(round_index, first.id, second.id, tally)
            tally[side_a] = tally.get(side_a, 0) + 1
            tally[side_b] = tally.get(side_b, 0) - 1

            seq = len(matches) + 1
            matches.append(
                Match(
                    id=match_code(round_number, seq),
                    round_number=round_number,
                    match_number=seq,
                    side_a=side_a,
                    side_b=side_b,
                )
            )

        logger.debug("Round %d: %d matches", round_number, len(matches))
        rounds.append(Round(round_number=round_number, matches=tuple(matches)))

    schedule = Schedule(rounds=tuple(rounds), repeats=repeats)
    logger.info(
        "Generated round robin: %d teams, %d repeats, %d rounds, %d matches (%s sides)",
        len(teams),
        repeats,
        len(rounds),
        schedule.match_count(),
        strategy.name,
    )
    return schedule


def shuffle_round_robin(
    teams: Sequence[Team],
    repeats: int = 1,
    rng: Optional[random.Random] = None,
    side_strategy: Optional[SideStrategy] = None,
) -> Schedule:
    """Regenerate from a shuffled copy of the roster. Pass a seeded Random for determinism."""
    shuffled = list(teams)
    (rng or random.Random()).shuffle(shuffled)
    return generate_round_robin(shuffled, repeats=repeats, side_strategy=side_strategy)
