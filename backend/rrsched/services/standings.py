"""
Standings Calculator

Derived, recomputed-on-demand view over completed matches. Only matches with
status "completed" and a recorded winner count.
"""

from typing import Callable, Dict, List, Optional, Sequence

from rrsched.models.match import MatchStatus
from rrsched.models.schedule import Schedule
from rrsched.models.standing import Standing
from rrsched.models.team import Team

SortKey = Callable[[Standing], tuple]


def wins_then_losses(standing: Standing) -> tuple:
    """Default ordering: wins descending, then losses ascending. No further tiebreak."""
    return (-standing.wins, standing.losses)


class StandingsCalculator:
    """
    Aggregate win/loss records per team and rank them.

    sort_key is pluggable so a tiebreak can be added without touching the
    aggregation. Sorting is stable: full ties keep roster order.
    """

    def __init__(self, sort_key: Optional[SortKey] = None):
        self.sort_key = sort_key or wins_then_losses

    def compute(self, schedule: Schedule, teams: Sequence[Team]) -> List[Standing]:
        stats: Dict[str, Dict[str, int]] = {
            t.id: {"wins": 0, "losses": 0, "side_a_wins": 0, "side_b_wins": 0, "total_matches": 0} for t in teams
        }

        for match in schedule.iter_matches():
            if match.status != MatchStatus.completed or match.winner_id is None:
                continue

            for team_id, side_key in ((match.side_a, "side_a_wins"), (match.side_b, "side_b_wins")):
                row = stats.get(team_id)
                if row is None:
                    continue
                row["total_matches"] += 1
                if match.winner_id == team_id:
                    row["wins"] += 1
                    row[side_key] += 1
                else:
                    row["losses"] += 1

        unranked = [Standing(team=t, **stats[t.id]) for t in teams]
        ordered = sorted(unranked, key=self.sort_key)
        return [s.model_copy(update={"rank": idx}) for idx, s in enumerate(ordered, start=1)]


def compute_standings(
    schedule: Schedule, teams: Sequence[Team], sort_key: Optional[SortKey] = None
) -> List[Standing]:
    return StandingsCalculator(sort_key).compute(schedule, teams)
