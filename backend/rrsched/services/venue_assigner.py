"""
Venue Assigner

Cyclic venue distribution: within each round, the match at index i gets
available_venues[i mod len(available_venues)]. Venues are optional, so an
empty pool clears venue fields instead of raising.
"""

import logging
from typing import List, Optional, Sequence

from rrsched.models.schedule import Schedule
from rrsched.models.venue import Venue

logger = logging.getLogger(__name__)


def venue_for_index(available: Sequence[Venue], match_index: int) -> Optional[Venue]:
    """Return the venue for a 0-based match index within its round."""
    if not available:
        return None
    return available[match_index % len(available)]


def assign_venues(schedule: Schedule, venues: Sequence[Venue]) -> Schedule:
    """
    Return a copy of the schedule with venue_id populated on every match.

    Only venues flagged available are used, in roster order. Matches keep their
    status, winner and notes; only venue_id changes.
    """
    available: List[Venue] = [v for v in venues if v.available]

    rounds = []
    for rnd in schedule.rounds:
        matches = []
        for idx, match in enumerate(rnd.matches):
            venue = venue_for_index(available, idx)
            matches.append(match.model_copy(update={"venue_id": venue.id if venue else None}))
        rounds.append(rnd.model_copy(update={"matches": tuple(matches)}))

    if not available:
        logger.info("No available venues; %d matches left without a venue", schedule.match_count())
    else:
        logger.info("Assigned %d available venues across %d rounds", len(available), len(rounds))

    return schedule.model_copy(update={"rounds": tuple(rounds)})
