from typing import Iterator, Optional, Tuple

from pydantic import BaseModel, ConfigDict

from rrsched.exceptions import NotFoundError
from rrsched.models.match import Match
from rrsched.models.round import Round


class Schedule(BaseModel):
    """
    A generated round-robin schedule.

    Immutable: every change goes through a helper that returns a new Schedule,
    so projections (conflicts, standings) never see a half-updated value.
    """

    model_config = ConfigDict(frozen=True)

    rounds: Tuple[Round, ...] = ()
    repeats: int = 1

    def is_empty(self) -> bool:
        return not self.rounds

    def iter_matches(self) -> Iterator[Match]:
        for rnd in self.rounds:
            yield from rnd.matches

    def match_count(self) -> int:
        return sum(len(r.matches) for r in self.rounds)

    def get_round(self, round_number: int) -> Round:
        for rnd in self.rounds:
            if rnd.round_number == round_number:
                return rnd
        raise NotFoundError(f"Round {round_number} not found")

    def find_match(self, match_id: str) -> Optional[Match]:
        for match in self.iter_matches():
            if match.id == match_id:
                return match
        return None

    def get_match(self, match_id: str) -> Match:
        match = self.find_match(match_id)
        if match is None:
            raise NotFoundError(f"Match {match_id} not found")
        return match

    def references_team(self, team_id: str) -> bool:
        return any(m.involves(team_id) for m in self.iter_matches())

    def references_venue(self, venue_id: str) -> bool:
        return any(m.venue_id == venue_id for m in self.iter_matches())

    def replace_round(self, updated: Round) -> "Schedule":
        self.get_round(updated.round_number)
        rounds = tuple(updated if r.round_number == updated.round_number else r for r in self.rounds)
        return self.model_copy(update={"rounds": rounds})

    def replace_match(self, updated: Match) -> "Schedule":
        rnd = self.get_round(updated.round_number)
        if not any(m.id == updated.id for m in rnd.matches):
            raise NotFoundError(f"Match {updated.id} not found")
        matches = tuple(updated if m.id == updated.id else m for m in rnd.matches)
        return self.replace_round(rnd.model_copy(update={"matches": matches}))
