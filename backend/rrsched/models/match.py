from datetime import time
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, model_validator


class MatchStatus(str, Enum):
    scheduled = "scheduled"
    in_progress = "in_progress"
    completed = "completed"
    cancelled = "cancelled"


def match_code(round_number: int, match_number: int) -> str:
    """Deterministic match id: R01-M02"""
    return f"R{round_number:02d}-M{match_number:02d}"


class Match(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    round_number: int
    match_number: int  # 1-based within the round
    side_a: str  # Team id (affirmative)
    side_b: str  # Team id (negative)
    venue_id: Optional[str] = None
    time_slot: Optional[time] = None
    status: MatchStatus = MatchStatus.scheduled
    winner_id: Optional[str] = None
    notes: str = ""

    @model_validator(mode="after")
    def _check_teams(self) -> "Match":
        if self.side_a == self.side_b:
            raise ValueError(f"Match {self.id}: team {self.side_a} cannot be on both sides")
        if self.winner_id is not None and self.winner_id not in (self.side_a, self.side_b):
            raise ValueError(f"Match {self.id}: winner {self.winner_id} is not one of its teams")
        return self

    @property
    def team_ids(self) -> tuple:
        return (self.side_a, self.side_b)

    def involves(self, team_id: str) -> bool:
        return team_id in (self.side_a, self.side_b)

    def loser_id(self) -> Optional[str]:
        if self.winner_id is None:
            return None
        return self.side_b if self.winner_id == self.side_a else self.side_a
