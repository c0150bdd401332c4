from datetime import time
from enum import Enum
from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict

from rrsched.models.match import Match, MatchStatus


class RoundStatus(str, Enum):
    pending = "pending"
    in_progress = "in_progress"
    completed = "completed"


class Round(BaseModel):
    model_config = ConfigDict(frozen=True)

    round_number: int  # 1-based
    matches: Tuple[Match, ...] = ()
    start_time: Optional[time] = None
    status: RoundStatus = RoundStatus.pending

    def completed_count(self) -> int:
        return sum(1 for m in self.matches if m.status == MatchStatus.completed)

    def progress(self) -> float:
        """Share of completed matches in the round (0.0 - 1.0)"""
        if not self.matches:
            return 0.0
        return self.completed_count() / len(self.matches)
