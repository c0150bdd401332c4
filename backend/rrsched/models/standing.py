from pydantic import BaseModel, ConfigDict, computed_field

from rrsched.models.team import Team


class Standing(BaseModel):
    model_config = ConfigDict(frozen=True)

    team: Team
    wins: int = 0
    losses: int = 0
    side_a_wins: int = 0
    side_b_wins: int = 0
    total_matches: int = 0
    rank: int = 0

    @computed_field
    @property
    def win_pct(self) -> float:
        if self.total_matches == 0:
            return 0.0
        return round(self.wins / self.total_matches * 100, 1)
