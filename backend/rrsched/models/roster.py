from typing import List, Optional, Tuple

from pydantic import BaseModel, ConfigDict

from rrsched.models.team import Team
from rrsched.models.venue import Venue


class Roster(BaseModel):
    """Teams and venues, in the order the roster editor supplied them"""

    model_config = ConfigDict(frozen=True)

    teams: Tuple[Team, ...] = ()
    venues: Tuple[Venue, ...] = ()

    def find_team(self, team_id: str) -> Optional[Team]:
        return next((t for t in self.teams if t.id == team_id), None)

    def find_venue(self, venue_id: str) -> Optional[Venue]:
        return next((v for v in self.venues if v.id == venue_id), None)

    def available_venues(self) -> List[Venue]:
        return [v for v in self.venues if v.available]
