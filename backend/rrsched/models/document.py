import datetime as dt
from typing import Dict, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

from rrsched.models.round import Round
from rrsched.models.team import Team
from rrsched.models.venue import Venue


class ScheduleDocument(BaseModel):
    """Export/import shape of a whole tournament schedule"""

    model_config = ConfigDict(frozen=True)

    tournament_name: str
    date: Optional[dt.date] = None
    format: str
    repeats: int = 1
    teams: Tuple[Team, ...] = ()
    venues: Tuple[Venue, ...] = ()
    rounds: Tuple[Round, ...] = ()


class ImportResult(BaseModel):
    """Structured outcome of an import; failures are reported, not raised"""

    success: bool
    message: str
    counts: Dict[str, int] = Field(default_factory=dict)
    document: Optional[ScheduleDocument] = None
