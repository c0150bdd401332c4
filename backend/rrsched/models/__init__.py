from rrsched.models.conflict import Conflict, ConflictSeverity, ConflictSummary, ConflictType
from rrsched.models.document import ImportResult, ScheduleDocument
from rrsched.models.format_preset import FORMAT_PRESETS, FormatPreset
from rrsched.models.match import Match, MatchStatus, match_code
from rrsched.models.roster import Roster
from rrsched.models.round import Round, RoundStatus
from rrsched.models.schedule import Schedule
from rrsched.models.standing import Standing
from rrsched.models.team import Team
from rrsched.models.venue import Venue

__all__ = [
    "Team",
    "Venue",
    "Roster",
    "Match",
    "MatchStatus",
    "match_code",
    "Round",
    "RoundStatus",
    "Schedule",
    "Conflict",
    "ConflictType",
    "ConflictSeverity",
    "ConflictSummary",
    "Standing",
    "FormatPreset",
    "FORMAT_PRESETS",
    "ScheduleDocument",
    "ImportResult",
]
