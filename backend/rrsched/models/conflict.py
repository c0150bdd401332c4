"""
Conflict Models

Conflicts are detection results, recomputed on every call and never stored.
"""

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict


class ConflictType(str, Enum):
    team_double_booked = "team-double-booked"
    venue_double_booked = "venue-double-booked"
    insufficient_venues = "insufficient-venues"


class ConflictSeverity(str, Enum):
    error = "error"  # Structurally invalid (double-booking)
    warning = "warning"  # Capacity shortfall


class Conflict(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: ConflictType
    severity: ConflictSeverity
    round_number: int
    message: str
    team_id: Optional[str] = None
    venue_id: Optional[str] = None


class ConflictSummary(BaseModel):
    """Counts for the schedule status banner"""

    total: int
    errors: int
    warnings: int
    conflicts: List[Conflict]

    @classmethod
    def from_conflicts(cls, conflicts: List[Conflict]) -> "ConflictSummary":
        errors = sum(1 for c in conflicts if c.severity == ConflictSeverity.error)
        warnings = sum(1 for c in conflicts if c.severity == ConflictSeverity.warning)
        return cls(total=len(conflicts), errors=errors, warnings=warnings, conflicts=list(conflicts))
