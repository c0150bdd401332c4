"""
In-memory tournament store.

Holds one TournamentState per tournament. Writers are serialized with a lock
and every mutation bumps a monotonically increasing revision; callers that
pass expected_revision get RevisionConflictError if someone else wrote first.
Durable storage is not part of this service.
"""

import datetime as dt
import logging
import threading
from typing import Callable, Dict, Iterator, Optional

from pydantic import BaseModel, ConfigDict

from rrsched import config
from rrsched.exceptions import NotFoundError, RevisionConflictError, ScheduleValidationError
from rrsched.models.format_preset import FORMAT_PRESETS, FormatPreset
from rrsched.models.roster import Roster
from rrsched.models.schedule import Schedule

logger = logging.getLogger(__name__)


class TournamentState(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: int
    name: str
    date: Optional[dt.date] = None
    format: str
    roster: Roster = Roster()
    schedule: Schedule = Schedule()
    revision: int = 1

    @property
    def preset(self) -> FormatPreset:
        return FORMAT_PRESETS[self.format]


def require_format(format_key: str) -> str:
    if format_key not in FORMAT_PRESETS:
        allowed = ", ".join(FORMAT_PRESETS)
        raise ScheduleValidationError(f"Unknown format '{format_key}' (expected one of: {allowed})")
    return format_key


class TournamentStore:
    def __init__(self):
        self._lock = threading.RLock()
        self._tournaments: Dict[int, TournamentState] = {}
        self._next_id = 1

    def create(
        self, name: str, tournament_date: Optional[dt.date] = None, format_key: Optional[str] = None
    ) -> TournamentState:
        format_key = require_format(format_key or config.DEFAULT_FORMAT)
        with self._lock:
            state = TournamentState(id=self._next_id, name=name, date=tournament_date, format=format_key)
            self._tournaments[state.id] = state
            self._next_id += 1
        logger.info("Tournament %d created: %s (%s)", state.id, name, format_key)
        return state

    def get(self, tournament_id: int) -> TournamentState:
        state = self._tournaments.get(tournament_id)
        if state is None:
            raise NotFoundError(f"Tournament {tournament_id} not found")
        return state

    def __iter__(self) -> Iterator[TournamentState]:
        return iter(list(self._tournaments.values()))

    def mutate(
        self,
        tournament_id: int,
        change: Callable[[TournamentState], dict],
        expected_revision: Optional[int] = None,
    ) -> TournamentState:
        """
        Apply `change` (state -> dict of field updates) under the write lock.

        Raises:
            NotFoundError: unknown tournament
            RevisionConflictError: expected_revision is stale
        """
        with self._lock:
            current = self.get(tournament_id)
            if expected_revision is not None and expected_revision != current.revision:
                raise RevisionConflictError(expected_revision, current.revision)

            updates = change(current)
            updated = current.model_copy(update={**updates, "revision": current.revision + 1})
            self._tournaments[tournament_id] = updated

        logger.debug("Tournament %d now at revision %d (%s)", tournament_id, updated.revision, sorted(updates))
        return updated


_store = TournamentStore()


def get_store() -> TournamentStore:
    """FastAPI dependency; tests override it with a fresh store"""
    return _store
