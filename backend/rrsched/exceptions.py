"""
Scheduler Exceptions

Services raise these; route handlers translate them into HTTPException.
"""


class SchedulerError(Exception):
    """Base class for all scheduler errors"""

    pass


class ScheduleValidationError(SchedulerError):
    """Raised when a schedule operation is refused (e.g. fewer than 2 teams)"""

    pass


class RosterError(SchedulerError):
    """Raised when a roster mutation is invalid (blank name, referenced team, ...)"""

    pass


class InvalidTransitionError(SchedulerError):
    """Raised when a round or match status change is not allowed"""

    def __init__(self, kind: str, current: str, new: str):
        self.kind = kind
        self.current = current
        self.new = new
        super().__init__(f"{kind} cannot move from '{current}' to '{new}'")


class ScheduleImportError(SchedulerError):
    """Raised internally when an imported schedule document is malformed"""

    pass


class NotFoundError(SchedulerError):
    """Raised when a tournament, team, venue, round or match id is unknown"""

    pass


class RevisionConflictError(SchedulerError):
    """Raised when a caller's expected revision does not match the stored one"""

    def __init__(self, expected: int, actual: int):
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"REVISION_CONFLICT: expected revision {expected}, current revision is {actual}. Reload and retry."
        )
