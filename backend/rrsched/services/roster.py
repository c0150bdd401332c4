"""
Roster operations: add / update / remove teams and venues.

Roster values are immutable; every operation returns a new Roster. Removing a
team or venue that an existing schedule references is refused: the schedule
must be regenerated (or reset) first.
"""

import uuid
from typing import List, Optional

from rrsched.exceptions import NotFoundError, RosterError
from rrsched.models.roster import Roster
from rrsched.models.schedule import Schedule
from rrsched.models.team import Team
from rrsched.models.venue import Venue


def new_id() -> str:
    return uuid.uuid4().hex[:12]


def _require_name(name: str, kind: str) -> str:
    cleaned = (name or "").strip()
    if not cleaned:
        raise RosterError(f"{kind} name cannot be blank")
    return cleaned


# ============================================================================
# Teams
# ============================================================================


def add_team(roster: Roster, name: str, affiliation: Optional[str] = None, team_id: Optional[str] = None) -> Roster:
    team_id = team_id or new_id()
    if roster.find_team(team_id):
        raise RosterError(f"Team with id '{team_id}' already exists")

    team = Team(id=team_id, name=_require_name(name, "Team"), affiliation=affiliation)
    return roster.model_copy(update={"teams": roster.teams + (team,)})


def update_team(
    roster: Roster, team_id: str, name: Optional[str] = None, affiliation: Optional[str] = None
) -> Roster:
    """Only display fields change; the id stays stable so schedules keep resolving."""
    team = roster.find_team(team_id)
    if team is None:
        raise NotFoundError(f"Team {team_id} not found")

    changes = {}
    if name is not None:
        changes["name"] = _require_name(name, "Team")
    if affiliation is not None:
        changes["affiliation"] = affiliation.strip() or None

    updated = team.model_copy(update=changes)
    teams = tuple(updated if t.id == team_id else t for t in roster.teams)
    return roster.model_copy(update={"teams": teams})


def remove_team(roster: Roster, team_id: str, schedule: Optional[Schedule] = None) -> Roster:
    if roster.find_team(team_id) is None:
        raise NotFoundError(f"Team {team_id} not found")
    if schedule is not None and schedule.references_team(team_id):
        raise RosterError(
            f"Team {team_id} is referenced by the current schedule; regenerate or reset the schedule first"
        )
    return roster.model_copy(update={"teams": tuple(t for t in roster.teams if t.id != team_id)})


def schedulable_teams(roster: Roster) -> List[Team]:
    """Teams eligible for generation, in roster order."""
    return [t for t in roster.teams if t.name]


# ============================================================================
# Venues
# ============================================================================


def add_venue(roster: Roster, name: str, available: bool = True, venue_id: Optional[str] = None) -> Roster:
    venue_id = venue_id or new_id()
    if roster.find_venue(venue_id):
        raise RosterError(f"Venue with id '{venue_id}' already exists")

    venue = Venue(id=venue_id, name=_require_name(name, "Venue"), available=available)
    return roster.model_copy(update={"venues": roster.venues + (venue,)})


def update_venue(
    roster: Roster, venue_id: str, name: Optional[str] = None, available: Optional[bool] = None
) -> Roster:
    """Availability changes are not applied retroactively to assigned matches."""
    venue = roster.find_venue(venue_id)
    if venue is None:
        raise NotFoundError(f"Venue {venue_id} not found")

    changes = {}
    if name is not None:
        changes["name"] = _require_name(name, "Venue")
    if available is not None:
        changes["available"] = available

    updated = venue.model_copy(update=changes)
    venues = tuple(updated if v.id == venue_id else v for v in roster.venues)
    return roster.model_copy(update={"venues": venues})


def remove_venue(roster: Roster, venue_id: str, schedule: Optional[Schedule] = None) -> Roster:
    if roster.find_venue(venue_id) is None:
        raise NotFoundError(f"Venue {venue_id} not found")
    if schedule is not None and schedule.references_venue(venue_id):
        raise RosterError(
            f"Venue {venue_id} is assigned in the current schedule; reassign venues or reset the schedule first"
        )
    return roster.model_copy(update={"venues": tuple(v for v in roster.venues if v.id != venue_id)})
