"""Roster builders shared by the service tests."""

from typing import List

from rrsched.models.team import Team
from rrsched.models.venue import Venue


def make_teams(*names: str) -> List[Team]:
    """Teams whose id equals their name, for readable assertions."""
    return [Team(id=name, name=name) for name in names]


def make_venues(*names: str, unavailable: tuple = ()) -> List[Venue]:
    return [Venue(id=name, name=name, available=name not in unavailable) for name in names]
