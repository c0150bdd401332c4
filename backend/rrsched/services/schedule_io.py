"""
Schedule document export / import and the printable listing.

Import never raises on bad input: it returns an ImportResult with
success=False so callers can show a status banner, and the caller's current
schedule is left untouched.
"""

import json
import logging
from datetime import date
from typing import Any, Dict, List, Mapping, Optional, Union

from pydantic import ValidationError

from rrsched.exceptions import ScheduleImportError
from rrsched.models.document import ImportResult, ScheduleDocument
from rrsched.models.format_preset import FORMAT_PRESETS
from rrsched.models.roster import Roster
from rrsched.models.schedule import Schedule

logger = logging.getLogger(__name__)

ARRAY_FIELDS = ("teams", "venues", "rounds")


def build_document(
    tournament_name: str,
    roster: Roster,
    schedule: Schedule,
    format_key: str,
    tournament_date: Optional[date] = None,
) -> ScheduleDocument:
    return ScheduleDocument(
        tournament_name=tournament_name,
        date=tournament_date,
        format=format_key,
        repeats=schedule.repeats,
        teams=roster.teams,
        venues=roster.venues,
        rounds=schedule.rounds,
    )


def export_json(document: ScheduleDocument) -> str:
    return document.model_dump_json(indent=2)


def document_roster(document: ScheduleDocument) -> Roster:
    return Roster(teams=document.teams, venues=document.venues)


def document_schedule(document: ScheduleDocument) -> Schedule:
    return Schedule(rounds=document.rounds, repeats=document.repeats)


# ============================================================================
# Import
# ============================================================================


def _format_validation_error(exc: ValidationError) -> str:
    first = exc.errors()[0]
    location = ".".join(str(part) for part in first["loc"])
    return f"{location}: {first['msg']}" if location else first["msg"]


def _parse_payload(payload: Union[str, bytes, Mapping[str, Any]]) -> Dict[str, Any]:
    if isinstance(payload, (str, bytes)):
        try:
            payload = json.loads(payload)
        except json.JSONDecodeError as exc:
            raise ScheduleImportError(f"Invalid JSON: {exc.msg} (line {exc.lineno})")
        except UnicodeDecodeError as exc:
            raise ScheduleImportError(f"Invalid encoding: {exc.reason} at byte {exc.start}")

    if not isinstance(payload, Mapping):
        raise ScheduleImportError("Schedule document must be a JSON object")

    for key in ARRAY_FIELDS:
        if key in payload and not isinstance(payload[key], list):
            raise ScheduleImportError(f"'{key}' must be an array")
    if "rounds" not in payload:
        raise ScheduleImportError("'rounds' is required")

    return dict(payload)


def _check_references(document: ScheduleDocument) -> None:
    if document.format not in FORMAT_PRESETS:
        raise ScheduleImportError(f"Unknown format '{document.format}'")

    team_ids = [t.id for t in document.teams]
    venue_ids = [v.id for v in document.venues]
    if len(set(team_ids)) != len(team_ids):
        raise ScheduleImportError("Duplicate team ids in document")
    if len(set(venue_ids)) != len(venue_ids):
        raise ScheduleImportError("Duplicate venue ids in document")

    known_teams = set(team_ids)
    known_venues = set(venue_ids)
    round_numbers = set()
    match_ids = set()

    for rnd in document.rounds:
        if rnd.round_number in round_numbers:
            raise ScheduleImportError(f"Duplicate round number {rnd.round_number}")
        round_numbers.add(rnd.round_number)

        for match in rnd.matches:
            if match.id in match_ids:
                raise ScheduleImportError(f"Duplicate match id {match.id}")
            match_ids.add(match.id)

            if match.round_number != rnd.round_number:
                raise ScheduleImportError(f"Match {match.id} is listed under round {rnd.round_number}")
            for team_id in match.team_ids:
                if team_id not in known_teams:
                    raise ScheduleImportError(f"Match {match.id} references unknown team {team_id}")
            if match.venue_id is not None and match.venue_id not in known_venues:
                raise ScheduleImportError(f"Match {match.id} references unknown venue {match.venue_id}")


def import_document(payload: Union[str, bytes, Mapping[str, Any]]) -> ImportResult:
    """
    Parse and validate a schedule document.

    Returns:
        ImportResult(success=True, counts={...}, document=...) or
        ImportResult(success=False, message=<reason>); never raises for bad input
    """
    try:
        data = _parse_payload(payload)
        try:
            document = ScheduleDocument.model_validate(data)
        except ValidationError as exc:
            raise ScheduleImportError(_format_validation_error(exc))
        _check_references(document)
    except ScheduleImportError as exc:
        logger.warning("Schedule import rejected: %s", exc)
        return ImportResult(success=False, message=str(exc))

    counts = {
        "teams": len(document.teams),
        "venues": len(document.venues),
        "rounds": len(document.rounds),
        "matches": sum(len(r.matches) for r in document.rounds),
    }
    logger.info("Schedule imported: %s", counts)
    return ImportResult(success=True, message="Schedule imported", counts=counts, document=document)


# ============================================================================
# Printable listing
# ============================================================================


def render_listing(document: ScheduleDocument) -> str:
    """Flattened, human-readable schedule: round headers and one line per match."""
    teams = {t.id: t for t in document.teams}
    venues = {v.id: v for v in document.venues}
    preset = FORMAT_PRESETS.get(document.format)
    format_name = preset.name if preset else document.format

    lines: List[str] = [document.tournament_name, "=" * len(document.tournament_name)]
    if document.date:
        lines.append(f"Date: {document.date.isoformat()}")
    lines.append(f"Format: {format_name} | Teams: {len(document.teams)} | Rounds: {len(document.rounds)}")

    for rnd in document.rounds:
        header = f"Round {rnd.round_number}"
        if rnd.start_time:
            header += f" - {rnd.start_time.strftime('%H:%M')}"
        lines.append("")
        lines.append(header)
        lines.append("-" * len(header))

        for match in rnd.matches:
            side_a = teams.get(match.side_a)
            side_b = teams.get(match.side_b)
            line = f"  {match.match_number}. {side_a.name if side_a else 'TBD'} vs {side_b.name if side_b else 'TBD'}"
            venue = venues.get(match.venue_id) if match.venue_id else None
            if venue:
                line += f" @ {venue.name}"
            lines.append(line)

    return "\n".join(lines) + "\n"
