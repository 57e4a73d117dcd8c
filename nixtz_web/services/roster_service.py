"""Bridge between the roster engine and the web database."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timedelta
from io import BytesIO
from typing import Any, Dict, List, Mapping, Optional, Tuple

from flask import current_app

from roster_engine.adapters.config_loader import load_config
from roster_engine.adapters.report import xlsx_writer
from roster_engine.domain.roster import InvalidRosterDataError, WeeklyRosterEntry
from roster_engine.domain.shift import ShiftCatalog, UnknownShiftError
from roster_engine.domain.staff import StaffProfile
from roster_engine.infrastructure.config import default_catalog, default_policy, merged_config
from roster_engine.services.generator import RosterGenerator
from roster_engine.services.statistics import coverage_by_day

from ..dao import roster_dao, settings_dao, staff_dao


class InvalidWeekError(ValueError):
    """Raised when a week start value is not a valid date."""


class RosterGenerationError(RuntimeError):
    """Raised when the generator cannot be run for an organization."""


class InvalidShiftSettingsError(ValueError):
    """Raised when submitted shift times are rejected."""


class RosterNotFoundError(LookupError):
    """Raised when no roster is saved for the requested week."""


@dataclass(slots=True)
class GenerationResult:
    week_start: date
    roster: List[WeeklyRosterEntry]
    coverage: Dict[str, Dict[str, int]]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "weekStartDate": self.week_start.isoformat(),
            "roster": [entry.to_dict() for entry in self.roster],
            "coverage": self.coverage,
        }


def parse_week_start(value: Optional[str]) -> date:
    """Parse ``YYYY-MM-DD`` and snap it back to that week's Monday."""
    if not value:
        raise InvalidWeekError("Week start date is required")
    try:
        parsed = datetime.strptime(str(value).strip()[:10], "%Y-%m-%d").date()
    except ValueError as exc:
        raise InvalidWeekError("Invalid start date format, expected YYYY-MM-DD") from exc
    return parsed - timedelta(days=parsed.weekday())


def current_week_start(today: Optional[date] = None) -> date:
    today = today or date.today()
    return today - timedelta(days=today.weekday())


def _engine_config() -> Dict[str, Any]:
    overrides = current_app.config.get("ROSTER_CONFIG")
    if isinstance(overrides, Mapping):
        return merged_config(overrides)
    if overrides:
        return merged_config(load_config(overrides))
    return merged_config()


def catalog_for(org_id: str) -> ShiftCatalog:
    """Build a fresh catalog snapshot with the organization's saved times."""
    catalog = default_catalog(_engine_config())
    saved = settings_dao.get_shift_times(org_id)
    known = {shift_id: spec for shift_id, spec in saved.items() if shift_id in catalog}
    return catalog.with_times(known) if known else catalog


def shift_settings(org_id: str) -> Dict[str, Dict[str, Any]]:
    return catalog_for(org_id).to_config()


def save_shift_settings(org_id: str, payload: Mapping[str, Any]) -> Dict[str, Dict[str, Any]]:
    if not isinstance(payload, Mapping) or not payload:
        raise InvalidShiftSettingsError("Shift settings payload must be a non-empty object")
    base = catalog_for(org_id)
    try:
        updated = base.with_times(payload)
    except UnknownShiftError as exc:
        raise InvalidShiftSettingsError(f"Unknown shift id {exc.args[0]!r}") from exc
    except ValueError as exc:
        raise InvalidShiftSettingsError(str(exc)) from exc
    settings_dao.save_shift_times(
        org_id, {shift.id: {"name": shift.name, "time": shift.time} for shift in updated.all()}
    )
    current_app.logger.info("Shift settings updated for org %s", org_id)
    return updated.to_config()


def generate_roster(org_id: str, week_start: date) -> GenerationResult:
    """Run the generator for the organization without persisting it."""
    profiles = [StaffProfile.from_mapping(row) for row in staff_dao.list_profiles(org_id)]
    if not profiles:
        raise RosterGenerationError("No staff profiles to generate a roster")
    catalog = catalog_for(org_id)
    policy = default_policy(_engine_config())
    roster = RosterGenerator(catalog=catalog, policy=policy).generate(profiles, week_start)
    return GenerationResult(week_start=week_start, roster=roster, coverage=coverage_by_day(roster, catalog))


def generate_and_store(org_id: str, week_start: date) -> GenerationResult:
    """Generate a roster and replace the saved week with it."""
    result = generate_roster(org_id, week_start)
    saved = roster_dao.replace_week(
        org_id, week_start.isoformat(), [entry.to_dict() for entry in result.roster]
    )
    current_app.logger.info(
        "Generated roster for org %s week %s (%d entries)", org_id, week_start.isoformat(), saved
    )
    return result


def saved_weeks(org_id: str) -> List[str]:
    return roster_dao.list_weeks(org_id)


def fetch_roster(org_id: str, week_start: date) -> List[Dict[str, Any]]:
    return roster_dao.load_week(org_id, week_start.isoformat())


def save_roster(org_id: str, week_start: date, roster_data: List[Mapping[str, Any]]) -> int:
    """Upsert manually edited entries; entries without a name are skipped."""
    entries = []
    for raw in roster_data:
        if not isinstance(raw, Mapping):
            continue
        entry = WeeklyRosterEntry.from_dict(raw)
        if not entry.employee_name:
            continue
        payload = entry.to_dict()
        payload["employeeId"] = entry.employee_id or entry.employee_name
        payload["position"] = entry.position or None
        entries.append(payload)
    saved = roster_dao.upsert_entries(org_id, week_start.isoformat(), entries)
    current_app.logger.info("Saved %d roster entries for org %s week %s", saved, org_id, week_start.isoformat())
    return saved


def export_xlsx(org_id: str, week_start: date) -> Tuple[BytesIO, str]:
    rows = fetch_roster(org_id, week_start)
    if not rows:
        raise RosterNotFoundError(f"No roster saved for week {week_start.isoformat()}")
    roster = [WeeklyRosterEntry.from_dict(row) for row in rows]
    stream = xlsx_writer.to_bytes(roster, week_start)
    return stream, f"roster_{week_start.isoformat()}.xlsx"
