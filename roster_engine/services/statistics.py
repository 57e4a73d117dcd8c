"""Derive statistics from generated rosters."""
from __future__ import annotations

from collections import Counter
from typing import Dict, Iterable

from ..domain.roster import WeeklyRosterEntry
from ..domain.shift import ShiftCatalog
from ..domain.staff import DAYS


def coverage_by_day(roster: Iterable[WeeklyRosterEntry], catalog: ShiftCatalog) -> Dict[str, Dict[str, int]]:
    """Headcount per shift name for every day; off days are counted under ``"Off"``."""
    names = {shift.id: shift.name for shift in catalog.all()}
    coverage: Dict[str, Counter] = {
        day: Counter({**{name: 0 for name in names.values()}, "Off": 0}) for day in DAYS
    }
    for entry in roster:
        for day in entry.weekly_schedule:
            for assignment in day.shifts:
                key = "Off" if assignment.is_off else names.get(assignment.shift_id, str(assignment.shift_id))
                coverage[day.day_of_week][key] += 1
    return {day: dict(counter) for day, counter in coverage.items()}


def days_off_by_employee(roster: Iterable[WeeklyRosterEntry]) -> Dict[str, int]:
    return {
        entry.employee_id: sum(1 for day in entry.weekly_schedule for shift in day.shifts if shift.is_off)
        for entry in roster
    }


def duties_by_day(roster: Iterable[WeeklyRosterEntry], shift_id: int) -> Dict[str, Counter]:
    """Count base duty labels (``C1``..``C5``, ``Z1``, ``S1``) on one shift per day."""
    duties: Dict[str, Counter] = {day: Counter() for day in DAYS}
    for entry in roster:
        for day in entry.weekly_schedule:
            for assignment in day.shifts:
                if assignment.shift_id == shift_id:
                    duties[day.day_of_week][assignment.base_role] += 1
    return duties


__all__ = ["coverage_by_day", "days_off_by_employee", "duties_by_day"]
