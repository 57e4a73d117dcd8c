"""CSV report helpers."""
from __future__ import annotations

import csv
from typing import IO, Sequence

from ...domain.roster import DayAssignment, WeeklyRosterEntry
from ...domain.staff import DAYS


def cell_text(assignment: DayAssignment | None) -> str:
    if assignment is None:
        return ""
    if assignment.is_off:
        return assignment.job_role
    return f"{assignment.job_role} {assignment.time_range}".strip()


def write_grid(handle: IO[str], roster: Sequence[WeeklyRosterEntry]) -> None:
    writer = csv.writer(handle)
    writer.writerow(["employee_id", "employee", "position", *DAYS])
    for entry in roster:
        row = [entry.employee_id, entry.employee_name, entry.position]
        for day in DAYS:
            row.append(cell_text(entry.assignment_on(day)))
        writer.writerow(row)
