"""Excel report writer."""
from __future__ import annotations

from datetime import date, timedelta
from io import BytesIO
from pathlib import Path
from typing import BinaryIO, Sequence, Union

from openpyxl import Workbook
from openpyxl.styles import Alignment, Font, PatternFill

from ...domain.roster import WeeklyRosterEntry
from ...domain.staff import DAYS
from .csv_writer import cell_text

HEADER_FONT = Font(bold=True)
CENTER = Alignment(horizontal="center", vertical="center", wrap_text=True)


def _fill(color: str | None) -> PatternFill | None:
    if not color or not color.startswith("#") or len(color) != 7:
        return None
    return PatternFill(start_color=color[1:].upper(), end_color=color[1:].upper(), fill_type="solid")


def build_workbook(roster: Sequence[WeeklyRosterEntry], week_start: date) -> Workbook:
    wb = Workbook()
    ws = wb.active
    ws.title = f"Roster {week_start.isoformat()}"

    ws.cell(row=1, column=1, value="Employee").font = HEADER_FONT
    ws.cell(row=1, column=2, value="Position").font = HEADER_FONT
    for idx, day in enumerate(DAYS):
        current = week_start + timedelta(days=idx)
        cell = ws.cell(row=1, column=idx + 3, value=f"{day} {current.strftime('%d/%m')}")
        cell.font = HEADER_FONT
        cell.alignment = CENTER

    for row_idx, entry in enumerate(roster, start=2):
        ws.cell(row=row_idx, column=1, value=f"{entry.employee_id} {entry.employee_name}").font = HEADER_FONT
        ws.cell(row=row_idx, column=2, value=entry.position)
        for col_idx, day in enumerate(DAYS, start=3):
            assignment = entry.assignment_on(day)
            cell = ws.cell(row=row_idx, column=col_idx, value=cell_text(assignment))
            cell.alignment = CENTER
            fill = _fill(assignment.color) if assignment is not None else None
            if fill is not None:
                cell.fill = fill
    return wb


def write_grid(
    target: Union[str, Path, BinaryIO],
    roster: Sequence[WeeklyRosterEntry],
    week_start: date,
) -> None:
    build_workbook(roster, week_start).save(target)


def to_bytes(roster: Sequence[WeeklyRosterEntry], week_start: date) -> BytesIO:
    stream = BytesIO()
    write_grid(stream, roster, week_start)
    stream.seek(0)
    return stream
