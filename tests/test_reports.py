import csv
import io
from datetime import date

from openpyxl import load_workbook

from roster_engine.adapters.report import csv_writer, xlsx_writer
from roster_engine.domain.staff import StaffProfile
from roster_engine.services.generator import generate_weekly_roster

WEEK = date(2025, 1, 6)


def _roster():
    staff = [
        StaffProfile("E001", "Pae", "Manager", "Morning", "Sun"),
        StaffProfile("E002", "Mint", "Normal Staff", "Night"),
    ]
    return generate_weekly_roster(staff, WEEK)


def test_csv_grid_has_one_row_per_employee():
    buffer = io.StringIO()
    csv_writer.write_grid(buffer, _roster())

    rows = list(csv.reader(io.StringIO(buffer.getvalue())))
    assert rows[0] == ["employee_id", "employee", "position", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"]
    assert rows[1][:4] == ["E001", "Pae", "Manager", "Z1 (Mgr) 07:00-16:00"]
    assert rows[1][-1] == "Day Off (Fixed)"
    assert rows[2][3] == "C2 22:00-07:00"


def test_xlsx_export_headers_and_fills():
    stream = xlsx_writer.to_bytes(_roster(), WEEK)

    ws = load_workbook(stream).active
    assert ws.title == "Roster 2025-01-06"
    assert ws.cell(row=1, column=3).value == "Mon 06/01"
    assert ws.cell(row=1, column=9).value == "Sun 12/01"
    assert ws.cell(row=2, column=1).value == "E001 Pae"
    assert ws.cell(row=2, column=3).value == "Z1 (Mgr) 07:00-16:00"
    assert ws.cell(row=2, column=3).fill.start_color.rgb.endswith("FF0000")
    assert ws.cell(row=3, column=4).value == "C2 22:00-07:00"
