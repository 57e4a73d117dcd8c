"""Data access helpers for staff profiles."""

from __future__ import annotations

import sqlite3
from typing import Any, Dict, List, Optional

from . import db

_COLUMNS = "employee_id, name, position, shift_preference, fixed_day_off, next_week_request"


class DuplicateStaffError(Exception):
    """Raised when an employee id is already taken inside the organization."""


def _row_to_dict(row: sqlite3.Row) -> Dict[str, Any]:
    return {
        "employeeId": row["employee_id"],
        "name": row["name"],
        "position": row["position"],
        "shiftPreference": row["shift_preference"],
        "fixedDayOff": row["fixed_day_off"],
        "nextWeekHolidayRequest": row["next_week_request"],
    }


def list_profiles(org_id: str) -> List[Dict[str, Any]]:
    """Return the organization's profiles sorted by name."""
    rows = db.query_all(
        f"SELECT {_COLUMNS} FROM staff_profiles WHERE org_id = ? ORDER BY name COLLATE NOCASE, employee_id",
        (org_id,),
    )
    return [_row_to_dict(row) for row in rows]


def get_profile(org_id: str, employee_id: str) -> Optional[Dict[str, Any]]:
    row = db.query_one(
        f"SELECT {_COLUMNS} FROM staff_profiles WHERE org_id = ? AND employee_id = ?",
        (org_id, employee_id),
    )
    return _row_to_dict(row) if row else None


def create_profile(org_id: str, payload: Dict[str, Any]) -> str:
    try:
        db.execute(
            "INSERT INTO staff_profiles (org_id, employee_id, name, position, shift_preference, fixed_day_off, "
            "next_week_request) VALUES (?, ?, ?, ?, ?, ?, ?)",
            (
                org_id,
                payload["employeeId"],
                payload["name"],
                payload["position"],
                payload.get("shiftPreference", "Morning"),
                payload.get("fixedDayOff", "None"),
                payload.get("nextWeekHolidayRequest", "None"),
            ),
        )
    except sqlite3.IntegrityError as exc:
        raise DuplicateStaffError(f"Employee ID {payload['employeeId']} already exists") from exc
    return payload["employeeId"]


def update_profile(org_id: str, employee_id: str, payload: Dict[str, Any]) -> int:
    try:
        return db.execute(
            "UPDATE staff_profiles SET employee_id = ?, name = ?, position = ?, shift_preference = ?, "
            "fixed_day_off = ?, next_week_request = ? WHERE org_id = ? AND employee_id = ?",
            (
                payload["employeeId"],
                payload["name"],
                payload["position"],
                payload["shiftPreference"],
                payload["fixedDayOff"],
                payload["nextWeekHolidayRequest"],
                org_id,
                employee_id,
            ),
        )
    except sqlite3.IntegrityError as exc:
        raise DuplicateStaffError(f"Employee ID {payload['employeeId']} already exists") from exc


def set_request(org_id: str, employee_id: str, value: str) -> int:
    return db.execute(
        "UPDATE staff_profiles SET next_week_request = ? WHERE org_id = ? AND employee_id = ?",
        (value, org_id, employee_id),
    )


def delete_profile(org_id: str, employee_id: str) -> int:
    return db.execute(
        "DELETE FROM staff_profiles WHERE org_id = ? AND employee_id = ?",
        (org_id, employee_id),
    )
