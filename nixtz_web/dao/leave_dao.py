from __future__ import annotations

import sqlite3
from typing import Any, Dict, List, Optional

from . import db

LEAVE_TYPES = ("Holiday", "Sick Leave", "Other", "Requested")


def add_leave(org_id: str, payload: Dict[str, Any]) -> Optional[int]:
    """Insert one leave day; returns ``None`` when that day is already logged."""
    connection = db.get_db()
    try:
        with connection:
            cursor = connection.execute(
                "INSERT INTO leave_history (org_id, employee_id, employee_name, leave_date, leave_type) "
                "VALUES (?, ?, ?, ?, ?)",
                (
                    org_id,
                    payload["employeeId"],
                    payload.get("employeeName") or "N/A",
                    payload["leaveDate"],
                    payload["leaveType"],
                ),
            )
    except sqlite3.IntegrityError:
        return None
    return int(cursor.lastrowid)


def yearly_report(org_id: str, year: int) -> List[Dict[str, Any]]:
    rows = db.query_all(
        """
        SELECT employee_id, employee_name, leave_type, COUNT(1) AS days
        FROM leave_history
        WHERE org_id = ? AND leave_date >= ? AND leave_date < ?
        GROUP BY employee_id, employee_name, leave_type
        ORDER BY employee_name COLLATE NOCASE, employee_id, leave_type
        """,
        (org_id, f"{year:04d}-01-01", f"{year + 1:04d}-01-01"),
    )
    report: Dict[str, Dict[str, Any]] = {}
    for row in rows:
        item = report.setdefault(
            row["employee_id"],
            {"employeeId": row["employee_id"], "employeeName": row["employee_name"], "types": [], "totalDays": 0},
        )
        item["types"].append({"leaveType": row["leave_type"], "count": int(row["days"])})
        item["totalDays"] += int(row["days"])
    return list(report.values())


def list_leave(org_id: str, year: int, employee_id: Optional[str] = None) -> List[Dict[str, Any]]:
    sql = (
        "SELECT id, employee_id, employee_name, leave_date, leave_type FROM leave_history "
        "WHERE org_id = ? AND leave_date >= ? AND leave_date < ?"
    )
    params: list[Any] = [org_id, f"{year:04d}-01-01", f"{year + 1:04d}-01-01"]
    if employee_id:
        sql += " AND employee_id = ?"
        params.append(employee_id)
    sql += " ORDER BY leave_date, employee_id"
    return [
        {
            "id": int(row["id"]),
            "employeeId": row["employee_id"],
            "employeeName": row["employee_name"],
            "leaveDate": row["leave_date"],
            "leaveType": row["leave_type"],
        }
        for row in db.query_all(sql, params)
    ]


def delete_leave(org_id: str, leave_id: int) -> int:
    return db.execute("DELETE FROM leave_history WHERE org_id = ? AND id = ?", (org_id, leave_id))
