"""Data access for saved weekly rosters."""

from __future__ import annotations

import json
from typing import Any, Dict, Iterable, List

from . import db

_UPSERT = """
    INSERT INTO roster_entries (org_id, week_start, employee_id, employee_name, position, schedule_json)
    VALUES (?, ?, ?, ?, ?, ?)
    ON CONFLICT (org_id, week_start, employee_id) DO UPDATE SET
        employee_name = excluded.employee_name,
        position = COALESCE(excluded.position, roster_entries.position),
        schedule_json = excluded.schedule_json,
        updated_at = datetime('now')
"""


def list_weeks(org_id: str) -> List[str]:
    rows = db.query_all(
        "SELECT DISTINCT week_start FROM roster_entries WHERE org_id = ? ORDER BY week_start",
        (org_id,),
    )
    return [row["week_start"] for row in rows]


def load_week(org_id: str, week_start: str) -> List[Dict[str, Any]]:
    """Return saved entries in wire form, ordered by employee name."""
    rows = db.query_all(
        """
        SELECT employee_id, employee_name, position, schedule_json
        FROM roster_entries
        WHERE org_id = ? AND week_start = ?
        ORDER BY employee_name COLLATE NOCASE, employee_id
        """,
        (org_id, week_start),
    )
    return [
        {
            "employeeId": row["employee_id"],
            "employeeName": row["employee_name"],
            "position": row["position"],
            "weeklySchedule": json.loads(row["schedule_json"]) if row["schedule_json"] else [],
        }
        for row in rows
    ]


def _batch(org_id: str, week_start: str, entries: Iterable[Dict[str, Any]]) -> List[tuple]:
    return [
        (
            org_id,
            week_start,
            entry["employeeId"],
            entry["employeeName"],
            entry.get("position"),
            json.dumps(entry.get("weeklySchedule", []), ensure_ascii=False),
        )
        for entry in entries
    ]


def replace_week(org_id: str, week_start: str, entries: Iterable[Dict[str, Any]]) -> int:
    """Replace every saved entry of the week with *entries* in one transaction."""
    connection = db.get_db()
    batch = _batch(org_id, week_start, entries)
    with connection:
        connection.execute(
            "DELETE FROM roster_entries WHERE org_id = ? AND week_start = ?",
            (org_id, week_start),
        )
        if batch:
            connection.executemany(_UPSERT, batch)
    return len(batch)


def upsert_entries(org_id: str, week_start: str, entries: Iterable[Dict[str, Any]]) -> int:
    connection = db.get_db()
    batch = _batch(org_id, week_start, entries)
    if batch:
        with connection:
            connection.executemany(_UPSERT, batch)
    return len(batch)
