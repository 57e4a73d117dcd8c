from __future__ import annotations

from typing import Any, Dict, Mapping

from . import db


def get_shift_times(org_id: str) -> Dict[int, Dict[str, Any]]:
    rows = db.query_all(
        "SELECT shift_id, name, time FROM shift_settings WHERE org_id = ? ORDER BY shift_id",
        (org_id,),
    )
    return {int(row["shift_id"]): {"name": row["name"], "time": row["time"]} for row in rows}


def save_shift_times(org_id: str, payload: Mapping[int, Mapping[str, Any]]) -> None:
    connection = db.get_db()
    with connection:
        connection.execute("DELETE FROM shift_settings WHERE org_id = ?", (org_id,))
        connection.executemany(
            "INSERT INTO shift_settings (org_id, shift_id, name, time) VALUES (?, ?, ?, ?)",
            [(org_id, int(shift_id), spec["name"], spec["time"]) for shift_id, spec in payload.items()],
        )
