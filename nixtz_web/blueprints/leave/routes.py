from __future__ import annotations

from datetime import date, datetime

from flask import Blueprint, jsonify, request

from ...dao import leave_dao
from ...services.tenancy import current_org

bp = Blueprint("leave", __name__, url_prefix="/api/staff/leave")


def _parse_year(value: str | None) -> int | None:
    try:
        year = int(value or "")
    except ValueError:
        return None
    return year if year >= 2000 else None


@bp.post("/history")
def create_leave():
    payload = request.get_json(silent=True) or {}
    if not payload.get("employeeId") or not payload.get("leaveDate") or not payload.get("leaveType"):
        return jsonify({"error": "Missing required leave fields"}), 400
    if payload["leaveType"] not in leave_dao.LEAVE_TYPES:
        return jsonify({"error": f"Leave type must be one of {', '.join(leave_dao.LEAVE_TYPES)}"}), 400
    try:
        leave_date = datetime.strptime(str(payload["leaveDate"])[:10], "%Y-%m-%d").date()
    except ValueError:
        return jsonify({"error": "Invalid leave date, expected YYYY-MM-DD"}), 400

    leave_id = leave_dao.add_leave(current_org(), {**payload, "leaveDate": leave_date.isoformat()})
    if leave_id is None:
        return jsonify({"created": False, "message": "Leave already logged for this date"}), 200
    return jsonify({"created": True, "id": leave_id}), 201


@bp.get("/report/<year>")
def leave_report(year: str):
    parsed = _parse_year(year)
    if parsed is None:
        return jsonify({"error": "Invalid year format"}), 400
    return jsonify({"year": parsed, "report": leave_dao.yearly_report(current_org(), parsed)})


@bp.get("/details")
def leave_details():
    parsed = _parse_year(request.args.get("year") or str(date.today().year))
    if parsed is None:
        return jsonify({"error": "Invalid year format"}), 400
    records = leave_dao.list_leave(current_org(), parsed, request.args.get("employeeId"))
    return jsonify({"year": parsed, "records": records})


@bp.delete("/<int:leave_id>")
def delete_leave(leave_id: int):
    deleted = leave_dao.delete_leave(current_org(), leave_id)
    return jsonify({"deleted": deleted})
