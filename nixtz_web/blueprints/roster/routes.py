"""Blueprint for fetching, generating, saving and exporting weekly rosters."""

from __future__ import annotations

from flask import Blueprint, current_app, jsonify, request

from ...services import roster_service
from ...services.tenancy import current_org

bp = Blueprint("roster", __name__, url_prefix="/api/staff/roster")


@bp.get("/weeks")
def list_weeks():
    return jsonify({"weeks": roster_service.saved_weeks(current_org())})


@bp.get("/<start_date>")
def get_roster(start_date: str):
    try:
        week_start = roster_service.parse_week_start(start_date)
    except roster_service.InvalidWeekError as exc:
        return jsonify({"error": str(exc)}), 400

    roster = roster_service.fetch_roster(current_org(), week_start)
    return jsonify({"weekStartDate": week_start.isoformat(), "roster": roster})


@bp.get("/generate/<start_date>")
def generate_roster(start_date: str):
    try:
        week_start = roster_service.parse_week_start(start_date)
    except roster_service.InvalidWeekError as exc:
        return jsonify({"error": str(exc)}), 400

    org = current_org()
    try:
        result = roster_service.generate_and_store(org, week_start)
    except roster_service.RosterGenerationError as exc:
        current_app.logger.warning("Roster generation rejected for org %s: %s", org, exc)
        return jsonify({"error": str(exc)}), 400

    return jsonify(result.to_dict())


@bp.post("")
def save_roster():
    payload = request.get_json(silent=True) or {}
    roster_data = payload.get("rosterData")
    if not payload.get("weekStartDate") or not isinstance(roster_data, list):
        return jsonify({"error": "Invalid data format (missing weekStartDate or rosterData)"}), 400

    try:
        week_start = roster_service.parse_week_start(payload["weekStartDate"])
    except roster_service.InvalidWeekError as exc:
        return jsonify({"error": str(exc)}), 400

    try:
        saved = roster_service.save_roster(current_org(), week_start, roster_data)
    except roster_service.InvalidRosterDataError as exc:
        return jsonify({"error": str(exc)}), 400
    return jsonify({"weekStartDate": week_start.isoformat(), "saved": saved})


@bp.get("/<start_date>/export.xlsx")
def export_roster(start_date: str):
    try:
        week_start = roster_service.parse_week_start(start_date)
    except roster_service.InvalidWeekError as exc:
        return jsonify({"error": str(exc)}), 400

    try:
        stream, filename = roster_service.export_xlsx(current_org(), week_start)
    except roster_service.RosterNotFoundError as exc:
        return jsonify({"error": str(exc)}), 404

    return (stream.getvalue(), 200, {
        "Content-Type": "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
        "Content-Disposition": f"attachment; filename={filename}",
    })
