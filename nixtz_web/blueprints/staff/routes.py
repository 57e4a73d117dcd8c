from __future__ import annotations

from flask import Blueprint, current_app, jsonify, request

from ...dao import staff_dao
from ...services import roster_service, staff_service
from ...services.tenancy import current_org

bp = Blueprint("staff", __name__, url_prefix="/api/staff/profile")


@bp.get("")
def list_staff():
    return jsonify({"staff": staff_service.list_staff(current_org())})


@bp.post("")
def create_staff():
    payload = request.get_json(silent=True) or {}
    try:
        profile = staff_service.create_staff(current_org(), payload)
    except staff_service.InvalidStaffError as exc:
        return jsonify({"error": str(exc)}), 400
    except staff_dao.DuplicateStaffError as exc:
        return jsonify({"error": str(exc)}), 409
    return jsonify({"staff": profile}), 201


@bp.put("/<employee_id>")
def update_staff(employee_id: str):
    payload = request.get_json(silent=True) or {}
    try:
        profile = staff_service.update_staff(current_org(), employee_id, payload)
    except staff_service.StaffNotFoundError as exc:
        return jsonify({"error": str(exc)}), 404
    except staff_service.InvalidStaffError as exc:
        return jsonify({"error": str(exc)}), 400
    except staff_dao.DuplicateStaffError as exc:
        return jsonify({"error": str(exc)}), 409
    return jsonify({"staff": profile})


@bp.delete("/<employee_id>")
def delete_staff(employee_id: str):
    deleted = staff_dao.delete_profile(current_org(), employee_id)
    return jsonify({"deleted": deleted})


@bp.put("/<employee_id>/request")
def set_request(employee_id: str):
    payload = request.get_json(silent=True) or {}
    org = current_org()
    try:
        encoded = staff_service.set_request(org, employee_id, payload.get("weekStartDate"), payload.get("value"))
    except staff_service.StaffNotFoundError as exc:
        return jsonify({"error": str(exc)}), 404
    except (roster_service.InvalidWeekError, staff_service.InvalidRequestError) as exc:
        return jsonify({"error": str(exc)}), 400
    current_app.logger.info("Request %s stored for %s in org %s", encoded, employee_id, org)
    return jsonify({"nextWeekHolidayRequest": encoded})


@bp.delete("/<employee_id>/request")
def clear_request(employee_id: str):
    try:
        staff_service.clear_request(current_org(), employee_id)
    except staff_service.StaffNotFoundError as exc:
        return jsonify({"error": str(exc)}), 404
    return jsonify({"nextWeekHolidayRequest": "None"})
