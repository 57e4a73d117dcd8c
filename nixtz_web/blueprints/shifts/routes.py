from __future__ import annotations

from flask import Blueprint, jsonify, request

from ...services import roster_service
from ...services.tenancy import current_org

bp = Blueprint("shifts", __name__, url_prefix="/api/staff/shifts")


@bp.get("")
def list_shifts():
    return jsonify({"shifts": roster_service.shift_settings(current_org())})


@bp.post("")
def save_shifts():
    payload = request.get_json(silent=True)
    try:
        shifts = roster_service.save_shift_settings(current_org(), payload)
    except roster_service.InvalidShiftSettingsError as exc:
        return jsonify({"error": str(exc)}), 400
    return jsonify({"shifts": shifts})
