"""Validation and request handling for staff profiles."""

from __future__ import annotations

from datetime import date
from typing import Any, Dict, List, Mapping, Optional

from roster_engine.domain.staff import (
    DAYS,
    NO_DAY_OFF,
    NO_REQUEST,
    POSITIONS,
    PREFERENCES,
    normalize_day_off,
    normalize_preference,
)
from roster_engine.services.request_parser import InvalidRequestError, encode_request, is_expired

from ..dao import staff_dao
from .roster_service import current_week_start, parse_week_start


class InvalidStaffError(ValueError):
    """Raised when a profile payload is incomplete or invalid."""


class StaffNotFoundError(LookupError):
    """Raised when the profile does not exist in the organization."""


def _clean(payload: Mapping[str, Any], existing: Optional[Mapping[str, Any]] = None) -> Dict[str, Any]:
    merged: Dict[str, Any] = dict(existing or {})
    merged.update({key: value for key, value in payload.items() if value is not None})

    for key in ("name", "employeeId"):
        value = merged.get(key)
        merged[key] = value.strip() if isinstance(value, str) else value
    if not merged.get("name") or not merged.get("position") or not merged.get("employeeId"):
        raise InvalidStaffError("Missing required fields: name, position or employeeId")
    if merged["position"] not in POSITIONS:
        raise InvalidStaffError(f"Position must be one of {', '.join(POSITIONS)}")

    preference = merged.get("shiftPreference")
    if preference not in (None, "None") and preference not in PREFERENCES:
        raise InvalidStaffError(f"Shift preference must be one of {', '.join(PREFERENCES)}")
    day_off = merged.get("fixedDayOff")
    if day_off not in (None, NO_DAY_OFF) and day_off not in DAYS:
        raise InvalidStaffError(f"Fixed day off must be one of {', '.join(DAYS)} or None")

    request = merged.get("nextWeekHolidayRequest")
    return {
        "employeeId": str(merged["employeeId"]),
        "name": str(merged["name"]),
        "position": merged["position"],
        "shiftPreference": normalize_preference(preference),
        "fixedDayOff": normalize_day_off(day_off),
        "nextWeekHolidayRequest": request if isinstance(request, str) and request else NO_REQUEST,
    }


def list_staff(org_id: str, today: Optional[date] = None) -> List[Dict[str, Any]]:
    """Profiles with an ``requestExpired`` flag for stale requests."""
    week = current_week_start(today)
    profiles = staff_dao.list_profiles(org_id)
    for profile in profiles:
        profile["requestExpired"] = is_expired(profile["nextWeekHolidayRequest"], week)
    return profiles


def create_staff(org_id: str, payload: Mapping[str, Any]) -> Dict[str, Any]:
    profile = _clean(payload)
    staff_dao.create_profile(org_id, profile)
    return profile


def update_staff(org_id: str, employee_id: str, payload: Mapping[str, Any]) -> Dict[str, Any]:
    existing = staff_dao.get_profile(org_id, employee_id)
    if existing is None:
        raise StaffNotFoundError(f"Staff profile {employee_id} not found")
    profile = _clean(payload, existing)
    staff_dao.update_profile(org_id, employee_id, profile)
    return profile


def set_request(org_id: str, employee_id: str, week_value: Optional[str], value: Optional[str]) -> str:
    """Store a leave or shift-change request for the week containing *week_value*."""
    if staff_dao.get_profile(org_id, employee_id) is None:
        raise StaffNotFoundError(f"Staff profile {employee_id} not found")
    week_start = parse_week_start(week_value)
    encoded = encode_request(week_start, value or "")
    staff_dao.set_request(org_id, employee_id, encoded)
    return encoded


def clear_request(org_id: str, employee_id: str) -> None:
    if not staff_dao.set_request(org_id, employee_id, NO_REQUEST):
        raise StaffNotFoundError(f"Staff profile {employee_id} not found")


__all__ = [
    "InvalidRequestError",
    "InvalidStaffError",
    "StaffNotFoundError",
    "clear_request",
    "create_staff",
    "list_staff",
    "set_request",
    "update_staff",
]
