from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional

DAYS = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")

# Positions
MANAGER = "Manager"
SUPERVISOR = "Supervisor"
DELIVERY = "Delivery"
NORMAL_STAFF = "Normal Staff"
POSITIONS = (MANAGER, SUPERVISOR, DELIVERY, NORMAL_STAFF)

# Shift preferences
MORNING = "Morning"
AFTERNOON = "Afternoon"
NIGHT = "Night"
PREFERENCES = (MORNING, AFTERNOON, NIGHT)

NO_DAY_OFF = "None"
NO_REQUEST = "None"


def normalize_preference(value: Any) -> str:
    """Resolve a stored preference to one of :data:`PREFERENCES`.

    Missing, ``"None"`` and unknown values fall back to Morning.
    """

    if isinstance(value, str) and value.strip() in PREFERENCES:
        return value.strip()
    return MORNING


def normalize_day_off(value: Any) -> str:
    if isinstance(value, str) and value.strip() in DAYS:
        return value.strip()
    return NO_DAY_OFF


def normalize_position(value: Any) -> str:
    if isinstance(value, str) and value.strip() in POSITIONS:
        return value.strip()
    return NORMAL_STAFF


@dataclass(frozen=True)
class StaffProfile:
    employee_id: str
    name: str
    position: str = NORMAL_STAFF
    shift_preference: str = MORNING
    fixed_day_off: str = NO_DAY_OFF
    next_week_request: Optional[str] = NO_REQUEST

    @property
    def has_fixed_day_off(self) -> bool:
        return self.fixed_day_off in DAYS

    @classmethod
    def from_mapping(cls, payload: Mapping[str, Any]) -> "StaffProfile":
        """Build a profile from a wire (camelCase) or storage (snake_case) mapping."""

        def pick(*keys: str) -> Any:
            for key in keys:
                if key in payload and payload[key] is not None:
                    return payload[key]
            return None

        request = pick("nextWeekHolidayRequest", "next_week_request")
        return cls(
            employee_id=str(pick("employeeId", "employee_id") or ""),
            name=str(pick("name", "employeeName") or ""),
            position=normalize_position(pick("position")),
            shift_preference=normalize_preference(pick("shiftPreference", "shift_preference")),
            fixed_day_off=normalize_day_off(pick("fixedDayOff", "fixed_day_off")),
            next_week_request=request if isinstance(request, str) else NO_REQUEST,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "employeeId": self.employee_id,
            "name": self.name,
            "position": self.position,
            "shiftPreference": self.shift_preference,
            "fixedDayOff": self.fixed_day_off,
            "nextWeekHolidayRequest": self.next_week_request or NO_REQUEST,
        }


__all__ = [
    "DAYS",
    "MANAGER",
    "SUPERVISOR",
    "DELIVERY",
    "NORMAL_STAFF",
    "POSITIONS",
    "MORNING",
    "AFTERNOON",
    "NIGHT",
    "PREFERENCES",
    "NO_DAY_OFF",
    "NO_REQUEST",
    "StaffProfile",
    "normalize_preference",
    "normalize_day_off",
    "normalize_position",
]
