from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional, Tuple

from .shift import FULL_DAY
from .staff import DAYS


class InvalidRosterDataError(ValueError):
    """Raised when a wire-format roster entry cannot be read."""


@dataclass(frozen=True)
class DayAssignment:
    shift_id: Optional[int]
    job_role: str
    time_range: str = FULL_DAY
    color: Optional[str] = None

    @property
    def is_off(self) -> bool:
        return self.shift_id is None

    @property
    def base_role(self) -> str:
        """First token of the label, e.g. ``"C3"`` for ``"C3 (Del Cov)"``."""
        return self.job_role.split(" ")[0].strip() if self.job_role else ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "shiftId": self.shift_id,
            "jobRole": self.job_role,
            "timeRange": self.time_range,
            "color": self.color,
        }

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "DayAssignment":
        if not isinstance(payload, Mapping):
            raise InvalidRosterDataError(f"Shift entry must be an object, got {payload!r}")
        shift_id = payload.get("shiftId")
        try:
            shift_id = int(shift_id) if shift_id not in (None, "") else None
        except (TypeError, ValueError) as exc:
            raise InvalidRosterDataError(f"Invalid shiftId {shift_id!r}") from exc
        return cls(
            shift_id=shift_id,
            job_role=str(payload.get("jobRole") or ""),
            time_range=str(payload.get("timeRange") or ""),
            color=payload.get("color"),
        )


@dataclass(frozen=True)
class DaySchedule:
    day_of_week: str
    shifts: Tuple[DayAssignment, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "dayOfWeek": self.day_of_week,
            "shifts": [shift.to_dict() for shift in self.shifts],
        }


@dataclass(frozen=True)
class WeeklyRosterEntry:
    employee_id: str
    employee_name: str
    position: str
    weekly_schedule: Tuple[DaySchedule, ...]

    def day(self, day_of_week: str) -> DaySchedule:
        return self.weekly_schedule[DAYS.index(day_of_week)]

    def assignment_on(self, day_of_week: str) -> Optional[DayAssignment]:
        shifts = self.day(day_of_week).shifts
        return shifts[0] if shifts else None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "employeeName": self.employee_name,
            "employeeId": self.employee_id,
            "position": self.position,
            "weeklySchedule": [day.to_dict() for day in self.weekly_schedule],
        }

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "WeeklyRosterEntry":
        if not isinstance(payload, Mapping):
            raise InvalidRosterDataError(f"Roster entry must be an object, got {payload!r}")
        schedule = payload.get("weeklySchedule") or []
        if not isinstance(schedule, list):
            raise InvalidRosterDataError("weeklySchedule must be a list")
        by_day: Dict[str, List[DayAssignment]] = {day: [] for day in DAYS}
        for entry in schedule:
            if not isinstance(entry, Mapping):
                raise InvalidRosterDataError(f"Day entry must be an object, got {entry!r}")
            shifts = entry.get("shifts") or []
            if not isinstance(shifts, list):
                raise InvalidRosterDataError("shifts must be a list")
            day = entry.get("dayOfWeek")
            if day in by_day:
                by_day[day] = [DayAssignment.from_dict(shift) for shift in shifts]
        return cls(
            employee_id=str(payload.get("employeeId") or ""),
            employee_name=str(payload.get("employeeName") or "").strip(),
            position=str(payload.get("position") or ""),
            weekly_schedule=tuple(DaySchedule(day, tuple(by_day[day])) for day in DAYS),
        )


WeeklyRoster = List[WeeklyRosterEntry]

__all__ = ["InvalidRosterDataError", "DayAssignment", "DaySchedule", "WeeklyRosterEntry", "WeeklyRoster"]
