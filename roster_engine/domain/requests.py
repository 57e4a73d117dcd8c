"""Parsed forms of a staff member's next-week request."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Union

FULL_WEEK = "Full Week"
SICK_LEAVE = "Sick Leave"


@dataclass(frozen=True)
class NoRequest:
    kind: str = "none"


@dataclass(frozen=True)
class LeaveRequest:
    day: str
    kind: str = "leave"

    @property
    def covers_whole_week(self) -> bool:
        return self.day in (FULL_WEEK, SICK_LEAVE)

    def applies_to(self, day: str) -> bool:
        return self.covers_whole_week or self.day == day


@dataclass(frozen=True)
class ShiftChangeRequest:
    shift: str
    kind: str = "shift_change"


StaffRequest = Union[NoRequest, LeaveRequest, ShiftChangeRequest]

NO_REQUEST = NoRequest()

__all__ = [
    "FULL_WEEK",
    "SICK_LEAVE",
    "NoRequest",
    "LeaveRequest",
    "ShiftChangeRequest",
    "StaffRequest",
    "NO_REQUEST",
]
