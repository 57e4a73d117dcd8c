"""Domain objects for the roster engine."""

from .policy import RosterPolicy
from .requests import LeaveRequest, NoRequest, ShiftChangeRequest, StaffRequest
from .roster import DayAssignment, DaySchedule, WeeklyRoster, WeeklyRosterEntry
from .shift import (
    AFTERNOON_SHIFT,
    MORNING_SHIFT,
    NIGHT_SHIFT,
    ShiftCatalog,
    ShiftDefinition,
)
from .staff import DAYS, StaffProfile
from .tally import AssignmentTally

__all__ = [
    "AFTERNOON_SHIFT",
    "AssignmentTally",
    "DAYS",
    "DayAssignment",
    "DaySchedule",
    "LeaveRequest",
    "MORNING_SHIFT",
    "NIGHT_SHIFT",
    "NoRequest",
    "RosterPolicy",
    "ShiftCatalog",
    "ShiftChangeRequest",
    "ShiftDefinition",
    "StaffProfile",
    "StaffRequest",
    "WeeklyRoster",
    "WeeklyRosterEntry",
]
