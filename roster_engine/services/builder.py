"""Working structures used while a week is being generated."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional

from ..domain.requests import LeaveRequest, ShiftChangeRequest, StaffRequest
from ..domain.roster import DayAssignment, DaySchedule, WeeklyRosterEntry
from ..domain.staff import DAYS, StaffProfile


class AssignmentConflictError(RuntimeError):
    """Raised when a pass tries to overwrite an occupied (employee, day) slot."""


@dataclass(frozen=True)
class RosterMember:
    """A staff profile paired with its parsed request for the week.

    ``key`` is the profile's position in the input list, so duplicated
    employee ids still get their own row.
    """

    key: int
    profile: StaffProfile
    request: StaffRequest

    @property
    def employee_id(self) -> str:
        return self.profile.employee_id

    @property
    def effective_preference(self) -> str:
        if isinstance(self.request, ShiftChangeRequest):
            return self.request.shift
        return self.profile.shift_preference

    @property
    def leave(self) -> Optional[LeaveRequest]:
        return self.request if isinstance(self.request, LeaveRequest) else None


class WeekBuilder:
    def __init__(self, members: Iterable[RosterMember]):
        self._members: List[RosterMember] = list(members)
        self._slots: Dict[int, List[Optional[DayAssignment]]] = {
            member.key: [None] * len(DAYS) for member in self._members
        }

    def is_scheduled(self, key: int, day_index: int) -> bool:
        return self._slots[key][day_index] is not None

    def assign(self, key: int, day_index: int, assignment: DayAssignment) -> None:
        current = self._slots[key][day_index]
        if current is not None:
            raise AssignmentConflictError(
                f"slot {key}/{DAYS[day_index]} already holds {current.job_role!r}"
            )
        self._slots[key][day_index] = assignment

    def build(self) -> List[WeeklyRosterEntry]:
        entries: List[WeeklyRosterEntry] = []
        for member in self._members:
            days = tuple(
                DaySchedule(day, (assignment,) if assignment is not None else ())
                for day, assignment in zip(DAYS, self._slots[member.key])
            )
            entries.append(
                WeeklyRosterEntry(
                    employee_id=member.profile.employee_id,
                    employee_name=member.profile.name,
                    position=member.profile.position,
                    weekly_schedule=days,
                )
            )
        return entries


__all__ = ["AssignmentConflictError", "RosterMember", "WeekBuilder"]
