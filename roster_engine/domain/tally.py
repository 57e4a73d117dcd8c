from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Mapping, Optional, Tuple


@dataclass(frozen=True)
class AssignmentTally:
    """Per-day headcount and duty counts.

    Each pass takes a tally and returns a new one; nothing is updated in place.
    """

    headcount: Mapping[int, int] = field(default_factory=dict)
    duties: Mapping[Tuple[int, str], int] = field(default_factory=dict)
    extended_cover: bool = False

    def count(self, shift_id: int) -> int:
        return self.headcount.get(shift_id, 0)

    def duty_count(self, shift_id: int, role: str) -> int:
        return self.duties.get((shift_id, role), 0)

    def has_duty(self, shift_id: int, role: str) -> bool:
        return self.duty_count(shift_id, role) > 0

    def record(self, shift_id: int, role: Optional[str] = None) -> "AssignmentTally":
        headcount = dict(self.headcount)
        headcount[shift_id] = headcount.get(shift_id, 0) + 1
        duties = dict(self.duties)
        if role:
            duties[(shift_id, role)] = duties.get((shift_id, role), 0) + 1
        return replace(self, headcount=headcount, duties=duties)

    def with_extended_cover(self) -> "AssignmentTally":
        return replace(self, extended_cover=True)


__all__ = ["AssignmentTally"]
