from __future__ import annotations

import re
from dataclasses import dataclass, replace
from typing import Any, Dict, Iterable, Mapping, Optional, Tuple

from .staff import AFTERNOON, MORNING, NIGHT

# Shift ids (match configuration keys)
MORNING_SHIFT = 1
AFTERNOON_SHIFT = 2
NIGHT_SHIFT = 3

SHIFT_ID_BY_PREFERENCE: Dict[str, int] = {
    MORNING: MORNING_SHIFT,
    AFTERNOON: AFTERNOON_SHIFT,
    NIGHT: NIGHT_SHIFT,
}

FULL_DAY = "Full Day"

_TIME_RANGE = re.compile(r"^([01]\d|2[0-3]):[0-5]\d-([01]\d|2[0-3]):[0-5]\d$")


def is_valid_time_range(value: Any) -> bool:
    """Return True for ``HH:MM-HH:MM`` strings (overnight ranges allowed)."""

    return isinstance(value, str) and bool(_TIME_RANGE.match(value.strip()))


@dataclass(frozen=True)
class ShiftDefinition:
    id: int
    name: str
    time: str
    roles: Tuple[str, ...]
    required: Optional[int]

    @property
    def required_label(self) -> str:
        return "N/A" if self.required is None else str(self.required)


class UnknownShiftError(KeyError):
    """Raised when a shift id is not part of the catalog."""


class ShiftCatalog:
    """Ordered, read-only set of shift definitions.

    Reconfiguring times produces a new catalog via :meth:`with_times`; an
    existing catalog never changes.
    """

    def __init__(self, shifts: Iterable[ShiftDefinition]):
        ordered = sorted(shifts, key=lambda shift: shift.id)
        self._shifts: Dict[int, ShiftDefinition] = {shift.id: shift for shift in ordered}
        if len(self._shifts) != len(ordered):
            raise ValueError("Shift ids must be unique")

    def get(self, shift_id: int) -> ShiftDefinition:
        try:
            return self._shifts[int(shift_id)]
        except (KeyError, TypeError, ValueError) as exc:
            raise UnknownShiftError(shift_id) from exc

    def all(self) -> Tuple[ShiftDefinition, ...]:
        return tuple(self._shifts.values())

    def by_name(self, name: str) -> ShiftDefinition:
        for shift in self._shifts.values():
            if shift.name == name:
                return shift
        raise UnknownShiftError(name)

    def __contains__(self, shift_id: object) -> bool:
        return shift_id in self._shifts

    def __iter__(self):
        return iter(self.all())

    def __len__(self) -> int:
        return len(self._shifts)

    def with_times(self, times: Mapping[Any, Any]) -> "ShiftCatalog":
        """Return a copy with the given ``{shift_id: time}`` overrides applied.

        Values may also be mappings carrying ``time`` and optionally ``name``.
        Ids the catalog does not know are rejected.
        """

        updated = dict(self._shifts)
        for raw_id, value in times.items():
            shift = self.get(int(raw_id))
            if isinstance(value, Mapping):
                time = value.get("time") or shift.time
                name = value.get("name") or shift.name
            else:
                time, name = value, shift.name
            if not is_valid_time_range(time):
                raise ValueError(f"Invalid time range for shift {shift.id}: {time!r}")
            updated[shift.id] = replace(shift, time=str(time).strip(), name=str(name))
        return ShiftCatalog(updated.values())

    @classmethod
    def from_config(cls, config: Mapping[Any, Mapping[str, Any]]) -> "ShiftCatalog":
        shifts = []
        for raw_id, spec in config.items():
            required = spec.get("required")
            shifts.append(
                ShiftDefinition(
                    id=int(raw_id),
                    name=str(spec["name"]),
                    time=str(spec["time"]),
                    roles=tuple(spec.get("roles", ())),
                    required=None if required in (None, "N/A") else int(required),
                )
            )
        return cls(shifts)

    def to_config(self) -> Dict[str, Dict[str, Any]]:
        return {
            str(shift.id): {
                "name": shift.name,
                "time": shift.time,
                "roles": list(shift.roles),
                "required": shift.required_label if shift.required is None else shift.required,
            }
            for shift in self.all()
        }


__all__ = [
    "MORNING_SHIFT",
    "AFTERNOON_SHIFT",
    "NIGHT_SHIFT",
    "SHIFT_ID_BY_PREFERENCE",
    "FULL_DAY",
    "ShiftDefinition",
    "ShiftCatalog",
    "UnknownShiftError",
    "is_valid_time_range",
]
