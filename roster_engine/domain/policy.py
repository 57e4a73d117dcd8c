"""Scheduling policy knobs for the roster generator."""
from __future__ import annotations

from dataclasses import dataclass, field, fields
from typing import Any, Dict, Mapping, Optional

from .staff import DELIVERY, MANAGER, NORMAL_STAFF, SUPERVISOR

DEFAULT_COLORS: Dict[str, str] = {
    MANAGER: "#FF0000",
    SUPERVISOR: "#FF0000",
    DELIVERY: "#00B0F0",
    NORMAL_STAFF: "#FFFFFF",
}

DEFAULT_DAY_OFF_OFFSETS: Dict[str, int] = {
    SUPERVISOR: 0,
    NORMAL_STAFF: 1,
    DELIVERY: 2,
}


@dataclass(frozen=True)
class RosterPolicy:
    """Labels, fallbacks and optional behaviours of one generator version.

    Quotas and duty-role fill orders come from the shift catalog; everything
    else the passes need to decide lives here.
    """

    fallback_role: str = "C4"
    manager_role: str = "Z1 (Mgr)"
    supervisor_role: str = "S1 (Sup)"
    delivery_role: str = "C3 (Del)"
    delivery_cover_role: str = "C3 (Del Cov)"
    delivery_cover_time: str = "07:00-21:00"
    # Duty dropped from the afternoon fill while extended delivery cover runs.
    cover_suppressed_role: str = "C5"

    leave_requested_label: str = "Leave (Requested)"
    leave_week_label: str = "Leave (Week Off)"
    leave_sick_label: str = "Leave (Sick)"
    fixed_day_off_label: str = "Day Off (Fixed)"
    random_day_off_label: str = "Day Off"
    auto_off_label: str = "Leave (Auto Off)"

    leave_color: str = "#B91C1C"
    colors: Mapping[str, str] = field(default_factory=lambda: dict(DEFAULT_COLORS))

    afternoon_overflow: bool = True
    random_day_off: bool = False
    random_seed: Optional[int] = None
    day_off_offsets: Mapping[str, int] = field(default_factory=lambda: dict(DEFAULT_DAY_OFF_OFFSETS))

    def color_for(self, position: str) -> str:
        return self.colors.get(position) or self.colors.get(NORMAL_STAFF, "#FFFFFF")

    @classmethod
    def from_config(cls, config: Optional[Mapping[str, Any]]) -> "RosterPolicy":
        """Build a policy from a config mapping, ignoring unknown keys."""
        if not config:
            return cls()
        known = {item.name for item in fields(cls)}
        values = {key: value for key, value in config.items() if key in known}
        if "colors" in values:
            values["colors"] = {**DEFAULT_COLORS, **dict(values["colors"])}
        if "day_off_offsets" in values:
            values["day_off_offsets"] = {**DEFAULT_DAY_OFF_OFFSETS, **dict(values["day_off_offsets"])}
        return cls(**values)


__all__ = ["RosterPolicy", "DEFAULT_COLORS", "DEFAULT_DAY_OFF_OFFSETS"]
