"""
Roster generation configuration. Shift structure and policy defaults live here.
"""
from __future__ import annotations

import copy
from typing import Any, Dict, Mapping, Optional

from ..domain.policy import RosterPolicy
from ..domain.shift import ShiftCatalog

CONFIG: Dict[str, Any] = {
    # Primary shifts. Times can be overridden per organization; required
    # headcounts and duty roles are fixed. Role order is the fill order.
    "shifts": {
        1: {"name": "Morning",   "time": "07:00-16:00", "roles": ["C5", "C4", "C3"], "required": 6},
        2: {"name": "Afternoon", "time": "13:30-22:30", "roles": ["C3", "C4", "C5"], "required": 5},
        # Night has no headcount target: one C2 and one C1 from normal staff.
        3: {"name": "Night",     "time": "22:00-07:00", "roles": ["C2", "C1"],       "required": "N/A"},
    },

    "policy": {
        "fallback_role": "C4",
        "delivery_cover_time": "07:00-21:00",
        # Normal staff above both quotas go to Afternoon; when off they get "Leave (Auto Off)".
        "afternoon_overflow": True,
        # Round-robin day off for staff without a fixed day off (seedable shuffle).
        "random_day_off": False,
        "random_seed": None,
    },
}


def merged_config(overrides: Optional[Mapping[str, Any]] = None) -> Dict[str, Any]:
    """Return a deep copy of :data:`CONFIG` with ``shifts``/``policy`` overrides merged in."""
    config = copy.deepcopy(CONFIG)
    if not overrides:
        return config
    for raw_id, spec in (overrides.get("shifts") or {}).items():
        shift_id = int(raw_id)
        config["shifts"][shift_id] = {**config["shifts"].get(shift_id, {}), **dict(spec)}
    config["policy"].update(overrides.get("policy") or {})
    return config


def default_catalog(config: Optional[Mapping[str, Any]] = None) -> ShiftCatalog:
    return ShiftCatalog.from_config((config or CONFIG)["shifts"])


def default_policy(config: Optional[Mapping[str, Any]] = None) -> RosterPolicy:
    return RosterPolicy.from_config((config or CONFIG).get("policy"))


__all__ = ["CONFIG", "merged_config", "default_catalog", "default_policy"]
