"""Round-robin day off for staff without a fixed day off."""
from __future__ import annotations

import random
from datetime import date
from typing import Dict, Mapping, Optional, Sequence

from ..domain.policy import RosterPolicy
from ..domain.requests import NoRequest
from ..domain.staff import DAYS
from .builder import RosterMember


def distribute_day_offs(
    groups: Mapping[str, Sequence[RosterMember]],
    policy: RosterPolicy,
    week_start: date,
) -> Dict[int, str]:
    """Return ``{member key: day}`` for every eligible staff member.

    Eligible means no fixed day off and no active request. Each position
    group starts at its own offset so one day is not emptied for everybody.
    With ``random_seed`` set the order inside a group is shuffled by a
    generator seeded with the seed and the week, so reruns are identical.
    """

    rng: Optional[random.Random] = None
    if policy.random_seed is not None:
        rng = random.Random(f"{policy.random_seed}:{week_start.isoformat()}")

    assigned: Dict[int, str] = {}
    for position, members in groups.items():
        if position not in policy.day_off_offsets:
            continue
        offset = int(policy.day_off_offsets[position])
        eligible = [
            member
            for member in members
            if not member.profile.has_fixed_day_off and isinstance(member.request, NoRequest)
        ]
        if rng is not None:
            rng.shuffle(eligible)
        for index, member in enumerate(eligible):
            assigned[member.key] = DAYS[(index + offset) % len(DAYS)]
    return assigned


__all__ = ["distribute_day_offs"]
