"""Weekly roster generation.

One call takes the staff list and a Monday and returns a complete 7-day
roster. Each day runs the same passes in order:

1. leave and day-off (requested leave, fixed day off, optional random day off)
2. leadership (managers on Morning, supervisors on their preference)
3. delivery (own shift, or extended cover when a partner is off)
4. night duties for normal staff (C2 then C1, capped by the night roles)
5. morning/afternoon fill for the remaining normal staff
6. auto off for anyone still unplaced
"""
from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Union

from ..domain.policy import RosterPolicy
from ..domain.requests import FULL_WEEK, SICK_LEAVE, LeaveRequest
from ..domain.roster import DayAssignment, WeeklyRosterEntry
from ..domain.shift import (
    AFTERNOON_SHIFT,
    FULL_DAY,
    MORNING_SHIFT,
    NIGHT_SHIFT,
    SHIFT_ID_BY_PREFERENCE,
    ShiftCatalog,
    ShiftDefinition,
)
from ..domain.staff import (
    DAYS,
    DELIVERY,
    MANAGER,
    MORNING,
    NORMAL_STAFF,
    POSITIONS,
    SUPERVISOR,
    StaffProfile,
)
from ..domain.tally import AssignmentTally
from ..infrastructure.config import default_catalog, default_policy
from .builder import RosterMember, WeekBuilder
from .day_off import distribute_day_offs
from .request_parser import parse_request

logger = logging.getLogger(__name__)

ProfileLike = Union[StaffProfile, Mapping[str, Any]]


def _coerce_week_start(value: Union[date, datetime, str]) -> date:
    if isinstance(value, datetime):
        value = value.date()
    elif isinstance(value, str):
        value = date.fromisoformat(value)
    if value.weekday() != 0:
        raise ValueError(f"Week start {value.isoformat()} is not a Monday")
    return value


def _coerce_profile(value: ProfileLike) -> StaffProfile:
    if isinstance(value, StaffProfile):
        return value
    return StaffProfile.from_mapping(value)


class RosterGenerator:
    def __init__(self, catalog: Optional[ShiftCatalog] = None, policy: Optional[RosterPolicy] = None):
        self.catalog = catalog or default_catalog()
        self.policy = policy or default_policy()

    # ------------------------------------------------------------------
    def generate(
        self,
        staff_profiles: Iterable[ProfileLike],
        week_start: Union[date, datetime, str],
    ) -> List[WeeklyRosterEntry]:
        week_start = _coerce_week_start(week_start)
        members = [
            RosterMember(key=index, profile=profile, request=parse_request(profile.next_week_request, week_start))
            for index, profile in enumerate(_coerce_profile(item) for item in staff_profiles)
        ]
        groups = self._group(members)
        random_offs: Dict[int, str] = {}
        if self.policy.random_day_off:
            random_offs = distribute_day_offs(groups, self.policy, week_start)

        builder = WeekBuilder(members)
        for day_index, day in enumerate(DAYS):
            self._leave_pass(builder, members, day_index, random_offs)
            tally = AssignmentTally()
            tally = self._leadership_pass(builder, groups, day_index, tally)
            tally = self._delivery_pass(builder, groups[DELIVERY], day_index, tally)
            tally = self._night_pass(builder, groups[NORMAL_STAFF], day_index, tally)
            tally = self._day_pass(builder, groups[NORMAL_STAFF], day_index, tally)
            self._auto_off_pass(builder, groups[NORMAL_STAFF], day_index)
            logger.debug(
                "%s %s: morning=%d afternoon=%d night=%d cover=%s",
                week_start.isoformat(),
                day,
                tally.count(MORNING_SHIFT),
                tally.count(AFTERNOON_SHIFT),
                tally.count(NIGHT_SHIFT),
                tally.extended_cover,
            )

        logger.info("Generated roster for week %s (%d staff)", week_start.isoformat(), len(members))
        return builder.build()

    # ------------------------------------------------------------------
    @staticmethod
    def _group(members: Sequence[RosterMember]) -> Dict[str, List[RosterMember]]:
        """Split members by position; each group is ordered by employee id."""
        groups: Dict[str, List[RosterMember]] = {position: [] for position in POSITIONS}
        for member in members:
            position = member.profile.position if member.profile.position in POSITIONS else NORMAL_STAFF
            groups[position].append(member)
        for position in groups:
            groups[position].sort(key=lambda member: member.employee_id)
        return groups

    def _shift(self, shift_id: int) -> ShiftDefinition:
        return self.catalog.get(shift_id)

    def _leave_label(self, leave: LeaveRequest) -> str:
        if leave.day == FULL_WEEK:
            return self.policy.leave_week_label
        if leave.day == SICK_LEAVE:
            return self.policy.leave_sick_label
        return self.policy.leave_requested_label

    def _leave_pass(
        self,
        builder: WeekBuilder,
        members: Sequence[RosterMember],
        day_index: int,
        random_offs: Mapping[int, str],
    ) -> None:
        day = DAYS[day_index]
        for member in members:
            leave = member.leave
            if leave is not None and leave.applies_to(day):
                assignment = DayAssignment(None, self._leave_label(leave), FULL_DAY, self.policy.leave_color)
            elif member.profile.fixed_day_off == day:
                assignment = DayAssignment(
                    None, self.policy.fixed_day_off_label, FULL_DAY, self.policy.color_for(member.profile.position)
                )
            elif random_offs.get(member.key) == day:
                assignment = DayAssignment(
                    None, self.policy.random_day_off_label, FULL_DAY, self.policy.color_for(member.profile.position)
                )
            else:
                continue
            builder.assign(member.key, day_index, assignment)

    def _place(
        self,
        builder: WeekBuilder,
        member: RosterMember,
        day_index: int,
        tally: AssignmentTally,
        shift_id: int,
        role: str,
        time_range: Optional[str] = None,
        color: Optional[str] = None,
    ) -> AssignmentTally:
        assignment = DayAssignment(
            shift_id,
            role,
            time_range or self._shift(shift_id).time,
            color or self.policy.color_for(member.profile.position),
        )
        builder.assign(member.key, day_index, assignment)
        return tally.record(shift_id, assignment.base_role)

    def _leadership_pass(
        self,
        builder: WeekBuilder,
        groups: Mapping[str, Sequence[RosterMember]],
        day_index: int,
        tally: AssignmentTally,
    ) -> AssignmentTally:
        for manager in groups[MANAGER]:
            if not builder.is_scheduled(manager.key, day_index):
                tally = self._place(builder, manager, day_index, tally, MORNING_SHIFT, self.policy.manager_role)
        for supervisor in groups[SUPERVISOR]:
            if builder.is_scheduled(supervisor.key, day_index):
                continue
            shift_id = SHIFT_ID_BY_PREFERENCE.get(supervisor.effective_preference, MORNING_SHIFT)
            tally = self._place(builder, supervisor, day_index, tally, shift_id, self.policy.supervisor_role)
        return tally

    def _delivery_pass(
        self,
        builder: WeekBuilder,
        drivers: Sequence[RosterMember],
        day_index: int,
        tally: AssignmentTally,
    ) -> AssignmentTally:
        working = [driver for driver in drivers if not builder.is_scheduled(driver.key, day_index)]
        partner_off = len(working) < len(drivers)
        if partner_off and len(working) == 1:
            tally = tally.with_extended_cover()
            return self._place(
                builder,
                working[0],
                day_index,
                tally,
                MORNING_SHIFT,
                self.policy.delivery_cover_role,
                time_range=self.policy.delivery_cover_time,
            )
        for driver in working:
            shift_id = MORNING_SHIFT if driver.effective_preference == MORNING else AFTERNOON_SHIFT
            tally = self._place(builder, driver, day_index, tally, shift_id, self.policy.delivery_role)
        return tally

    def _night_pass(
        self,
        builder: WeekBuilder,
        staff: Sequence[RosterMember],
        day_index: int,
        tally: AssignmentTally,
    ) -> AssignmentTally:
        night = self._shift(NIGHT_SHIFT)
        for member in staff:
            if builder.is_scheduled(member.key, day_index):
                continue
            if SHIFT_ID_BY_PREFERENCE.get(member.effective_preference) != NIGHT_SHIFT:
                continue
            role = next((role for role in night.roles if not tally.has_duty(NIGHT_SHIFT, role)), None)
            if role is None:
                break
            tally = self._place(builder, member, day_index, tally, NIGHT_SHIFT, role)
        return tally

    def _day_pass(
        self,
        builder: WeekBuilder,
        staff: Sequence[RosterMember],
        day_index: int,
        tally: AssignmentTally,
    ) -> AssignmentTally:
        for member in staff:
            if builder.is_scheduled(member.key, day_index):
                continue
            shift_id = self.choose_day_shift(member.effective_preference, tally)
            if shift_id is None:
                continue
            tally = self._place(builder, member, day_index, tally, shift_id, self.day_role(shift_id, tally))
        return tally

    def _auto_off_pass(self, builder: WeekBuilder, staff: Sequence[RosterMember], day_index: int) -> None:
        for member in staff:
            if not builder.is_scheduled(member.key, day_index):
                builder.assign(
                    member.key,
                    day_index,
                    DayAssignment(
                        None, self.policy.auto_off_label, FULL_DAY, self.policy.color_for(member.profile.position)
                    ),
                )

    # ------------------------------------------------------------------
    def _has_room(self, shift_id: int, tally: AssignmentTally) -> bool:
        required = self._shift(shift_id).required
        return required is None or tally.count(shift_id) < required

    def choose_day_shift(self, preference: str, tally: AssignmentTally) -> Optional[int]:
        """Pick Morning or Afternoon for a normal staff member.

        The preferred shift wins while it is under quota; otherwise the
        under-quota shift with fewer people (Morning on a tie); otherwise
        Afternoon overflow, or ``None`` when overflow is disabled.
        """
        preferred = SHIFT_ID_BY_PREFERENCE.get(preference)
        if preferred in (MORNING_SHIFT, AFTERNOON_SHIFT) and self._has_room(preferred, tally):
            return preferred
        open_shifts = [shift_id for shift_id in (MORNING_SHIFT, AFTERNOON_SHIFT) if self._has_room(shift_id, tally)]
        if open_shifts:
            return min(open_shifts, key=tally.count)
        if self.policy.afternoon_overflow:
            return AFTERNOON_SHIFT
        return None

    def day_role(self, shift_id: int, tally: AssignmentTally) -> str:
        """First duty of the shift not yet held today, else the fallback duty."""
        for role in self._shift(shift_id).roles:
            if shift_id == AFTERNOON_SHIFT and tally.extended_cover and role == self.policy.cover_suppressed_role:
                continue
            if not tally.has_duty(shift_id, role):
                return role
        return self.policy.fallback_role


def generate_weekly_roster(
    staff_profiles: Iterable[ProfileLike],
    week_start: Union[date, datetime, str],
    *,
    catalog: Optional[ShiftCatalog] = None,
    policy: Optional[RosterPolicy] = None,
) -> List[WeeklyRosterEntry]:
    """Generate the roster for the week starting on Monday *week_start*."""
    return RosterGenerator(catalog=catalog, policy=policy).generate(staff_profiles, week_start)


__all__ = ["RosterGenerator", "generate_weekly_roster"]
