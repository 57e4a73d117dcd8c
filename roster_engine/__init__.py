"""Weekly staff roster engine exposing primary components."""

from .domain.policy import RosterPolicy
from .domain.roster import DayAssignment, WeeklyRosterEntry
from .domain.shift import ShiftCatalog, ShiftDefinition
from .domain.staff import StaffProfile
from .services.generator import RosterGenerator, generate_weekly_roster
from .services.request_parser import encode_request, parse_request

__all__ = [
    "DayAssignment",
    "RosterGenerator",
    "RosterPolicy",
    "ShiftCatalog",
    "ShiftDefinition",
    "StaffProfile",
    "WeeklyRosterEntry",
    "encode_request",
    "generate_weekly_roster",
    "parse_request",
]
