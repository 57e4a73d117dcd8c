"""Decoding of the ``nextWeekHolidayRequest`` field.

The stored value is ``"<ISO Monday>:<value>"`` or the literal ``"None"``. It is
parsed once here; the generator only ever sees the tagged variants from
:mod:`roster_engine.domain.requests`.
"""
from __future__ import annotations

from datetime import date, datetime
from typing import Any, Optional, Tuple

from ..domain.requests import (
    FULL_WEEK,
    NO_REQUEST,
    SICK_LEAVE,
    LeaveRequest,
    ShiftChangeRequest,
    StaffRequest,
)
from ..domain.staff import DAYS, NO_REQUEST as NO_REQUEST_VALUE, PREFERENCES

LEAVE_VALUES = DAYS + (FULL_WEEK, SICK_LEAVE)
REQUEST_VALUES = LEAVE_VALUES + PREFERENCES


def _split(raw: Any) -> Optional[Tuple[date, str]]:
    """Return ``(monday, value)`` for a well-formed ``YYYY-MM-DD:<value>`` string."""
    if not isinstance(raw, str):
        return None
    parts = raw.strip().split(":")
    if len(parts) != 2:
        return None
    week_part, value = (part.strip() for part in parts)
    try:
        return datetime.strptime(week_part, "%Y-%m-%d").date(), value
    except ValueError:
        return None


class InvalidRequestError(ValueError):
    """Raised when a request cannot be encoded."""


def parse_request(raw: Any, week_start: date) -> StaffRequest:
    """Interpret *raw* for the week starting on *week_start*.

    Requests for another week (expired or not yet due) and anything
    malformed resolve to :data:`NO_REQUEST`. Nothing here raises.
    """

    if not isinstance(raw, str) or raw.strip() in ("", NO_REQUEST_VALUE):
        return NO_REQUEST

    parsed = _split(raw)
    if parsed is None:
        return NO_REQUEST

    request_week, value = parsed
    if request_week != week_start:
        return NO_REQUEST
    if value in LEAVE_VALUES:
        return LeaveRequest(day=value)
    if value in PREFERENCES:
        return ShiftChangeRequest(shift=value)
    return NO_REQUEST


def encode_request(week_start: date, value: str) -> str:
    """Build the stored form of a request for *week_start*."""

    if week_start.weekday() != 0:
        raise InvalidRequestError(f"{week_start.isoformat()} is not a Monday")
    value = (value or "").strip()
    if value not in REQUEST_VALUES:
        raise InvalidRequestError(
            f"Unknown request value {value!r}; expected one of {', '.join(REQUEST_VALUES)}"
        )
    return f"{week_start.isoformat()}:{value}"


def is_expired(raw: Any, week_start: date) -> bool:
    """True when *raw* is a well-formed request for a week before *week_start*."""
    parsed = _split(raw)
    return parsed is not None and parsed[0] < week_start


__all__ = [
    "InvalidRequestError",
    "LEAVE_VALUES",
    "REQUEST_VALUES",
    "encode_request",
    "is_expired",
    "parse_request",
]
