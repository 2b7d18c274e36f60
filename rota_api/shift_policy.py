"""
Shift start policy.

Pure decision logic for starting a user's shift. Given the current time, the
user's stored shift record and the requested shift band, ``decide`` returns:

- ``Accept``  - new shift bounds to persist (start/end hour + start date)
- ``Reject``  - a shift was already recorded for today's calendar day
- ``Invalid`` - the requested band is missing or not one of SHIFT_BANDS

Rules (evaluated in order):

1. No stored shift_start_date → accept the requested band.
2. Same day-of-month and current hour != 0:
     stored end hour <  current hour → "held within" rejection
     stored end hour >= current hour → "is within" rejection
3. Same day-of-month, current hour == 0, stored end hour > 0 → "is within" rejection
4. Anything else → accept the requested band.

Only the day-of-month is compared (1-31), not the full date. A record started
on the 1st of last month still blocks a start on the 1st of this month.

The requested band is validated on the accepting paths only, so a same-day
rejection wins over a malformed request.

No I/O here, and the stored record is never mutated.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Mapping, Optional, Tuple, Union

SHIFT_BANDS: Tuple[str, ...] = ("0-8", "8-16", "16-24")
SHIFT_HOURS_FIELD = "shift_hours"
SHIFT_HOURS_LABEL = "Shift Hours"


@dataclass(frozen=True)
class Accept:
    shift_start_time: int
    shift_end_time: int
    shift_start_date: datetime

    def to_update(self) -> dict:
        """Fields written to the user record."""
        return {
            "shift_start_time": self.shift_start_time,
            "shift_end_time": self.shift_end_time,
            "shift_start_date": self.shift_start_date,
        }


@dataclass(frozen=True)
class Reject:
    reason: str


@dataclass(frozen=True)
class Invalid:
    field: str
    message: str


Decision = Union[Accept, Reject, Invalid]


class ShiftHoursError(ValueError):
    """Requested shift band failed validation."""

    def __init__(self, message: str, field: str = SHIFT_HOURS_FIELD):
        super().__init__(message)
        self.message = message
        self.field = field


def validate_shift_hours(shift_hours: Any) -> str:
    """Return the band unchanged or raise ShiftHoursError."""
    if shift_hours is None or shift_hours == "":
        raise ShiftHoursError(f"{SHIFT_HOURS_LABEL} is required")
    if not isinstance(shift_hours, str):
        raise ShiftHoursError(f"{SHIFT_HOURS_LABEL} must be a string")
    if shift_hours not in SHIFT_BANDS:
        raise ShiftHoursError(
            f"{SHIFT_HOURS_LABEL} must be one of [{', '.join(SHIFT_BANDS)}]"
        )
    return shift_hours


def get_shift_hours_and_date(shift_hours: Any, now: datetime) -> Tuple[int, int, datetime]:
    """Validate a band and split it into (start hour, end hour, start date)."""
    band = validate_shift_hours(shift_hours)
    start, end = band.split("-")
    return int(start), int(end), now


def parse_stored_date(value: Any) -> datetime:
    """Coerce a stored shift_start_date (datetime or ISO string) to an aware datetime.

    Naive values are UTC (that is how the record store persists them).
    """
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str):
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    else:
        raise TypeError(f"Unsupported shift_start_date value: {value!r}")

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _accept(requested_shift_hours: Any, now: datetime) -> Decision:
    try:
        start, end, started_at = get_shift_hours_and_date(requested_shift_hours, now)
    except ShiftHoursError as e:
        return Invalid(field=e.field, message=e.message)
    return Accept(shift_start_time=start, shift_end_time=end, shift_start_date=started_at)


def decide(
    now: datetime,
    existing_record: Optional[Mapping[str, Any]],
    requested_shift_hours: Any,
) -> Decision:
    """Decide whether a new shift may start at ``now``.

    Args:
        now: Current time. Naive values are treated as UTC; day and hour are
            read in now's own time zone.
        existing_record: Stored user record (needs shift_start_date,
            shift_start_time, shift_end_time), or None.
        requested_shift_hours: Raw band from the request body.

    Returns:
        Accept | Reject | Invalid
    """
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)

    stored_date = (existing_record or {}).get("shift_start_date")
    if not stored_date:
        return _accept(requested_shift_hours, now)

    started = parse_stored_date(stored_date).astimezone(now.tzinfo)
    start_time = existing_record.get("shift_start_time")
    end_time = existing_record.get("shift_end_time")
    same_day = started.day == now.day
    hour = now.hour

    if same_day and hour != 0:
        if end_time is not None and end_time < hour:
            return Reject(f"Shift for today held within {start_time}-{end_time} hours")
        return Reject(f"Shift for today is within {start_time}-{end_time} hours")

    if same_day and hour == 0 and end_time is not None and end_time > 0:
        return Reject(f"Shift for today is within {start_time}-{end_time} hours")

    return _accept(requested_shift_hours, now)
