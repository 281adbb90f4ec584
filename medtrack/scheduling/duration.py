"""
Duration resolution.

A treatment course is stored twice: as a day count and as a start/end pair.
Whichever one the user edits, the other is recomputed here.
"""

import math
from datetime import datetime, timedelta, timezone, tzinfo
from typing import Optional

from medtrack.helpers.enums import DurationMode

from .calendar_days import ensure_aware, parse_date_like, start_of_day
from .data_types import DateLike, DurationInput, DurationResult

SECONDS_PER_DAY = 24 * 60 * 60


def resolve_duration(duration: DurationInput,
                     now: Optional[datetime] = None,
                     tz: Optional[tzinfo] = None) -> Optional[DurationResult]:
    """
    Turn a day count or a date range into a consistent DurationResult.

    DAYS mode anchors the course to the start of the current local day and
    ends it ``days`` times 24 hours later. Re-submitting an existing
    medication in DAYS mode therefore moves its start date to the day of the
    edit. RANGE mode counts both endpoints.

    Args:
        duration: What the user entered.
        now: Reference instant for DAYS mode; defaults to the current time.
        tz: Zone that defines "today" and the midnight of RANGE dates.

    Returns:
        The resolved duration, or None when the input carries no usable
        duration. Absence is a valid state, not an error.
    """
    mode = duration.mode
    if mode is not None:
        mode = DurationMode(mode)
    elif duration.days is not None:
        mode = DurationMode.DAYS
    elif duration.start is not None and duration.end is not None:
        mode = DurationMode.RANGE

    if mode is DurationMode.DAYS and _is_positive_int(duration.days):
        return _days_to_range(duration.days, now, tz)
    if mode is DurationMode.RANGE and duration.start is not None and duration.end is not None:
        return _range_to_days(duration.start, duration.end, tz)
    return None


def days_between_inclusive(start: datetime, end: datetime) -> int:
    """Days covered by ``start``..``end``; a same-day range is 1 day."""
    span = abs((end - start).total_seconds()) / SECONDS_PER_DAY
    return math.ceil(span) + 1


def _is_positive_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value > 0


def _days_to_range(days: int, now: Optional[datetime], tz: Optional[tzinfo]) -> DurationResult:
    if now is None:
        now = datetime.now(tz or timezone.utc)
    elif tz is not None:
        now = ensure_aware(now).astimezone(tz)

    start = start_of_day(now.date(), now.tzinfo)
    # Fixed 24-hour days; across a DST change the end is not a local midnight
    if start.tzinfo is None:
        end = start + timedelta(days=days)
    else:
        end = (start.astimezone(timezone.utc) + timedelta(days=days)).astimezone(start.tzinfo)
    return DurationResult(days_needed=days, start_date=start, end_date=end)


def _anchor(value: DateLike, tz: Optional[tzinfo]) -> datetime:
    parsed = parse_date_like(value)
    if isinstance(parsed, datetime):
        if parsed.tzinfo is None and tz is not None:
            return parsed.replace(tzinfo=tz)
        return parsed
    return start_of_day(parsed, tz)


def _range_to_days(start: DateLike, end: DateLike, tz: Optional[tzinfo]) -> DurationResult:
    start_date = _anchor(start, tz)
    end_date = _anchor(end, tz)
    if (start_date.tzinfo is None) != (end_date.tzinfo is None):
        start_date, end_date = ensure_aware(start_date), ensure_aware(end_date)
    return DurationResult(
        days_needed=days_between_inclusive(start_date, end_date),
        start_date=start_date,
        end_date=end_date,
    )
