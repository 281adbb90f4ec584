"""
Calendar-day helpers shared by the scheduling modules.

Stored instants are compared at day granularity in the caller's local zone.
Naive instants are assumed to be UTC when a zone is requested, which is also
how SQLite hands back timezone-aware columns.
"""

from datetime import date, datetime, time, timedelta, timezone, tzinfo
from typing import Optional, Tuple, Union

from .data_types import DateLike

ONE_DAY = timedelta(days=1)


def parse_date_like(value: DateLike) -> Union[date, datetime]:
    """
    Accept a date, a datetime or an ISO-8601 string.

    Raises:
        ValueError: If a string is not ISO-8601.
        TypeError: For any other type.
    """
    if isinstance(value, (date, datetime)):
        return value
    if isinstance(value, str):
        text = value.strip()
        if len(text) == 10:
            return date.fromisoformat(text)
        return datetime.fromisoformat(text.replace('Z', '+00:00'))
    raise TypeError(f"Expected a date, datetime or ISO string, got {type(value).__name__}")


def ensure_aware(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def to_local_date(value: DateLike, tz: Optional[tzinfo] = None) -> date:
    """
    Calendar day of ``value`` as seen in ``tz``.

    Plain dates are already calendar days and come back unchanged. Without
    ``tz`` a datetime keeps its own wall clock.
    """
    parsed = parse_date_like(value)
    if not isinstance(parsed, datetime):
        return parsed
    if tz is not None:
        parsed = ensure_aware(parsed).astimezone(tz)
    return parsed.date()


def start_of_day(day: date, tz: Optional[tzinfo] = None) -> datetime:
    return datetime.combine(day, time.min, tzinfo=tz)


def day_window(day: date, tz: tzinfo) -> Tuple[datetime, datetime]:
    """UTC bounds ``[start, end)`` of the local calendar day ``day``."""
    start = start_of_day(day, tz)
    end = start_of_day(day + ONE_DAY, tz)
    return start.astimezone(timezone.utc), end.astimezone(timezone.utc)
