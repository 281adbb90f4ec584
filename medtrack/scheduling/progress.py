import math
from datetime import datetime, timezone
from typing import Any, Optional

from .calendar_days import ensure_aware, parse_date_like, start_of_day
from .data_types import ProgressInfo

SECONDS_PER_DAY = 24 * 60 * 60


def compute_progress(medication: Any, now: Optional[datetime] = None) -> Optional[ProgressInfo]:
    """
    Progress of a medication's treatment course.

    Returns None when the medication has no day count or no start date.
    Elapsed days use the absolute distance to the start date, so a course
    starting in the future also reports elapsed days.
    """
    days_needed = getattr(medication, 'days_needed', None)
    start_value = getattr(medication, 'start_date', None)
    if not days_needed or days_needed < 0 or not start_value:
        return None

    start = parse_date_like(start_value)
    if not isinstance(start, datetime):
        start = start_of_day(start)

    if now is None:
        now = datetime.now(timezone.utc)
    if start.tzinfo is not None or now.tzinfo is not None:
        start, now = ensure_aware(start), ensure_aware(now)

    days_elapsed = math.ceil(abs((now - start).total_seconds()) / SECONDS_PER_DAY)
    days_left = days_needed - days_elapsed

    return ProgressInfo(
        days_elapsed=days_elapsed,
        days_remaining=max(0, days_left),
        days_needed=days_needed,
        progress_percent=min(100.0, 100.0 * days_elapsed / days_needed),
        is_complete=days_left <= 0,
    )
