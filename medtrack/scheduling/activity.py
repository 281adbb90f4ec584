from datetime import tzinfo
from typing import Any, Optional

from .calendar_days import to_local_date
from .data_types import DateLike


def is_active_on(medication: Any, on_date: DateLike, tz: Optional[tzinfo] = None) -> bool:
    """
    Whether ``medication`` should appear on the calendar day ``on_date``.

    A medication without a complete start/end pair is ongoing and active on
    every day. Otherwise the check is inclusive on both ends and ignores the
    time of day.
    """
    start_date = getattr(medication, 'start_date', None)
    end_date = getattr(medication, 'end_date', None)
    if not start_date or not end_date:
        return True

    day = to_local_date(on_date, tz)
    return to_local_date(start_date, tz) <= day <= to_local_date(end_date, tz)
