"""
Daily schedule projection.

Re-run from scratch whenever the medication set or display settings change;
the result depends only on the snapshot passed in.
"""

from datetime import tzinfo
from typing import Any, Callable, Dict, Iterable, List, Optional, Union

from medtrack.helpers.enums import SortBy

from .activity import is_active_on
from .data_types import DateLike

_SORT_KEYS: Dict[SortBy, Callable[[Any], Any]] = {
    # Zero-padded HH:MM strings sort chronologically
    SortBy.TIME: lambda med: med.time,
    SortBy.NAME: lambda med: med.name,
    # False sorts first, so not-taken items lead
    SortBy.STATUS: lambda med: bool(getattr(med, 'taken', False)),
}


def project_schedule(medications: Iterable[Any],
                     on_date: DateLike,
                     show_completed: bool = True,
                     sort_by: Union[SortBy, str] = SortBy.TIME,
                     tz: Optional[tzinfo] = None) -> List[Any]:
    """
    Ordered list of medications to display for ``on_date``.

    Args:
        medications: Medications already reconciled with the day's taken state.
        on_date: The calendar day being rendered.
        show_completed: When False, taken medications are left out.
        sort_by: "time", "name" or "status". Sorting is stable.
        tz: Zone used to read stored start/end instants as local days.

    Returns:
        A new list; the input is not modified.
    """
    sort_key = _SORT_KEYS[SortBy(sort_by)]

    visible = [med for med in medications if is_active_on(med, on_date, tz)]
    if not show_completed:
        visible = [med for med in visible if not getattr(med, 'taken', False)]

    return sorted(visible, key=sort_key)
