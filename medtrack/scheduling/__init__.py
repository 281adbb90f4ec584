"""
Scheduling logic for medication courses.

Pure functions over in-memory medications and logs: duration resolution,
per-day activity, schedule projection, course progress and taken-state
reconciliation. Nothing here touches the database or the web layer.
"""

from .data_types import (
    DurationInput, DurationResult, ProgressInfo, MedicationView, TakenState
)
from .calendar_days import (
    parse_date_like, ensure_aware, to_local_date, start_of_day, day_window
)
from .duration import resolve_duration, days_between_inclusive
from .activity import is_active_on
from .projector import project_schedule
from .progress import compute_progress
from .reconciler import find_log, taken_state, reconcile, reconcile_all

__all__ = [
    # Data types
    'DurationInput', 'DurationResult', 'ProgressInfo', 'MedicationView', 'TakenState',

    # Calendar days
    'parse_date_like', 'ensure_aware', 'to_local_date', 'start_of_day', 'day_window',

    # Operations
    'resolve_duration', 'days_between_inclusive', 'is_active_on', 'project_schedule',
    'compute_progress', 'find_log', 'taken_state', 'reconcile', 'reconcile_all',
]
