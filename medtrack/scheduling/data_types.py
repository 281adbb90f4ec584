"""
Data types for the scheduling package.

Plain dataclasses so the scheduling logic can run on ORM rows, API payloads
or test fixtures alike.
"""

from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from typing import Any, Optional, Union

from medtrack.helpers.enums import DurationMode

DateLike = Union[date, datetime, str]


class TakenState(Enum):
    """Per (medication, day) state. Both transitions are user triggered."""
    NOT_TAKEN = "not_taken"
    TAKEN = "taken"


@dataclass(frozen=True)
class DurationInput:
    """
    How long a treatment lasts, as entered by the user.

    Attributes:
        mode: DAYS or RANGE. Inferred from the filled fields when omitted.
        days: Positive day count (DAYS mode).
        start: First day of the course (RANGE mode).
        end: Last day of the course (RANGE mode).
    """
    mode: Optional[DurationMode] = None
    days: Optional[int] = None
    start: Optional[DateLike] = None
    end: Optional[DateLike] = None


@dataclass(frozen=True)
class DurationResult:
    """Both representations of a treatment course, kept consistent."""
    days_needed: int
    start_date: datetime
    end_date: datetime


@dataclass(frozen=True)
class ProgressInfo:
    """
    Treatment course progress relative to "now".

    Attributes:
        days_elapsed: Whole days since the start date (rounded up).
        days_remaining: Days left, never negative.
        days_needed: Total course length.
        progress_percent: 0-100.
        is_complete: True once no days remain.
    """
    days_elapsed: int
    days_remaining: int
    days_needed: int
    progress_percent: float
    is_complete: bool


@dataclass
class MedicationView:
    """A medication merged with the taken state of one calendar day."""
    medication_id: Any
    name: str
    time: str
    person_name: Optional[str] = None
    dosage: Optional[str] = None
    frequency: Optional[str] = None
    notes: Optional[str] = None
    days_needed: Optional[int] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    taken: bool = False
    taken_at: Optional[datetime] = None
    marked_by: Optional[str] = None
    progress: Optional[ProgressInfo] = None
