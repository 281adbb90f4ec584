import datetime as dt
from typing import List

from pydantic import BaseModel

from medtrack.helpers.enums import SortBy
from medtrack.schemas.sche_medication import MedicationResponse


class ScheduleResponse(BaseModel):
    date: dt.date
    sort_by: SortBy
    show_completed: bool
    medications: List[MedicationResponse]


class ScheduleSummary(BaseModel):
    taken_count: int
    total_count: int
    progress: float


class ScheduleOverviewResponse(BaseModel):
    today: ScheduleResponse
    tomorrow: ScheduleResponse
    summary: ScheduleSummary
