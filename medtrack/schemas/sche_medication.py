from datetime import date, datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, Field

from medtrack.helpers.enums import DurationMode
from medtrack.scheduling import DurationInput

TIME_PATTERN = r'^([01]\d|2[0-3]):[0-5]\d$'
DURATION_FIELDS = ('duration_mode', 'days_needed', 'start_date', 'end_date')


class MedicationBase(BaseModel):
    name: str = Field(..., min_length=1)
    time: str = Field(..., pattern=TIME_PATTERN, description="Scheduled time, 24-hour HH:MM")
    person_name: Optional[str] = Field(None, description="Family member the medication is for")
    dosage: Optional[str] = None
    frequency: Optional[str] = None
    notes: Optional[str] = None


class DurationFields(BaseModel):
    duration_mode: Optional[DurationMode] = None
    days_needed: Optional[int] = Field(None, gt=0)
    start_date: Optional[date] = None
    end_date: Optional[date] = None

    def has_duration_input(self) -> bool:
        return any(name in self.model_fields_set for name in DURATION_FIELDS)

    def to_duration_input(self) -> DurationInput:
        return DurationInput(
            mode=self.duration_mode,
            days=self.days_needed,
            start=self.start_date,
            end=self.end_date,
        )


class MedicationCreateRequest(MedicationBase, DurationFields):
    pass


class MedicationUpdateRequest(DurationFields):
    name: Optional[str] = Field(None, min_length=1)
    time: Optional[str] = Field(None, pattern=TIME_PATTERN)
    person_name: Optional[str] = None
    dosage: Optional[str] = None
    frequency: Optional[str] = None
    notes: Optional[str] = None
    clear_duration: bool = False


class ProgressResponse(BaseModel):
    days_elapsed: int
    days_remaining: int
    days_needed: int
    progress_percent: float
    is_complete: bool

    class Config:
        from_attributes = True


class MedicationResponse(MedicationBase):
    medication_id: UUID
    days_needed: Optional[int] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    taken: bool = False
    taken_at: Optional[datetime] = None
    marked_by: Optional[str] = None
    progress: Optional[ProgressResponse] = None

    class Config:
        from_attributes = True
