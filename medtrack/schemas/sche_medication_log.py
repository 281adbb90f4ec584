from datetime import date, datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, Field

from medtrack.schemas.sche_medication import TIME_PATTERN


class MedicationLogCreateRequest(BaseModel):
    medication_id: UUID
    scheduled_time: Optional[str] = Field(None, pattern=TIME_PATTERN,
                                          description="Defaults to the medication's time")
    marked_by: Optional[str] = None


class MedicationLogResponse(BaseModel):
    log_id: UUID
    medication_id: UUID
    taken_at: datetime
    taken_on: date
    scheduled_time: str
    marked_by: Optional[str] = None

    class Config:
        from_attributes = True
