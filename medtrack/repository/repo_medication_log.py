from datetime import date, datetime
from typing import List, Optional
from uuid import UUID

from fastapi import Depends
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from medtrack.db.base import get_db
from medtrack.models.model_medication_log import MedicationLog


class MedicationLogRepository:
    def __init__(self, db_session: Session = Depends(get_db)):
        self.db = db_session

    def get_in_window(self, user_id: UUID, start: datetime, end: datetime) -> List[MedicationLog]:
        return self.db.query(MedicationLog).filter(
            MedicationLog.user_id == user_id,
            MedicationLog.taken_at >= start,
            MedicationLog.taken_at < end
        ).order_by(MedicationLog.taken_at.asc()).all()

    def get_for_day(self, medication_id: UUID, user_id: UUID, taken_on: date) -> Optional[MedicationLog]:
        return self.db.query(MedicationLog).filter(
            MedicationLog.medication_id == medication_id,
            MedicationLog.user_id == user_id,
            MedicationLog.taken_on == taken_on
        ).first()

    def create(self, log: MedicationLog) -> Optional[MedicationLog]:
        """Insert ``log``; returns None when another log already holds its day."""
        self.db.add(log)
        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            return None
        self.db.refresh(log)
        return log

    def delete_in_window(self, medication_id: UUID, user_id: UUID, start: datetime, end: datetime) -> int:
        deleted = self.db.query(MedicationLog).filter(
            MedicationLog.medication_id == medication_id,
            MedicationLog.user_id == user_id,
            MedicationLog.taken_at >= start,
            MedicationLog.taken_at < end
        ).delete(synchronize_session=False)
        self.db.commit()
        return deleted
