from typing import List, Optional
from uuid import UUID

from fastapi import Depends
from sqlalchemy.orm import Session

from medtrack.db.base import get_db
from medtrack.models.model_medication import Medication
from medtrack.models.model_medication_log import MedicationLog


class MedicationRepository:
    def __init__(self, db_session: Session = Depends(get_db)):
        self.db = db_session

    def create(self, medication: Medication) -> Medication:
        self.db.add(medication)
        self.db.commit()
        self.db.refresh(medication)
        return medication

    def get_by_id(self, medication_id: UUID, user_id: UUID) -> Optional[Medication]:
        return self.db.query(Medication).filter(
            Medication.medication_id == medication_id,
            Medication.user_id == user_id
        ).first()

    def get_all_by_user(self, user_id: UUID) -> List[Medication]:
        return self.db.query(Medication).filter(
            Medication.user_id == user_id
        ).order_by(Medication.time.asc(), Medication.created_at.asc()).all()

    def update(self, medication: Medication) -> Medication:
        self.db.commit()
        self.db.refresh(medication)
        return medication

    def delete(self, medication_id: UUID, user_id: UUID) -> bool:
        medication = self.get_by_id(medication_id, user_id)
        if not medication:
            return False
        # Logs go first so backends without FK cascades stay consistent
        self.db.query(MedicationLog).filter(
            MedicationLog.medication_id == medication_id,
            MedicationLog.user_id == user_id
        ).delete(synchronize_session=False)
        self.db.delete(medication)
        self.db.commit()
        return True
