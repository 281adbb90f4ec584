from sqlalchemy import Column, String, Date, DateTime, ForeignKey, Text, func, UniqueConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.dialects.postgresql import UUID
from medtrack.models.model_base import Base
import uuid

class MedicationLog(Base):
    __tablename__ = "medication_logs"

    log_id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    medication_id = Column(UUID(as_uuid=True), ForeignKey("medications.medication_id", ondelete="CASCADE"), nullable=False, index=True)
    user_id = Column(UUID(as_uuid=True), ForeignKey("users.user_id", ondelete="CASCADE"), nullable=False, index=True)
    taken_at = Column(DateTime(timezone=True), nullable=False, index=True)
    taken_on = Column(Date, nullable=False)
    scheduled_time = Column(String(5), nullable=False)
    marked_by = Column(Text)
    created_at = Column(DateTime(timezone=True), default=func.now())

    medication = relationship("Medication", back_populates="logs")

    __table_args__ = (
        UniqueConstraint('medication_id', 'taken_on', name='uq_medication_log_day'),
    )
