from sqlalchemy import Column, String, Integer, Text, DateTime, ForeignKey, func
from sqlalchemy.orm import relationship
from sqlalchemy.dialects.postgresql import UUID
from medtrack.models.model_base import Base
import uuid

class Medication(Base):
    __tablename__ = "medications"

    medication_id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id = Column(UUID(as_uuid=True), ForeignKey("users.user_id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(Text, nullable=False)
    person_name = Column(Text)
    dosage = Column(Text)
    time = Column(String(5), nullable=False, index=True)
    frequency = Column(Text)
    days_needed = Column(Integer)
    start_date = Column(DateTime(timezone=True))
    end_date = Column(DateTime(timezone=True))
    notes = Column(Text)
    created_at = Column(DateTime(timezone=True), default=func.now())
    updated_at = Column(DateTime(timezone=True), default=func.now(), onupdate=func.now())

    logs = relationship("MedicationLog", back_populates="medication",
                        cascade="all, delete-orphan", passive_deletes=True)
