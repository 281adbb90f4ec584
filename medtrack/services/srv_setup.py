"""
Database setup checks.

Lets a fresh deployment report whether its tables exist and create them
on request.
"""
import logging

from fastapi import Depends
from sqlalchemy import inspect
from sqlalchemy.orm import Session

from medtrack.db.base import get_db
from medtrack.models import Base
from medtrack.models.model_medication import Medication
from medtrack.models.model_medication_log import MedicationLog
from medtrack.schemas.sche_setup import SetupStatusResponse, SetupInitResponse

logger = logging.getLogger(__name__)


class SetupService:
    def __init__(self, db_session: Session = Depends(get_db)):
        self.db = db_session

    def check_setup(self) -> SetupStatusResponse:
        inspector = inspect(self.db.get_bind())
        medications_exists = inspector.has_table(Medication.__tablename__)
        logs_exists = inspector.has_table(MedicationLog.__tablename__)
        is_setup = medications_exists and logs_exists

        logger.info(f"Tables status: medications={medications_exists}, logs={logs_exists}")
        return SetupStatusResponse(
            is_setup=is_setup,
            medications_exists=medications_exists,
            logs_exists=logs_exists,
            needs_setup=not is_setup,
        )

    def init_tables(self) -> SetupInitResponse:
        if self.check_setup().is_setup:
            return SetupInitResponse(is_setup=True, already_setup=True, message='Database tables already exist')

        Base.metadata.create_all(bind=self.db.get_bind())
        logger.info("Database tables created")
        return SetupInitResponse(is_setup=True, already_setup=False, message='Tables created successfully')
