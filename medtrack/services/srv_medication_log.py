"""
Medication Log Service - marks doses taken and unmarks them.

Both transitions are idempotent: marking an already-taken medication returns
the existing log, and unmarking a medication with no log is a no-op.
"""
import logging
from datetime import date, datetime, timezone, tzinfo
from typing import List, Tuple
from uuid import UUID

from fastapi import Depends

from medtrack.models.model_medication_log import MedicationLog
from medtrack.models.model_user import User
from medtrack.repository.repo_medication_log import MedicationLogRepository
from medtrack.schemas.sche_medication_log import MedicationLogCreateRequest, MedicationLogResponse
from medtrack.scheduling import TakenState, day_window, find_log, taken_state
from medtrack.services.srv_medication import MedicationService

logger = logging.getLogger(__name__)


class MedicationLogService:
    def __init__(
        self,
        log_repo: MedicationLogRepository = Depends(),
        medication_service: MedicationService = Depends()
    ):
        self.log_repo = log_repo
        self.medication_service = medication_service

    def get_logs_for_day(self, current_user: User, day: date, tz: tzinfo) -> List[MedicationLogResponse]:
        start, end = day_window(day, tz)
        logs = self.log_repo.get_in_window(current_user.user_id, start, end)
        return [MedicationLogResponse.model_validate(log) for log in logs]

    def mark_taken(self, data: MedicationLogCreateRequest, current_user: User,
                   tz: tzinfo) -> Tuple[MedicationLogResponse, bool]:
        """
        Record that a medication was taken today.

        Returns:
            The day's log and whether it was created by this call.
        """
        medication = self.medication_service.get_medication(data.medication_id, current_user)

        now = datetime.now(timezone.utc)
        today = now.astimezone(tz).date()
        start, end = day_window(today, tz)
        logs_today = self.log_repo.get_in_window(current_user.user_id, start, end)
        if taken_state(logs_today, medication.medication_id) is TakenState.TAKEN:
            logger.info(f"Medication already taken today: medication_id={medication.medication_id}")
            return MedicationLogResponse.model_validate(find_log(logs_today, medication.medication_id)), False

        log = MedicationLog(
            medication_id=medication.medication_id,
            user_id=current_user.user_id,
            taken_at=now,
            taken_on=today,
            scheduled_time=data.scheduled_time or medication.time,
            marked_by=data.marked_by or current_user.full_name or medication.person_name,
        )
        created = self.log_repo.create(log)
        if created is None:
            # Lost a race with a concurrent mark for the same day
            existing = self.log_repo.get_for_day(medication.medication_id, current_user.user_id, today)
            return MedicationLogResponse.model_validate(existing), False

        logger.info(f"Medication marked taken: medication_id={medication.medication_id}, log_id={created.log_id}")
        return MedicationLogResponse.model_validate(created), True

    def unmark_taken(self, medication_id: UUID, current_user: User, day: date, tz: tzinfo) -> int:
        start, end = day_window(day, tz)
        deleted = self.log_repo.delete_in_window(medication_id, current_user.user_id, start, end)
        logger.info(f"Medication unmarked: medication_id={medication_id}, day={day}, deleted={deleted}")
        return deleted
