"""
Medication Service - CRUD for a user's medications.

Duration fields are always written through the duration resolver so the day
count and the start/end pair never drift apart.
"""
import logging
from dataclasses import replace
from datetime import date, datetime, timezone, tzinfo
from typing import Any, List, Optional
from uuid import UUID

from fastapi import Depends

from medtrack.helpers.enums import DurationMode
from medtrack.helpers.exception_handler import CustomException
from medtrack.models.model_medication import Medication
from medtrack.models.model_user import User
from medtrack.repository.repo_medication import MedicationRepository
from medtrack.repository.repo_medication_log import MedicationLogRepository
from medtrack.schemas.sche_medication import (
    MedicationCreateRequest, MedicationUpdateRequest, MedicationResponse
)
from medtrack.scheduling import (
    DurationInput, DurationResult, MedicationView, compute_progress, day_window,
    reconcile, reconcile_all, resolve_duration, to_local_date
)

logger = logging.getLogger(__name__)

COPY_SUFFIX = ' (Copy)'


class MedicationService:
    def __init__(
        self,
        medication_repo: MedicationRepository = Depends(),
        log_repo: MedicationLogRepository = Depends()
    ):
        self.medication_repo = medication_repo
        self.log_repo = log_repo

    def get_views_for_day(self, current_user: User, day: date, tz: tzinfo) -> List[MedicationView]:
        """All of the user's medications merged with the logs of ``day``."""
        medications = self.medication_repo.get_all_by_user(current_user.user_id)
        start, end = day_window(day, tz)
        logs = self.log_repo.get_in_window(current_user.user_id, start, end)

        now = datetime.now(timezone.utc)
        return [replace(view, progress=compute_progress(view, now=now))
                for view in reconcile_all(medications, logs)]

    def list_medications(self, current_user: User, day: date, tz: tzinfo) -> List[MedicationResponse]:
        views = self.get_views_for_day(current_user, day, tz)
        return [MedicationResponse.model_validate(view) for view in views]

    def get_medication(self, medication_id: UUID, current_user: User) -> Medication:
        medication = self.medication_repo.get_by_id(medication_id, current_user.user_id)
        if not medication:
            raise CustomException(http_code=404, code='404', message="Medication not found")
        return medication

    def create_medication(self, data: MedicationCreateRequest, current_user: User, tz: tzinfo) -> MedicationResponse:
        medication = Medication(
            user_id=current_user.user_id,
            name=data.name,
            time=data.time,
            person_name=data.person_name,
            dosage=data.dosage,
            frequency=data.frequency,
            notes=data.notes,
        )
        self._apply_duration(medication, resolve_duration(data.to_duration_input(), tz=tz))

        created = self.medication_repo.create(medication)
        logger.info(f"Medication created: medication_id={created.medication_id}, user_id={current_user.user_id}")
        return self._to_response(created)

    def update_medication(self, medication_id: UUID, data: MedicationUpdateRequest,
                          current_user: User, tz: tzinfo) -> MedicationResponse:
        medication = self.get_medication(medication_id, current_user)

        for field in ('name', 'time', 'person_name', 'dosage', 'frequency', 'notes'):
            if field in data.model_fields_set:
                value = getattr(data, field)
                if value is None and field in ('name', 'time'):
                    raise CustomException(http_code=400, code='400', message=f"{field} cannot be empty")
                setattr(medication, field, value)

        if data.clear_duration:
            self._apply_duration(medication, None)
        elif data.has_duration_input():
            # DAYS mode re-anchors the course to today, even for an unchanged day count
            duration = resolve_duration(self._merge_duration_input(data, medication, tz), tz=tz)
            if duration is None:
                raise CustomException(http_code=400, code='400',
                                      message="Duration needs days_needed, or both start_date and end_date")
            self._apply_duration(medication, duration)

        updated = self.medication_repo.update(medication)
        logger.info(f"Medication updated: medication_id={medication_id}")
        return self._to_response(updated)

    def delete_medication(self, medication_id: UUID, current_user: User) -> bool:
        return self.medication_repo.delete(medication_id, current_user.user_id)

    def duplicate_medication(self, medication_id: UUID, current_user: User, tz: tzinfo) -> MedicationResponse:
        source = self.get_medication(medication_id, current_user)

        copy = Medication(
            user_id=current_user.user_id,
            name=source.name + COPY_SUFFIX,
            time=source.time,
            person_name=source.person_name,
            dosage=source.dosage,
            frequency=source.frequency,
            notes=source.notes,
        )
        if source.days_needed:
            self._apply_duration(copy, resolve_duration(DurationInput(days=source.days_needed), tz=tz))
        else:
            copy.start_date = source.start_date
            copy.end_date = source.end_date

        created = self.medication_repo.create(copy)
        logger.info(f"Medication duplicated: source={medication_id}, copy={created.medication_id}")
        return self._to_response(created)

    @staticmethod
    def _merge_duration_input(data: MedicationUpdateRequest, medication: Medication, tz: tzinfo) -> DurationInput:
        """Fill a half-sent date range from the stored course."""
        duration = data.to_duration_input()
        if duration.days is not None or duration.mode is DurationMode.DAYS:
            return duration

        start, end = duration.start, duration.end
        if start is None and medication.start_date is not None:
            start = to_local_date(medication.start_date, tz)
        if end is None and medication.end_date is not None:
            end = to_local_date(medication.end_date, tz)
        return replace(duration, start=start, end=end)

    @staticmethod
    def _apply_duration(medication: Medication, duration: Optional[DurationResult]) -> None:
        if duration is None:
            medication.days_needed = None
            medication.start_date = None
            medication.end_date = None
            return
        medication.days_needed = duration.days_needed
        medication.start_date = duration.start_date.astimezone(timezone.utc)
        medication.end_date = duration.end_date.astimezone(timezone.utc)

    @staticmethod
    def _to_response(medication: Any) -> MedicationResponse:
        view = reconcile(medication, [])
        view.progress = compute_progress(view)
        return MedicationResponse.model_validate(view)
