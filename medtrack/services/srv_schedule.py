import logging
from datetime import date, timedelta, tzinfo
from typing import List

from fastapi import Depends

from medtrack.helpers.enums import SortBy
from medtrack.models.model_user import User
from medtrack.schemas.sche_medication import MedicationResponse
from medtrack.schemas.sche_schedule import ScheduleResponse, ScheduleOverviewResponse, ScheduleSummary
from medtrack.scheduling import MedicationView, project_schedule
from medtrack.services.srv_medication import MedicationService

logger = logging.getLogger(__name__)


class ScheduleService:
    def __init__(self, medication_service: MedicationService = Depends()):
        self.medication_service = medication_service

    def get_schedule(self, current_user: User, day: date, show_completed: bool,
                     sort_by: SortBy, tz: tzinfo) -> ScheduleResponse:
        views = self.medication_service.get_views_for_day(current_user, day, tz)
        return self._build_schedule(views, day, show_completed, sort_by, tz)

    def get_overview(self, current_user: User, today: date, show_completed: bool,
                     sort_by: SortBy, tz: tzinfo) -> ScheduleOverviewResponse:
        """Today's and tomorrow's schedules, each reconciled with its own day's logs."""
        tomorrow = today + timedelta(days=1)
        today_views = self.medication_service.get_views_for_day(current_user, today, tz)
        tomorrow_views = self.medication_service.get_views_for_day(current_user, tomorrow, tz)

        active_today = project_schedule(today_views, today, show_completed=True, tz=tz)
        taken_count = sum(1 for view in active_today if view.taken)
        total_count = len(active_today)

        return ScheduleOverviewResponse(
            today=self._build_schedule(today_views, today, show_completed, sort_by, tz),
            tomorrow=self._build_schedule(tomorrow_views, tomorrow, show_completed, sort_by, tz),
            summary=ScheduleSummary(
                taken_count=taken_count,
                total_count=total_count,
                progress=(100.0 * taken_count / total_count) if total_count else 0.0,
            ),
        )

    @staticmethod
    def _build_schedule(views: List[MedicationView], day: date, show_completed: bool,
                        sort_by: SortBy, tz: tzinfo) -> ScheduleResponse:
        projected = project_schedule(views, day, show_completed=show_completed, sort_by=sort_by, tz=tz)
        logger.debug(f"Projected {len(projected)} of {len(views)} medications for {day}")
        return ScheduleResponse(
            date=day,
            sort_by=sort_by,
            show_completed=show_completed,
            medications=[MedicationResponse.model_validate(view) for view in projected],
        )
