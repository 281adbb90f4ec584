import logging
from datetime import date, tzinfo
from typing import Any, Optional

from fastapi import APIRouter, Depends, Query

from medtrack.helpers.enums import SortBy
from medtrack.helpers.exception_handler import CustomException
from medtrack.helpers.login_manager import login_required
from medtrack.helpers.timezone import local_today, request_timezone
from medtrack.models.model_user import User
from medtrack.schemas.sche_base import DataResponse
from medtrack.schemas.sche_schedule import ScheduleResponse, ScheduleOverviewResponse
from medtrack.services.srv_schedule import ScheduleService

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get('', response_model=DataResponse[ScheduleResponse])
def get_schedule(
    day: Optional[date] = Query(None, alias='date', description="Day to project (YYYY-MM-DD), defaults to today"),
    show_completed: bool = Query(True, description="Include medications already taken"),
    sort_by: SortBy = Query(SortBy.TIME),
    tz: tzinfo = Depends(request_timezone),
    schedule_service: ScheduleService = Depends(),
    current_user: User = Depends(login_required)
) -> Any:
    """
    Medications to display for one day.

    Only medications whose course covers the day are returned, sorted by
    `time`, `name` or `status` (not taken first). Equal keys keep their order.
    """
    try:
        day = day or local_today(tz)
        logger.info(f"get_schedule request: date={day}, sort_by={sort_by.value}, show_completed={show_completed}")
        schedule = schedule_service.get_schedule(current_user, day, show_completed, sort_by, tz)
        return DataResponse().success_response(data=schedule)
    except CustomException:
        raise
    except Exception as e:
        logger.error(f"get_schedule error: {str(e)}", exc_info=True)
        raise CustomException(http_code=500, code='500', message='Failed to build schedule')


@router.get('/overview', response_model=DataResponse[ScheduleOverviewResponse])
def get_overview(
    show_completed: bool = Query(True),
    sort_by: SortBy = Query(SortBy.TIME),
    tz: tzinfo = Depends(request_timezone),
    schedule_service: ScheduleService = Depends(),
    current_user: User = Depends(login_required)
) -> Any:
    """
    Today's and tomorrow's schedules plus today's taken/total counters.
    """
    try:
        overview = schedule_service.get_overview(current_user, local_today(tz), show_completed, sort_by, tz)
        return DataResponse().success_response(data=overview)
    except CustomException:
        raise
    except Exception as e:
        logger.error(f"get_overview error: {str(e)}", exc_info=True)
        raise CustomException(http_code=500, code='500', message='Failed to build schedule overview')
