import logging
from datetime import date, tzinfo
from typing import Any, List, Optional
from uuid import UUID

from fastapi import APIRouter, BackgroundTasks, Depends, Query

from medtrack.helpers.enums import ChangeEvent, ChangeTable
from medtrack.helpers.exception_handler import CustomException
from medtrack.helpers.login_manager import login_required
from medtrack.helpers.timezone import local_today, request_timezone
from medtrack.models.model_user import User
from medtrack.schemas.sche_base import DataResponse
from medtrack.schemas.sche_medication_log import MedicationLogCreateRequest, MedicationLogResponse
from medtrack.services.srv_medication_log import MedicationLogService
from medtrack.services.ws_manager import realtime_manager

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get('/today', response_model=DataResponse[List[MedicationLogResponse]])
def get_today_logs(
    day: Optional[date] = Query(None, alias='date', description="Defaults to today (YYYY-MM-DD)"),
    tz: tzinfo = Depends(request_timezone),
    log_service: MedicationLogService = Depends(),
    current_user: User = Depends(login_required)
) -> Any:
    try:
        logs = log_service.get_logs_for_day(current_user, day or local_today(tz), tz)
        return DataResponse().success_response(data=logs)
    except CustomException:
        raise
    except Exception as e:
        logger.error(f"get_today_logs error: {str(e)}", exc_info=True)
        raise CustomException(http_code=500, code='500', message='Failed to fetch logs')


@router.post('', response_model=DataResponse[MedicationLogResponse])
def mark_as_taken(
    log_data: MedicationLogCreateRequest,
    background_tasks: BackgroundTasks,
    tz: tzinfo = Depends(request_timezone),
    log_service: MedicationLogService = Depends(),
    current_user: User = Depends(login_required)
) -> Any:
    """
    Mark a medication as taken today.

    Marking a medication that is already taken today returns the existing log.
    `marked_by` defaults to the account's display name.
    """
    try:
        logger.info(f"mark_as_taken request: medication_id={log_data.medication_id}")
        log, created = log_service.mark_taken(log_data, current_user, tz)
        if created:
            background_tasks.add_task(realtime_manager.publish_change, str(current_user.user_id),
                                      ChangeTable.MEDICATION_LOGS, ChangeEvent.INSERT)
        return DataResponse().success_response(data=log)
    except CustomException:
        raise
    except Exception as e:
        logger.error(f"mark_as_taken error: {str(e)}", exc_info=True)
        raise CustomException(http_code=500, code='500', message='Failed to mark medication as taken')


@router.delete('/{medication_id}', response_model=DataResponse[bool])
def unmark_as_taken(
    medication_id: UUID,
    background_tasks: BackgroundTasks,
    day: Optional[date] = Query(None, alias='date', description="Defaults to today (YYYY-MM-DD)"),
    tz: tzinfo = Depends(request_timezone),
    log_service: MedicationLogService = Depends(),
    current_user: User = Depends(login_required)
) -> Any:
    """
    Remove the taken mark of a medication for `date`. A no-op when it is not taken.
    """
    try:
        deleted = log_service.unmark_taken(medication_id, current_user, day or local_today(tz), tz)
        if deleted:
            background_tasks.add_task(realtime_manager.publish_change, str(current_user.user_id),
                                      ChangeTable.MEDICATION_LOGS, ChangeEvent.DELETE)
        return DataResponse().success_response(data=True)
    except CustomException:
        raise
    except Exception as e:
        logger.error(f"unmark_as_taken error: {str(e)}", exc_info=True)
        raise CustomException(http_code=500, code='500', message='Failed to unmark medication')
