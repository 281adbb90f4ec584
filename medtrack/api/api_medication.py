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
from medtrack.schemas.sche_medication import (
    MedicationCreateRequest, MedicationUpdateRequest, MedicationResponse
)
from medtrack.services.srv_medication import MedicationService
from medtrack.services.ws_manager import realtime_manager

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get('', response_model=DataResponse[List[MedicationResponse]])
def get_medications(
    day: Optional[date] = Query(None, alias='date', description="Day whose taken status is merged in (YYYY-MM-DD)"),
    tz: tzinfo = Depends(request_timezone),
    medication_service: MedicationService = Depends(),
    current_user: User = Depends(login_required)
) -> Any:
    """
    List all medications of the current user, ordered by time.

    Each medication carries its taken status for `date` (defaults to today in
    the caller's timezone), who marked it, and its course progress.
    """
    try:
        day = day or local_today(tz)
        logger.info(f"get_medications request: user_id={current_user.user_id}, date={day}")
        medications = medication_service.list_medications(current_user, day, tz)
        logger.info(f"get_medications success: {len(medications)} medications")
        return DataResponse().success_response(data=medications)
    except CustomException:
        raise
    except Exception as e:
        logger.error(f"get_medications error: {str(e)}", exc_info=True)
        raise CustomException(http_code=500, code='500', message='Failed to fetch medications')


@router.post('', response_model=DataResponse[MedicationResponse])
def create_medication(
    medication_data: MedicationCreateRequest,
    background_tasks: BackgroundTasks,
    tz: tzinfo = Depends(request_timezone),
    medication_service: MedicationService = Depends(),
    current_user: User = Depends(login_required)
) -> Any:
    """
    Create a medication.

    **Duration**: either `duration_mode="days"` with `days_needed` (the course
    starts today), or `duration_mode="range"` with `start_date` and `end_date`
    (both days included). Without either, the medication is ongoing.
    """
    try:
        logger.info(f"create_medication request: {medication_data.name}")
        medication = medication_service.create_medication(medication_data, current_user, tz)
        background_tasks.add_task(realtime_manager.publish_change, str(current_user.user_id),
                                  ChangeTable.MEDICATIONS, ChangeEvent.INSERT)
        return DataResponse().success_response(data=medication)
    except CustomException:
        raise
    except Exception as e:
        logger.error(f"create_medication error: {str(e)}", exc_info=True)
        raise CustomException(http_code=500, code='500', message='Failed to add medication')


@router.put('/{medication_id}', response_model=DataResponse[MedicationResponse])
def update_medication(
    medication_id: UUID,
    medication_data: MedicationUpdateRequest,
    background_tasks: BackgroundTasks,
    tz: tzinfo = Depends(request_timezone),
    medication_service: MedicationService = Depends(),
    current_user: User = Depends(login_required)
) -> Any:
    """
    Update a medication. Only the fields sent are changed.

    Sending a duration recomputes the other representation; in days mode the
    course is re-anchored to today. `clear_duration=true` removes the course.
    """
    try:
        logger.info(f"update_medication request: medication_id={medication_id}")
        medication = medication_service.update_medication(medication_id, medication_data, current_user, tz)
        background_tasks.add_task(realtime_manager.publish_change, str(current_user.user_id),
                                  ChangeTable.MEDICATIONS, ChangeEvent.UPDATE)
        return DataResponse().success_response(data=medication)
    except CustomException:
        raise
    except Exception as e:
        logger.error(f"update_medication error: {str(e)}", exc_info=True)
        raise CustomException(http_code=500, code='500', message='Failed to update medication')


@router.delete('/{medication_id}', response_model=DataResponse[bool])
def delete_medication(
    medication_id: UUID,
    background_tasks: BackgroundTasks,
    medication_service: MedicationService = Depends(),
    current_user: User = Depends(login_required)
) -> Any:
    """
    Delete a medication together with all of its logs.
    """
    try:
        logger.info(f"delete_medication request: medication_id={medication_id}")
        if not medication_service.delete_medication(medication_id, current_user):
            logger.warning(f"delete_medication not found: medication_id={medication_id}")
            raise CustomException(http_code=404, code='404', message="Medication not found")
        background_tasks.add_task(realtime_manager.publish_change, str(current_user.user_id),
                                  ChangeTable.MEDICATIONS, ChangeEvent.DELETE)
        logger.info(f"delete_medication success: medication_id={medication_id}")
        return DataResponse().success_response(data=True)
    except CustomException:
        raise
    except Exception as e:
        logger.error(f"delete_medication error: {str(e)}", exc_info=True)
        raise CustomException(http_code=500, code='500', message='Failed to delete medication')


@router.post('/{medication_id}/duplicate', response_model=DataResponse[MedicationResponse])
def duplicate_medication(
    medication_id: UUID,
    background_tasks: BackgroundTasks,
    tz: tzinfo = Depends(request_timezone),
    medication_service: MedicationService = Depends(),
    current_user: User = Depends(login_required)
) -> Any:
    """
    Copy a medication. A copy with a day count starts today.
    """
    try:
        logger.info(f"duplicate_medication request: medication_id={medication_id}")
        medication = medication_service.duplicate_medication(medication_id, current_user, tz)
        background_tasks.add_task(realtime_manager.publish_change, str(current_user.user_id),
                                  ChangeTable.MEDICATIONS, ChangeEvent.INSERT)
        return DataResponse().success_response(data=medication)
    except CustomException:
        raise
    except Exception as e:
        logger.error(f"duplicate_medication error: {str(e)}", exc_info=True)
        raise CustomException(http_code=500, code='500', message='Failed to duplicate medication')
