import logging
from typing import Any

from fastapi import APIRouter, Depends

from medtrack.helpers.exception_handler import CustomException
from medtrack.schemas.sche_base import DataResponse
from medtrack.schemas.sche_setup import SetupStatusResponse, SetupInitResponse
from medtrack.services.srv_setup import SetupService

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get('/check', response_model=DataResponse[SetupStatusResponse])
def check_setup(setup_service: SetupService = Depends()) -> Any:
    try:
        return DataResponse().success_response(data=setup_service.check_setup())
    except Exception as e:
        logger.error(f"check_setup error: {str(e)}", exc_info=True)
        raise CustomException(http_code=500, code='500', message=str(e))


@router.post('/init', response_model=DataResponse[SetupInitResponse])
def init_tables(setup_service: SetupService = Depends()) -> Any:
    """
    Create the medication tables if they do not exist yet.
    """
    try:
        logger.info("init_tables request")
        return DataResponse().success_response(data=setup_service.init_tables())
    except Exception as e:
        logger.error(f"init_tables error: {str(e)}", exc_info=True)
        raise CustomException(http_code=500, code='500', message=f'Failed to initialize database: {e}')
