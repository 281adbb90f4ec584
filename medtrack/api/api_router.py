from fastapi import APIRouter

from medtrack.api import (
    api_auth, api_user, api_medication, api_medication_log, api_schedule, api_setup, api_realtime
)

router = APIRouter()

router.include_router(api_setup.router, tags=["setup"], prefix="/setup")
router.include_router(api_auth.router, tags=["authentication"], prefix="/auth")
router.include_router(api_user.router, tags=["user"], prefix="/users")
router.include_router(api_medication.router, tags=["medication"], prefix="/medications")
router.include_router(api_medication_log.router, tags=["medication-log"], prefix="/logs")
router.include_router(api_schedule.router, tags=["schedule"], prefix="/schedule")
router.include_router(api_realtime.router, tags=["realtime"], prefix="/realtime")
