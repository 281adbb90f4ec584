import logging
import logging.config
import os

import uvicorn
from fastapi import Depends, FastAPI
from fastapi.exceptions import RequestValidationError
from starlette.middleware.cors import CORSMiddleware

from medtrack.api.api_router import router
from medtrack.core.config import settings
from medtrack.db.base import engine
from medtrack.helpers.exception_handler import (
    CustomException, http_exception_handler, validation_exception_handler
)
from medtrack.models import Base
from medtrack.services.srv_setup import SetupService
from medtrack.services.ws_manager import realtime_manager

if os.path.exists(settings.LOGGING_CONFIG_FILE):
    logging.config.fileConfig(settings.LOGGING_CONFIG_FILE, disable_existing_loggers=False)

logger = logging.getLogger(__name__)


def get_application() -> FastAPI:
    application = FastAPI(
        title=settings.PROJECT_NAME, docs_url="/docs", redoc_url='/re-docs',
        openapi_url=f"{settings.API_PREFIX}/openapi.json",
        description='''
        Family medication reminders
            - Schedule medications per family member
            - Mark doses taken, one mark per medication per day
            - Multi-day treatment courses with progress
            - Realtime change signals over WebSocket
        '''
    )
    application.add_middleware(
        CORSMiddleware,
        allow_origins=[str(origin) for origin in settings.BACKEND_CORS_ORIGINS],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    application.include_router(router, prefix=settings.API_PREFIX)
    application.add_exception_handler(CustomException, http_exception_handler)
    application.add_exception_handler(RequestValidationError, validation_exception_handler)

    @application.on_event("startup")
    def create_tables_on_startup():
        if settings.AUTO_CREATE_TABLES:
            Base.metadata.create_all(bind=engine)
            logger.info("Database tables ensured on startup")

    @application.on_event("shutdown")
    async def close_realtime_connections():
        closed = await realtime_manager.cleanup_all()
        logger.info(f"Closed {closed} realtime connections")

    # Health check endpoint
    @application.get("/health")
    def health_check(setup_service: SetupService = Depends()):
        try:
            status = setup_service.check_setup()
        except Exception as e:
            logger.error(f"Health check error: {e}", exc_info=True)
            return {
                "status": "error",
                "is_setup": False,
                "message": "Database tables not found. Please run the setup.",
                "error": str(e),
                "realtime": realtime_manager.get_stats(),
            }
        if status.is_setup:
            return {
                "status": "ok",
                "is_setup": True,
                "message": "Database tables are ready",
                "realtime": realtime_manager.get_stats(),
            }
        return {
            "status": "setup_required",
            "is_setup": False,
            "message": f"Database tables not found. POST {settings.API_PREFIX}/setup/init to create them.",
            "realtime": realtime_manager.get_stats(),
        }

    return application


app = get_application()
if __name__ == '__main__':
    uvicorn.run(app, host="0.0.0.0", port=int(os.getenv('PORT', 8000)))
