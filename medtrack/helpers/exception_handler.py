import logging

from fastapi import Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from starlette.responses import JSONResponse

logger = logging.getLogger(__name__)


class CustomException(Exception):
    http_code: int
    code: str
    message: str

    def __init__(self, http_code: int = None, code: str = None, message: str = None):
        self.http_code = http_code if http_code else 500
        self.code = code if code else str(self.http_code)
        self.message = message
        super().__init__(message)


async def http_exception_handler(request: Request, exc: CustomException):
    return JSONResponse(
        status_code=exc.http_code,
        content={'success': False, 'code': exc.code, 'message': exc.message}
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    logger.info(f"Validation failed on {request.url.path}: {errors}")
    first = errors[0] if errors else {}
    location = '.'.join(str(part) for part in first.get('loc', ()) if part != 'body')
    message = f"{location}: {first.get('msg')}" if location else str(first.get('msg', 'Invalid request'))
    return JSONResponse(
        status_code=422,
        content=jsonable_encoder({'success': False, 'code': '422', 'message': message, 'errors': errors})
    )
