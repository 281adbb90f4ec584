import logging
from typing import Any

from fastapi import APIRouter, Depends
from pydantic import EmailStr, BaseModel

from medtrack.core.security import create_access_token
from medtrack.helpers.exception_handler import CustomException
from medtrack.schemas.sche_base import DataResponse
from medtrack.schemas.sche_token import Token
from medtrack.schemas.sche_user import UserItemResponse, UserSignupRequest
from medtrack.services.srv_user import UserService

logger = logging.getLogger(__name__)
router = APIRouter()


class LoginRequest(BaseModel):
    username: EmailStr
    password: str


@router.post('/login', response_model=DataResponse[Token])
def login_access_token(form_data: LoginRequest, user_service: UserService = Depends()):
    user = user_service.authenticate(email=form_data.username, password=form_data.password)
    if not user:
        raise CustomException(http_code=400, code='400', message='Incorrect email or password')
    elif not user.is_active:
        raise CustomException(http_code=401, code='401', message='Inactive user')

    return DataResponse().success_response({
        'access_token': create_access_token(user_id=str(user.user_id))
    })


@router.post('/signup', response_model=DataResponse[UserItemResponse])
def signup(signup_data: UserSignupRequest, user_service: UserService = Depends()) -> Any:
    """
    Create an account. The display name defaults to the part of the email
    before '@'; family members share one account.
    """
    try:
        logger.info(f"signup request: {signup_data.email}")
        user = user_service.signup(signup_data)
        return DataResponse().success_response(data=UserItemResponse.model_validate(user))
    except CustomException:
        raise
    except Exception as e:
        logger.error(f"signup error: {str(e)}", exc_info=True)
        raise CustomException(http_code=500, code='500', message='Failed to create account')
