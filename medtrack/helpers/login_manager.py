from fastapi import Depends

from medtrack.helpers.exception_handler import CustomException
from medtrack.models.model_user import User
from medtrack.services.srv_user import UserService


def login_required(current_user: User = Depends(UserService.get_current_user)) -> User:
    if not current_user.is_active:
        raise CustomException(http_code=401, code='401', message='Inactive user')
    return current_user
