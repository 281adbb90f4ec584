import jwt
import logging
from typing import Optional
from uuid import UUID

from fastapi import Depends
from fastapi.security import HTTPBearer
from pydantic import ValidationError
from starlette import status

from medtrack.models.model_user import User
from medtrack.core.security import decode_access_token, verify_password, get_password_hash
from medtrack.schemas.sche_token import TokenPayload
from medtrack.schemas.sche_user import UserSignupRequest
from medtrack.repository.repo_user import UserRepository
from medtrack.helpers.exception_handler import CustomException

logger = logging.getLogger(__name__)

reusable_oauth2 = HTTPBearer(
    scheme_name='Authorization'
)


def user_id_from_token(token: str) -> UUID:
    """Validate a bearer token and return the user id it was issued for."""
    try:
        token_data = TokenPayload(**decode_access_token(token))
        return UUID(token_data.user_id)
    except (jwt.PyJWTError, ValidationError, TypeError, ValueError) as e:
        logger.error(f"Credential validation failed: {e}")
        raise CustomException(
            http_code=status.HTTP_403_FORBIDDEN,
            code='403',
            message="Could not validate credentials"
        )


class UserService:
    def __init__(self, user_repo: UserRepository = Depends()):
        self.user_repo = user_repo

    def authenticate(self, *, email: str, password: str) -> Optional[User]:
        user = self.user_repo.get_by_email(email)
        if not user:
            return None
        if not verify_password(password, user.hashed_password):
            return None
        return user

    @staticmethod
    def get_current_user(http_authorization_credentials=Depends(reusable_oauth2),
                         user_repo: UserRepository = Depends()) -> User:
        user_id = user_id_from_token(http_authorization_credentials.credentials)
        user = user_repo.get_by_id(user_id)
        if not user:
            logger.error(f"User not found: {user_id}")
            raise CustomException(http_code=404, code='404', message="User not found")
        return user

    def signup(self, data: UserSignupRequest) -> User:
        if self.user_repo.get_by_email(data.email):
            raise CustomException(http_code=400, code='400', message='Email already exists')

        new_user = User(
            full_name=data.name or data.email.split('@')[0],
            email=data.email,
            hashed_password=get_password_hash(data.password),
            is_active=True,
        )
        created_user = self.user_repo.create(new_user)
        logger.info(f"User signed up: user_id={created_user.user_id}")
        return created_user
