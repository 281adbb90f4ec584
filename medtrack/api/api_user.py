from typing import Any

from fastapi import APIRouter, Depends

from medtrack.helpers.login_manager import login_required
from medtrack.models.model_user import User
from medtrack.schemas.sche_base import DataResponse
from medtrack.schemas.sche_user import UserItemResponse

router = APIRouter()


@router.get("/me", response_model=DataResponse[UserItemResponse])
def detail_me(current_user: User = Depends(login_required)) -> Any:
    """
    API get detail current User
    """
    return DataResponse().success_response(data=UserItemResponse.model_validate(current_user))
