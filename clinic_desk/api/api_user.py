from typing import Any

from fastapi import APIRouter, Depends

from clinic_desk.helpers.login_manager import login_required
from clinic_desk.schemas.sche_base import DataResponse
from clinic_desk.schemas.sche_user import CurrentUser, UserItemResponse

router = APIRouter()


@router.get("/me", response_model=DataResponse[UserItemResponse])
def detail_me(current_user: CurrentUser = Depends(login_required)) -> Any:
    """
    API get detail current User
    """
    return DataResponse().success_response(data=UserItemResponse.model_validate(current_user))
