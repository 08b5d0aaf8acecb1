import logging

from fastapi import APIRouter, Depends

from clinic_desk.schemas.sche_base import DataResponse
from clinic_desk.schemas.sche_token import Token
from clinic_desk.schemas.sche_user import LoginRequest
from clinic_desk.services.srv_user import UserService

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post('/login', response_model=DataResponse[Token])
def login_access_token(form_data: LoginRequest, user_service: UserService = Depends()):
    """
    Log in with clinic credentials.

    The clinic backend checks the password; the desk answers with its own bearer
    token carrying the user's role.
    """
    logger.info(f"login request: {form_data.username}")
    token = user_service.login(username=form_data.username, password=form_data.password)
    return DataResponse().success_response(data=token)
