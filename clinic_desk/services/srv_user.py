import jwt
import logging
from fastapi import Depends
from fastapi.security import HTTPBearer
from pydantic import ValidationError
from starlette import status

from clinic_desk.clients.clinic_api import ClinicApiError
from clinic_desk.core.security import create_access_token, decode_access_token
from clinic_desk.helpers.enums import UserRole
from clinic_desk.helpers.exception_handler import CustomException
from clinic_desk.repository.repo_user import UserRepository
from clinic_desk.schemas.sche_token import Token
from clinic_desk.schemas.sche_user import CurrentUser

logger = logging.getLogger(__name__)

reusable_oauth2 = HTTPBearer(
    scheme_name='Authorization'
)

DESK_ROLES = {role.value for role in UserRole}


class UserService:
    def __init__(self, user_repo: UserRepository = Depends()):
        self.user_repo = user_repo

    def login(self, *, username: str, password: str) -> Token:
        try:
            result = self.user_repo.login(username, password)
        except ClinicApiError as e:
            if e.upstream_status in (400, 401, 404):
                raise CustomException(http_code=400, code='400', message='Incorrect username or password')
            raise
        except ValidationError as e:
            logger.error(f"Unexpected login response from clinic backend: {e}")
            raise CustomException(http_code=502, code='502', message='Clinic backend returned an invalid login response')

        if result.user.role not in DESK_ROLES:
            logger.warning(f"Login refused for {username}: role {result.user.role}")
            raise CustomException(http_code=403, code='403', message=f"Role '{result.user.role}' cannot use the clinic desk")

        logger.info(f"User logged in: {result.user.username} ({result.user.role})")
        return Token(
            access_token=create_access_token(result.user, upstream_token=result.token),
            role=result.user.role,
            full_name=result.user.full_name,
        )

    @staticmethod
    def get_current_user(http_authorization_credentials=Depends(reusable_oauth2)) -> CurrentUser:
        try:
            token_data = decode_access_token(http_authorization_credentials.credentials)
        except (jwt.PyJWTError, ValidationError) as e:
            logger.error(f"Credential validation failed: {e}")
            raise CustomException(
                http_code=status.HTTP_403_FORBIDDEN,
                code='403',
                message="Could not validate credentials"
            )
        if not token_data.user_id or not token_data.role or not token_data.upstream_token:
            raise CustomException(http_code=status.HTTP_403_FORBIDDEN, code='403', message="Could not validate credentials")

        return CurrentUser(
            user_id=token_data.user_id,
            username=token_data.username or token_data.user_id,
            full_name=token_data.full_name,
            role=token_data.role,
            upstream_token=token_data.upstream_token,
        )
