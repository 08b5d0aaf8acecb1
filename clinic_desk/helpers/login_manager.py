from fastapi import Depends

from clinic_desk.helpers.enums import UserRole
from clinic_desk.helpers.exception_handler import CustomException
from clinic_desk.schemas.sche_user import CurrentUser
from clinic_desk.services.srv_user import UserService, reusable_oauth2


def login_required(http_authorization_credentials=Depends(reusable_oauth2)) -> CurrentUser:
    return UserService.get_current_user(http_authorization_credentials)


class PermissionRequired:
    """Route dependency that only lets the listed roles through."""

    def __init__(self, *roles: UserRole):
        self.roles = {role.value for role in roles}

    def __call__(self, user: CurrentUser = Depends(login_required)) -> CurrentUser:
        if self.roles and user.role not in self.roles:
            raise CustomException(http_code=403, code='403', message=f'User {user.username} can not access this api')
        return user


admin_only = PermissionRequired(UserRole.ADMIN)
doctor_only = PermissionRequired(UserRole.DOCTOR)
staff = PermissionRequired(UserRole.ADMIN, UserRole.DOCTOR)
