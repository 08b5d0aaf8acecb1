from fastapi import Depends

from clinic_desk.clients.clinic_api import ClinicApiClient
from clinic_desk.helpers.login_manager import login_required
from clinic_desk.schemas.sche_user import CurrentUser


def get_clinic_client(current_user: CurrentUser = Depends(login_required)):
    """Backend client acting on behalf of the logged-in user."""
    client = ClinicApiClient(token=current_user.upstream_token)
    try:
        yield client
    finally:
        client.close()
