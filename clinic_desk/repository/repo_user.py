from fastapi import Depends

from clinic_desk.clients.clinic_api import ClinicApiClient, get_public_clinic_client
from clinic_desk.schemas.sche_user import LoginResult


class UserRepository:
    def __init__(self, client: ClinicApiClient = Depends(get_public_clinic_client)):
        self.client = client

    def login(self, username: str, password: str) -> LoginResult:
        body = self.client.post('/auth/login', json={'username': username, 'password': password})
        return LoginResult.model_validate(body)
