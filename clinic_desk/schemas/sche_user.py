from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from clinic_desk.schemas.sche_base import ClinicRecord


class LoginRequest(BaseModel):
    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class ClinicUser(ClinicRecord):
    id: str
    username: str
    full_name: Optional[str] = None
    role: str

    model_config = ConfigDict(coerce_numbers_to_str=True)


class LoginResult(BaseModel):
    token: str
    user: ClinicUser

    model_config = ConfigDict(extra='ignore')


class CurrentUser(BaseModel):
    user_id: str
    username: str
    full_name: Optional[str] = None
    role: str
    upstream_token: str = Field(..., exclude=True)


class UserItemResponse(BaseModel):
    user_id: str
    username: str
    full_name: Optional[str] = None
    role: str

    model_config = ConfigDict(from_attributes=True)
