import jwt
from datetime import datetime, timedelta, timezone

from clinic_desk.core.config import settings
from clinic_desk.schemas.sche_token import TokenPayload
from clinic_desk.schemas.sche_user import ClinicUser


def create_access_token(user: ClinicUser, upstream_token: str) -> str:
    expire = datetime.now(timezone.utc) + timedelta(
        seconds=settings.ACCESS_TOKEN_EXPIRE_SECONDS
    )
    to_encode = {
        "exp": expire,
        "user_id": str(user.id),
        "username": user.username,
        "full_name": user.full_name,
        "role": user.role,
        "upstream_token": upstream_token,
    }
    encoded_jwt = jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.SECURITY_ALGORITHM)
    return encoded_jwt


def decode_access_token(token: str) -> TokenPayload:
    payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.SECURITY_ALGORITHM])
    return TokenPayload(**payload)
