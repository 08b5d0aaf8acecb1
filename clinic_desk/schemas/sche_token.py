from typing import Optional

from pydantic import BaseModel


class Token(BaseModel):
    access_token: str
    token_type: str = 'bearer'
    role: str
    full_name: Optional[str] = None


class TokenPayload(BaseModel):
    user_id: Optional[str] = None
    username: Optional[str] = None
    full_name: Optional[str] = None
    role: Optional[str] = None
    upstream_token: Optional[str] = None
