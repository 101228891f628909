# idcard_api/schemas/auth.py
from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import EmailStr, Field

from .common import CamelModel


class LoginRequest(CamelModel):
    email: EmailStr
    password: str = Field(..., min_length=1)


class GoogleLoginRequest(CamelModel):
    id_token: str = Field(..., min_length=1, description="Google ID token from the client SDK")


class AuthUser(CamelModel):
    id: UUID
    name: str
    email: str
    username: str
    role: str
    school_id: Optional[UUID] = None
    school_name: Optional[str] = None
    status: str
    created_at: Optional[datetime] = None
