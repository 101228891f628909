# idcard_api/schemas/user.py
from datetime import datetime
from typing import Literal, Optional
from uuid import UUID

from pydantic import EmailStr, Field

from ..core.tenancy import Role
from .common import CamelModel

UserStatus = Literal["active", "inactive"]


class UserCreate(CamelModel):
    name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    username: str = Field(..., min_length=3, max_length=30)
    password: str = Field(..., min_length=6)
    role: Role
    school_id: Optional[UUID] = None
    status: UserStatus = "active"


class UserUpdate(CamelModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    email: Optional[EmailStr] = None
    username: Optional[str] = Field(default=None, min_length=3, max_length=30)
    password: Optional[str] = Field(default=None, min_length=6)
    role: Optional[Role] = None
    school_id: Optional[UUID] = None
    status: Optional[UserStatus] = None


class UserOut(CamelModel):
    id: UUID
    name: str
    email: str
    username: str
    role: str
    school_id: Optional[UUID] = None
    status: str
    created_at: datetime
    updated_at: datetime


class LoginLogOut(CamelModel):
    id: UUID
    username: str
    role: str
    school_id: Optional[UUID] = None
    ip_address: str
    timestamp: datetime
