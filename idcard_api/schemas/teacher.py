# idcard_api/schemas/teacher.py
from datetime import datetime
from typing import Literal, Optional
from uuid import UUID

from pydantic import EmailStr, Field, field_validator

from .common import CamelModel
from .validators import check_mobile, check_photo_url

TeacherStatus = Literal["active", "inactive"]


class TeacherFields(CamelModel):
    @field_validator("mobile", check_fields=False)
    @classmethod
    def validate_mobile(cls, v):
        return check_mobile(v)

    @field_validator("photo_url", check_fields=False)
    @classmethod
    def validate_photo_url(cls, v):
        return check_photo_url(v)


class TeacherCreate(TeacherFields):
    name: str = Field(..., min_length=1, max_length=100)
    mobile: str
    email: EmailStr
    photo_url: Optional[str] = None
    class_id: Optional[UUID] = None
    school_id: Optional[UUID] = None


class TeacherUpdate(TeacherFields):
    """Omitted fields are left alone; an explicit ``classId: null`` unassigns."""
    name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    mobile: Optional[str] = None
    email: Optional[EmailStr] = None
    photo_url: Optional[str] = None
    class_id: Optional[UUID] = None
    status: Optional[TeacherStatus] = None


class TeacherOut(CamelModel):
    id: UUID
    name: str
    mobile: str
    email: str
    photo_url: Optional[str] = None
    class_id: Optional[UUID] = None
    school_id: UUID
    status: str
    created_at: datetime
    updated_at: datetime
