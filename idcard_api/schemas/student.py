# idcard_api/schemas/student.py
"""Pydantic schemas for the Student entity."""
from datetime import date, datetime
from typing import Optional
from uuid import UUID

from pydantic import Field, field_validator

from .common import CamelModel
from .validators import check_aadhaar, check_mobile, check_photo_url


class StudentFields(CamelModel):
    @field_validator("mobile", check_fields=False)
    @classmethod
    def validate_mobile(cls, v):
        return check_mobile(v)

    @field_validator("aadhaar", check_fields=False)
    @classmethod
    def validate_aadhaar(cls, v):
        return check_aadhaar(v)

    @field_validator("photo_url", check_fields=False)
    @classmethod
    def validate_photo_url(cls, v):
        return check_photo_url(v)


class StudentCreate(StudentFields):
    admission_no: str = Field(..., min_length=1, max_length=50)
    name: str = Field(..., min_length=1, max_length=100)
    dob: date
    father_name: str = Field(..., min_length=1, max_length=100)
    mother_name: str = Field(..., min_length=1, max_length=100)
    mobile: str
    address: str = Field(..., min_length=1, max_length=500)
    aadhaar: Optional[str] = None
    photo_url: Optional[str] = None
    class_id: UUID

    # Accepted for compatibility; the stored values always come from the class
    school_id: Optional[UUID] = None
    session_id: Optional[UUID] = None


class StudentUpdate(StudentFields):
    """Schema for updating a student - all fields optional"""
    admission_no: Optional[str] = Field(default=None, min_length=1, max_length=50)
    name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    dob: Optional[date] = None
    father_name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    mother_name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    mobile: Optional[str] = None
    address: Optional[str] = Field(default=None, min_length=1, max_length=500)
    aadhaar: Optional[str] = None
    photo_url: Optional[str] = None
    class_id: Optional[UUID] = None


class StudentOut(CamelModel):
    id: UUID
    admission_no: str
    name: str
    dob: date
    father_name: str
    mother_name: str
    mobile: str
    address: str
    aadhaar: Optional[str] = None
    photo_url: Optional[str] = None
    class_id: UUID
    session_id: UUID
    school_id: UUID
    created_at: datetime
    updated_at: datetime
