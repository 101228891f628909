# idcard_api/schemas/school.py
"""Pydantic schemas for the School entity and its login gate."""
from datetime import datetime
from typing import Literal, Optional
from uuid import UUID

from pydantic import EmailStr, Field

from .common import CamelModel

SchoolStatus = Literal["active", "inactive", "suspended"]


class SchoolBase(CamelModel):
    name: str = Field(..., min_length=1, max_length=100, description="School name")
    address: str = Field(..., min_length=1, max_length=500, description="School address")
    contact_email: EmailStr = Field(..., description="Contact email address")
    status: SchoolStatus = "active"


class SchoolCreate(SchoolBase):
    pass


class SchoolUpdate(CamelModel):
    """Schema for updating a school - all fields optional"""
    name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    address: Optional[str] = Field(default=None, min_length=1, max_length=500)
    contact_email: Optional[EmailStr] = None
    status: Optional[SchoolStatus] = None


class SchoolOut(SchoolBase):
    id: UUID
    contact_email: str
    created_at: datetime
    updated_at: datetime


class AllowedLoginOut(CamelModel):
    school_id: UUID
    allow_school_admin: bool
    allow_teacher: bool
    updated_at: datetime


class AllowedLoginUpdate(CamelModel):
    allow_school_admin: Optional[bool] = None
    allow_teacher: Optional[bool] = None
