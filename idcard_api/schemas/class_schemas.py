# idcard_api/schemas/class_schemas.py
from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import Field

from .common import CamelModel


class ClassCreate(CamelModel):
    class_name: str = Field(..., min_length=1, max_length=50)
    session_id: UUID
    school_id: Optional[UUID] = None


class ClassOut(CamelModel):
    id: UUID
    class_name: str
    school_id: UUID
    session_id: UUID
    frozen: bool
    created_at: datetime
    updated_at: datetime
