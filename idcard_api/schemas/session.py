# idcard_api/schemas/session.py
from datetime import date, datetime
from typing import Optional
from uuid import UUID

from pydantic import Field

from .common import CamelModel


class SessionCreate(CamelModel):
    session_name: str = Field(..., min_length=1, max_length=50)
    start_date: date
    end_date: date
    # Superadmins name the school; everyone else gets their own
    school_id: Optional[UUID] = None


class SessionOut(CamelModel):
    id: UUID
    session_name: str
    start_date: date
    end_date: date
    school_id: UUID
    active_status: bool
    created_at: datetime
    updated_at: datetime
