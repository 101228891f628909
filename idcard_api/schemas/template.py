# idcard_api/schemas/template.py
from datetime import datetime
from typing import Any, Dict, List, Literal
from uuid import UUID

from pydantic import Field

from .common import CamelModel

TemplateType = Literal["student", "teacher", "admin"]


class TemplateCreate(CamelModel):
    school_id: UUID
    type: TemplateType
    layout_config: Dict[str, Any] = Field(default_factory=dict)
    data_tags: List[str] = Field(default_factory=list)


class TemplateOut(CamelModel):
    id: UUID
    school_id: UUID
    type: str
    layout_config: Dict[str, Any]
    data_tags: List[str]
    created_at: datetime
    updated_at: datetime
