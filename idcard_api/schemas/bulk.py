# idcard_api/schemas/bulk.py
from typing import Any, Dict, List

from pydantic import BaseModel


class ImportRowError(BaseModel):
    row: int
    data: Dict[str, Any]
    error: str


class ImportResult(BaseModel):
    total: int
    success: int = 0
    failed: int = 0
    errors: List[ImportRowError] = []
