# idcard_api/routers/bulk_import.py
from typing import Optional

from fastapi import APIRouter, Depends, File, UploadFile
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.config import Settings
from ..core.database import get_db
from ..core.exceptions import ErrorCode, ServiceError
from ..core.tenancy import ALL_ROLES, Principal, Role
from ..schemas.common import envelope
from ..services.bulk_import_service import ENTITY_TYPES, BulkImportService
from ..services.excel_processor import ExcelProcessor
from .deps import get_app_settings, require_roles

router = APIRouter(prefix="/bulk-import", tags=["Bulk Import"])


@router.post("/{entity_type}")
async def bulk_import(
    entity_type: str,
    file: Optional[UploadFile] = File(None),
    principal: Principal = Depends(require_roles(*ALL_ROLES)),
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
):
    """
    Import students, teachers or school admins from an .xlsx upload.
    Each row is created on its own; failures are reported per row.
    """
    if entity_type not in ENTITY_TYPES:
        raise ServiceError(
            ErrorCode.VALIDATION_ERROR,
            "Invalid entity type. Must be student, teacher, or admin",
        )
    if entity_type != "student" and principal.role is Role.TEACHER:
        raise ServiceError(ErrorCode.FORBIDDEN, f"Role {principal.role.value} cannot import {entity_type} records")

    if file is None:
        raise ServiceError(ErrorCode.VALIDATION_ERROR, "No file uploaded")

    contents = await file.read(settings.max_upload_bytes + 1)
    ExcelProcessor.check_upload(file.filename, len(contents), settings.max_upload_bytes)
    rows = ExcelProcessor.read_rows(contents)

    result = await BulkImportService(db, settings).import_rows(entity_type, rows, principal)
    return envelope(
        result.model_dump(),
        f"Import completed: {result.success} successful, {result.failed} failed",
    )
