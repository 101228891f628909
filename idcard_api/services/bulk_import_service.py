# idcard_api/services/bulk_import_service.py
"""Row-by-row import of students, teachers and school admins from Excel."""
import logging
from typing import Any, Dict, List
from uuid import UUID

import pandas as pd
from pydantic import ValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.config import Settings
from ..core.exceptions import ErrorCode, ServiceError
from ..core.tenancy import Principal, Role, resolve_scope
from ..schemas.bulk import ImportResult, ImportRowError
from ..schemas.common import describe_errors
from ..schemas.student import StudentCreate
from ..schemas.teacher import TeacherCreate
from ..schemas.user import UserCreate
from .excel_processor import ExcelProcessor
from .student_service import StudentService
from .teacher_service import TeacherService
from .user_service import UserService

logger = logging.getLogger(__name__)

ENTITY_TYPES = ("student", "teacher", "admin")


class BulkImportService:
    def __init__(self, db: AsyncSession, settings: Settings):
        self.db = db
        self.settings = settings

    async def import_rows(self, entity_type: str, rows: List[Dict[str, str]], principal: Principal) -> ImportResult:
        """Create one entity per row; a failing row is recorded and skipped."""
        if entity_type not in ENTITY_TYPES:
            raise ServiceError(
                ErrorCode.VALIDATION_ERROR,
                "Invalid entity type. Must be student, teacher, or admin",
            )

        importer = {
            "student": self._import_student,
            "teacher": self._import_teacher,
            "admin": self._import_admin,
        }[entity_type]

        result = ImportResult(total=len(rows))
        for index, raw in enumerate(rows):
            # Row 1 is the header
            row_number = index + 2
            try:
                await importer(ExcelProcessor.map_row(raw), principal)
                result.success += 1
            except ServiceError as e:
                await self._record_failure(result, row_number, raw, e.message)
            except ValidationError as e:
                await self._record_failure(result, row_number, raw, describe_errors(e.errors()))

        logger.info(
            f"Bulk {entity_type} import by {principal.user_id}: "
            f"{result.success} successful, {result.failed} failed of {result.total}"
        )
        return result

    async def _record_failure(self, result: ImportResult, row: int, raw: Dict[str, Any], error: str):
        await self.db.rollback()
        result.failed += 1
        result.errors.append(ImportRowError(row=row, data=raw, error=error))

    async def _import_student(self, mapped: Dict[str, Any], principal: Principal):
        if not mapped.get("classId"):
            raise ServiceError(ErrorCode.VALIDATION_ERROR, "Class ID is required")

        if mapped.get("dob"):
            try:
                mapped["dob"] = pd.to_datetime(mapped["dob"]).date()
            except (ValueError, TypeError):
                raise ServiceError(ErrorCode.VALIDATION_ERROR, "Invalid date of birth")

        data = StudentCreate.model_validate(mapped)
        scope = resolve_scope(principal)
        await StudentService(self.db).create_student(data, scope)

    async def _import_teacher(self, mapped: Dict[str, Any], principal: Principal):
        scope = resolve_scope(principal)
        school_id = scope
        if school_id is None:
            if not mapped.get("schoolId"):
                raise ServiceError(ErrorCode.VALIDATION_ERROR, "School ID is required")
            try:
                school_id = UUID(str(mapped["schoolId"]))
            except ValueError:
                raise ServiceError(ErrorCode.VALIDATION_ERROR, "Invalid School ID")

        mapped.pop("schoolId", None)
        data = TeacherCreate.model_validate(mapped)
        await TeacherService(self.db).create_teacher(data, school_id)

    async def _import_admin(self, mapped: Dict[str, Any], principal: Principal):
        mapped["role"] = Role.SCHOOLADMIN.value
        mapped.setdefault("status", "active")
        if not mapped.get("password"):
            mapped["password"] = mapped.get("username") or str(mapped.get("email", "")).split("@")[0]
        if not principal.is_superadmin:
            mapped["schoolId"] = str(principal.school_id)

        data = UserCreate.model_validate(mapped)
        await UserService(self.db, self.settings).create_user(data, principal)
