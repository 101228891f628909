# idcard_api/services/student_service.py
"""Student roster. Mutations are gated by the class's freeze flag."""
import logging
from typing import Any, Dict, Optional
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from ..core.exceptions import ErrorCode, ServiceError
from ..core.tenancy import ensure_tenant
from ..models import AcademicSession, ClassModel, Student
from ..schemas.student import StudentCreate, StudentUpdate
from .base_service import BaseService

logger = logging.getLogger(__name__)

DUPLICATE_ADMISSION_NO = "Admission number already exists for this school"
CLASS_WRONG_TENANT = "Class does not belong to your school"
CLEARABLE_FIELDS = {"aadhaar", "photo_url"}


class StudentService(BaseService[Student]):
    not_found_message = "Student not found"

    def __init__(self, db: AsyncSession):
        super().__init__(Student, db)

    async def _get_class(self, class_id: UUID) -> ClassModel:
        class_obj = await self.db.get(ClassModel, class_id)
        if class_obj is None:
            raise ServiceError(ErrorCode.CLASS_NOT_FOUND, "Class not found")
        return class_obj

    async def _require_active_session(self, class_obj: ClassModel, message: str) -> AcademicSession:
        session = await self.db.get(AcademicSession, class_obj.session_id)
        if session is None:
            raise ServiceError(ErrorCode.SESSION_NOT_FOUND, "Session not found")
        if not session.active_status:
            raise ServiceError(ErrorCode.SESSION_INACTIVE, message)
        return session

    async def _check_admission_no(self, school_id: UUID, admission_no: str, exclude_id: Optional[UUID] = None):
        conditions = [Student.school_id == school_id, Student.admission_no == admission_no]
        if exclude_id is not None:
            conditions.append(Student.id != exclude_id)
        if await self.exists(*conditions):
            raise ServiceError(ErrorCode.DUPLICATE_ADMISSION_NO, DUPLICATE_ADMISSION_NO)

    async def _lock_class(self, class_id: UUID) -> ClassModel:
        """Load a class, take its school's lock and re-read it under the lock."""
        class_obj = await self._get_class(class_id)
        await self.lock_tenant(class_obj.school_id)
        await self.db.refresh(class_obj)
        return class_obj

    async def create_student(self, data: StudentCreate, scope: Optional[UUID]) -> Student:
        class_obj = await self._lock_class(data.class_id)
        ensure_tenant(class_obj.school_id, scope, CLASS_WRONG_TENANT)
        await self._require_active_session(class_obj, "Cannot create student in an inactive session")
        if class_obj.frozen:
            raise ServiceError(ErrorCode.CLASS_FROZEN, "Cannot create student in a frozen class")

        await self._check_admission_no(class_obj.school_id, data.admission_no)

        # Tenant and session always come from the class, never from the payload
        fields = data.model_dump(exclude={"school_id", "session_id", "class_id"})
        student = Student(
            **fields,
            class_id=class_obj.id,
            session_id=class_obj.session_id,
            school_id=class_obj.school_id,
        )
        student = await self.save(
            student, ServiceError(ErrorCode.DUPLICATE_ADMISSION_NO, DUPLICATE_ADMISSION_NO)
        )
        logger.info(f"Created student {student.admission_no} in class {class_obj.id}")
        return student

    async def list_students(
        self,
        scope: Optional[UUID],
        class_id: Optional[UUID] = None,
        page: int = 1,
        limit: int = 10,
    ) -> Dict[str, Any]:
        conditions = []
        if class_id is not None:
            if scope is not None:
                # An unknown class is reported the same as another school's class
                class_obj = await self.db.get(ClassModel, class_id)
                ensure_tenant(class_obj.school_id if class_obj else None, scope, CLASS_WRONG_TENANT)
            conditions.append(Student.class_id == class_id)
        if scope is not None:
            conditions.append(Student.school_id == scope)

        return await self.get_paginated(
            page=page,
            limit=limit,
            order_by=[Student.admission_no.asc()],
            conditions=conditions,
        )

    async def get_scoped(self, student_id: UUID, scope: Optional[UUID]) -> Student:
        student = await self.get_or_404(student_id)
        ensure_tenant(student.school_id, scope, "Student does not belong to your school")
        return student

    async def _check_not_frozen(self, student: Student, message: str):
        class_obj = await self.db.get(ClassModel, student.class_id, populate_existing=True)
        if class_obj is not None and class_obj.frozen:
            raise ServiceError(ErrorCode.CLASS_FROZEN, message)

    async def _get_locked(self, student_id: UUID, scope: Optional[UUID]) -> Student:
        student = await self.get_scoped(student_id, scope)
        await self.lock_tenant(student.school_id)
        await self.db.refresh(student)
        return student

    async def update_student(self, student_id: UUID, data: StudentUpdate, scope: Optional[UUID]) -> Student:
        student = await self._get_locked(student_id, scope)
        await self._check_not_frozen(student, "Cannot update student in a frozen class")

        # Only the optional fields can be cleared with null
        changes = {
            k: v for k, v in data.model_dump(exclude_unset=True).items()
            if v is not None or k in CLEARABLE_FIELDS
        }

        new_admission_no = changes.get("admission_no")
        if new_admission_no and new_admission_no != student.admission_no:
            await self._check_admission_no(student.school_id, new_admission_no, exclude_id=student.id)

        new_class_id = changes.pop("class_id", None)
        if new_class_id and new_class_id != student.class_id:
            target = await self._get_class(new_class_id)
            ensure_tenant(target.school_id, student.school_id, CLASS_WRONG_TENANT)
            await self._require_active_session(target, "Cannot move student to a class in an inactive session")
            if target.frozen:
                raise ServiceError(ErrorCode.CLASS_FROZEN, "Cannot move student to a frozen class")
            student.class_id = target.id
            student.session_id = target.session_id

        for key, value in changes.items():
            setattr(student, key, value)

        return await self.save(
            student, ServiceError(ErrorCode.DUPLICATE_ADMISSION_NO, DUPLICATE_ADMISSION_NO)
        )

    async def delete_student(self, student_id: UUID, scope: Optional[UUID]) -> None:
        student = await self._get_locked(student_id, scope)
        await self._check_not_frozen(student, "Cannot delete student from a frozen class")
        await self.hard_delete(student)
        logger.info(f"Deleted student {student_id}")
