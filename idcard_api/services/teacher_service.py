# idcard_api/services/teacher_service.py
"""Teacher roster. At most one active teacher holds a class at a time."""
import logging
from typing import Any, Dict, Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.exceptions import ErrorCode, ServiceError
from ..core.tenancy import Principal, Role, ensure_tenant
from ..models import AcademicSession, ClassModel, Teacher, User
from ..schemas.teacher import TeacherCreate, TeacherUpdate
from .base_service import BaseService
from .school_service import SchoolService

logger = logging.getLogger(__name__)

DUPLICATE_EMAIL = "Email already exists for this school"
CLASS_ALREADY_ASSIGNED = "A teacher is already assigned to this class. Only one teacher per class is allowed."

# Fields a Teacher-role user may change on their own record
SELF_EDITABLE = {"name", "mobile", "photo_url"}


class TeacherService(BaseService[Teacher]):
    not_found_message = "Teacher not found"

    def __init__(self, db: AsyncSession):
        super().__init__(Teacher, db)

    async def _check_class_holder(self, class_id: UUID, exclude_id: Optional[UUID] = None):
        conditions = [Teacher.class_id == class_id, Teacher.status == "active"]
        if exclude_id is not None:
            conditions.append(Teacher.id != exclude_id)
        if await self.exists(*conditions):
            raise ServiceError(ErrorCode.CLASS_ALREADY_ASSIGNED, CLASS_ALREADY_ASSIGNED)

    async def _check_assignable(self, class_id: UUID, school_id: UUID, exclude_id: Optional[UUID] = None):
        class_obj = await self.db.get(ClassModel, class_id)
        if class_obj is None:
            raise ServiceError(ErrorCode.CLASS_NOT_FOUND, "Class not found")
        ensure_tenant(class_obj.school_id, school_id, "Class does not belong to your school")

        session = await self.db.get(AcademicSession, class_obj.session_id)
        if session is None:
            raise ServiceError(ErrorCode.SESSION_NOT_FOUND, "Session not found")
        if not session.active_status:
            raise ServiceError(
                ErrorCode.SESSION_INACTIVE,
                "Cannot assign teacher to a class in an inactive session",
            )

        await self._check_class_holder(class_id, exclude_id)

    async def _check_email(self, school_id: UUID, email: str, exclude_id: Optional[UUID] = None):
        conditions = [Teacher.school_id == school_id, Teacher.email == email]
        if exclude_id is not None:
            conditions.append(Teacher.id != exclude_id)
        if await self.exists(*conditions):
            raise ServiceError(ErrorCode.DUPLICATE_EMAIL, DUPLICATE_EMAIL)

    async def create_teacher(self, data: TeacherCreate, school_id: UUID) -> Teacher:
        await SchoolService(self.db).require_school(school_id)
        await self.lock_tenant(school_id)

        if data.class_id is not None:
            await self._check_assignable(data.class_id, school_id)

        email = data.email.lower()
        await self._check_email(school_id, email)

        teacher = Teacher(
            name=data.name,
            mobile=data.mobile,
            email=email,
            photo_url=data.photo_url,
            class_id=data.class_id,
            school_id=school_id,
            status="active",
        )
        teacher = await self.save(teacher, self._conflict(data.class_id))
        logger.info(f"Created teacher {teacher.id} for school {school_id}")
        return teacher

    async def list_teachers(
        self,
        scope: Optional[UUID],
        class_id: Optional[UUID] = None,
        status: Optional[str] = None,
        page: int = 1,
        limit: int = 10,
    ) -> Dict[str, Any]:
        conditions = []
        if scope is not None:
            conditions.append(Teacher.school_id == scope)
        if class_id is not None:
            conditions.append(Teacher.class_id == class_id)
        if status is not None:
            conditions.append(Teacher.status == status)

        return await self.get_paginated(
            page=page,
            limit=limit,
            order_by=[Teacher.name.asc()],
            conditions=conditions,
        )

    async def get_scoped(self, teacher_id: UUID, scope: Optional[UUID]) -> Teacher:
        teacher = await self.get_or_404(teacher_id)
        ensure_tenant(teacher.school_id, scope, "Teacher does not belong to your school")
        return teacher

    async def own_profile(self, principal: Principal) -> Teacher:
        """The teacher record a Teacher-role user signs in as, matched on school and email."""
        teacher = None
        user = await self.db.get(User, principal.user_id)
        if user is not None:
            stmt = select(Teacher).where(Teacher.school_id == principal.school_id, Teacher.email == user.email)
            teacher = (await self.db.execute(stmt)).scalar_one_or_none()
        if teacher is None:
            raise ServiceError(ErrorCode.NOT_FOUND, "Teacher profile not found")
        return teacher

    async def _check_self_edit(self, teacher: Teacher, changes: Dict[str, Any], principal: Principal):
        user = await self.db.get(User, principal.user_id)
        if user is None or teacher.school_id != principal.school_id or teacher.email != user.email:
            raise ServiceError(ErrorCode.FORBIDDEN, "You can only update your own profile")
        if set(changes) - SELF_EDITABLE:
            raise ServiceError(ErrorCode.FORBIDDEN, "Teachers may only edit contact details on their own profile")

    async def update_teacher(
        self,
        teacher_id: UUID,
        data: TeacherUpdate,
        scope: Optional[UUID],
        principal: Optional[Principal] = None,
    ) -> Teacher:
        teacher = await self.get_scoped(teacher_id, scope)
        changes = data.model_dump(exclude_unset=True)
        if principal is not None and principal.role is Role.TEACHER:
            await self._check_self_edit(teacher, changes, principal)
        await self.lock_tenant(teacher.school_id)

        if changes.get("email"):
            changes["email"] = changes["email"].lower()
            if changes["email"] != teacher.email:
                await self._check_email(teacher.school_id, changes["email"], exclude_id=teacher.id)

        # classId may be sent as null to unassign
        class_changed = "class_id" in changes and changes["class_id"] != teacher.class_id
        target_class = changes["class_id"] if "class_id" in changes else teacher.class_id
        target_status = changes.get("status") or teacher.status

        if class_changed and target_class is not None:
            await self._check_assignable(target_class, teacher.school_id, exclude_id=teacher.id)
        elif target_status == "active" and teacher.status != "active" and target_class is not None:
            await self._check_class_holder(target_class, exclude_id=teacher.id)

        for key, value in changes.items():
            if value is None and key != "class_id":
                continue
            setattr(teacher, key, value)

        return await self.save(teacher, self._conflict(target_class))

    async def delete_teacher(self, teacher_id: UUID, scope: Optional[UUID]) -> Teacher:
        """Soft delete: the record stays, the class is released."""
        teacher = await self.get_scoped(teacher_id, scope)
        teacher.status = "inactive"
        teacher = await self.save(teacher)
        logger.info(f"Deactivated teacher {teacher_id}")
        return teacher

    @staticmethod
    def _conflict(class_id: Optional[UUID]) -> ServiceError:
        if class_id is not None:
            return ServiceError(ErrorCode.CLASS_ALREADY_ASSIGNED, CLASS_ALREADY_ASSIGNED)
        return ServiceError(ErrorCode.DUPLICATE_EMAIL, DUPLICATE_EMAIL)
