# idcard_api/routers/teachers.py
from typing import Literal, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.database import get_db
from ..core.tenancy import ADMIN_ROLES, ALL_ROLES, Principal, Role, resolve_scope
from ..schemas.common import PageParams, dump, dump_many, envelope
from ..schemas.teacher import TeacherCreate, TeacherOut, TeacherUpdate
from ..services.teacher_service import TeacherService
from .deps import page_params, require_roles

router = APIRouter(prefix="/teachers", tags=["Teachers"])


@router.post("", status_code=201)
async def create_teacher(
    data: TeacherCreate,
    principal: Principal = Depends(require_roles(*ADMIN_ROLES)),
    db: AsyncSession = Depends(get_db),
):
    school_id = resolve_scope(principal, data.school_id, required=True)
    teacher = await TeacherService(db).create_teacher(data, school_id)
    return envelope(dump(TeacherOut, teacher), "Teacher created successfully")


@router.get("")
async def list_teachers(
    school_id: Optional[UUID] = Query(None, alias="schoolId"),
    class_id: Optional[UUID] = Query(None, alias="classId"),
    status: Optional[Literal["active", "inactive"]] = Query(None),
    paging: PageParams = Depends(page_params),
    principal: Principal = Depends(require_roles(*ALL_ROLES)),
    db: AsyncSession = Depends(get_db),
):
    """Teacher-role callers only ever see their own profile"""
    service = TeacherService(db)
    scope = resolve_scope(principal, school_id)
    if principal.role is Role.TEACHER:
        profile = await service.own_profile(principal)
        return envelope(
            [dump(TeacherOut, profile)],
            pagination={"page": 1, "limit": 1, "total": 1, "pages": 1},
        )

    result = await service.list_teachers(
        scope,
        class_id=class_id,
        status=status,
        page=paging.page,
        limit=paging.limit,
    )
    return envelope(dump_many(TeacherOut, result["items"]), pagination=service.pagination(result))


@router.patch("/{teacher_id}")
async def update_teacher(
    teacher_id: UUID,
    data: TeacherUpdate,
    principal: Principal = Depends(require_roles(*ALL_ROLES)),
    db: AsyncSession = Depends(get_db),
):
    teacher = await TeacherService(db).update_teacher(teacher_id, data, resolve_scope(principal), principal)
    return envelope(dump(TeacherOut, teacher), "Teacher updated successfully")


@router.delete("/{teacher_id}")
async def delete_teacher(
    teacher_id: UUID,
    principal: Principal = Depends(require_roles(*ADMIN_ROLES)),
    db: AsyncSession = Depends(get_db),
):
    """Soft delete: the teacher is marked inactive"""
    await TeacherService(db).delete_teacher(teacher_id, resolve_scope(principal))
    return envelope(message="Teacher deactivated successfully")
