# idcard_api/routers/students.py
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.database import get_db
from ..core.tenancy import ADMIN_ROLES, ALL_ROLES, Principal, resolve_scope
from ..schemas.common import PageParams, dump, dump_many, envelope
from ..schemas.student import StudentCreate, StudentOut, StudentUpdate
from ..services.student_service import StudentService
from .deps import page_params, require_roles

router = APIRouter(prefix="/students", tags=["Students"])


@router.post("", status_code=201)
async def create_student(
    data: StudentCreate,
    principal: Principal = Depends(require_roles(*ADMIN_ROLES)),
    db: AsyncSession = Depends(get_db),
):
    student = await StudentService(db).create_student(data, resolve_scope(principal))
    return envelope(dump(StudentOut, student), "Student created successfully")


@router.get("")
async def list_students(
    school_id: Optional[UUID] = Query(None, alias="schoolId"),
    class_id: Optional[UUID] = Query(None, alias="classId"),
    paging: PageParams = Depends(page_params),
    principal: Principal = Depends(require_roles(*ALL_ROLES)),
    db: AsyncSession = Depends(get_db),
):
    """Students of the caller's school, optionally narrowed to one class"""
    service = StudentService(db)
    result = await service.list_students(
        resolve_scope(principal, school_id),
        class_id=class_id,
        page=paging.page,
        limit=paging.limit,
    )
    return envelope(dump_many(StudentOut, result["items"]), pagination=service.pagination(result))


@router.patch("/{student_id}")
async def update_student(
    student_id: UUID,
    data: StudentUpdate,
    principal: Principal = Depends(require_roles(*ADMIN_ROLES)),
    db: AsyncSession = Depends(get_db),
):
    student = await StudentService(db).update_student(student_id, data, resolve_scope(principal))
    return envelope(dump(StudentOut, student), "Student updated successfully")


@router.delete("/{student_id}")
async def delete_student(
    student_id: UUID,
    principal: Principal = Depends(require_roles(*ADMIN_ROLES)),
    db: AsyncSession = Depends(get_db),
):
    await StudentService(db).delete_student(student_id, resolve_scope(principal))
    return envelope(message="Student deleted successfully")
