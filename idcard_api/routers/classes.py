# idcard_api/routers/classes.py
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.database import get_db
from ..core.tenancy import ADMIN_ROLES, ALL_ROLES, Principal, resolve_scope
from ..schemas.class_schemas import ClassCreate, ClassOut
from ..schemas.common import PageParams, dump, dump_many, envelope
from ..services.class_service import ClassService
from .deps import page_params, require_roles

router = APIRouter(prefix="/classes", tags=["Classes"])


@router.post("", status_code=201)
async def create_class(
    data: ClassCreate,
    principal: Principal = Depends(require_roles(*ADMIN_ROLES)),
    db: AsyncSession = Depends(get_db),
):
    """Create a class in an active session; the school comes from the session"""
    class_obj = await ClassService(db).create_class(data, resolve_scope(principal, data.school_id))
    return envelope(dump(ClassOut, class_obj), "Class created successfully")


@router.get("")
async def list_classes(
    school_id: Optional[UUID] = Query(None, alias="schoolId"),
    session_id: Optional[UUID] = Query(None, alias="sessionId"),
    paging: PageParams = Depends(page_params),
    principal: Principal = Depends(require_roles(*ALL_ROLES)),
    db: AsyncSession = Depends(get_db),
):
    service = ClassService(db)
    result = await service.list_classes(
        resolve_scope(principal, school_id),
        session_id=session_id,
        page=paging.page,
        limit=paging.limit,
    )
    return envelope(dump_many(ClassOut, result["items"]), pagination=service.pagination(result))


@router.patch("/{class_id}/freeze")
async def freeze_class(
    class_id: UUID,
    principal: Principal = Depends(require_roles(*ADMIN_ROLES)),
    db: AsyncSession = Depends(get_db),
):
    class_obj = await ClassService(db).freeze(class_id, resolve_scope(principal))
    return envelope(dump(ClassOut, class_obj), "Class frozen successfully")


@router.patch("/{class_id}/unfreeze")
async def unfreeze_class(
    class_id: UUID,
    principal: Principal = Depends(require_roles(*ADMIN_ROLES)),
    db: AsyncSession = Depends(get_db),
):
    class_obj = await ClassService(db).unfreeze(class_id, resolve_scope(principal))
    return envelope(dump(ClassOut, class_obj), "Class unfrozen successfully")
