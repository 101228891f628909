# idcard_api/routers/schools.py
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.database import get_db
from ..core.tenancy import Principal, Role
from ..schemas.common import PageParams, dump, dump_many, envelope
from ..schemas.school import AllowedLoginOut, AllowedLoginUpdate, SchoolCreate, SchoolOut, SchoolUpdate
from ..services.school_service import SchoolService
from .deps import page_params, require_roles

router = APIRouter(prefix="/schools", tags=["Schools"])

superadmin_only = require_roles(Role.SUPERADMIN)


@router.post("", status_code=201)
async def create_school(
    data: SchoolCreate,
    principal: Principal = Depends(superadmin_only),
    db: AsyncSession = Depends(get_db),
):
    """Create a school together with its login settings"""
    school = await SchoolService(db).create_school(data)
    return envelope(dump(SchoolOut, school), "School created successfully")


@router.get("")
async def list_schools(
    status: Optional[str] = Query(None),
    paging: PageParams = Depends(page_params),
    principal: Principal = Depends(superadmin_only),
    db: AsyncSession = Depends(get_db),
):
    service = SchoolService(db)
    result = await service.list_schools(page=paging.page, limit=paging.limit, status=status)
    return envelope(dump_many(SchoolOut, result["items"]), pagination=service.pagination(result))


@router.get("/{school_id}")
async def get_school(
    school_id: UUID,
    principal: Principal = Depends(superadmin_only),
    db: AsyncSession = Depends(get_db),
):
    school = await SchoolService(db).get_or_404(school_id)
    return envelope(dump(SchoolOut, school))


@router.put("/{school_id}")
async def update_school(
    school_id: UUID,
    data: SchoolUpdate,
    principal: Principal = Depends(superadmin_only),
    db: AsyncSession = Depends(get_db),
):
    school = await SchoolService(db).update_school(school_id, data)
    return envelope(dump(SchoolOut, school), "School updated successfully")


@router.delete("/{school_id}")
async def delete_school(
    school_id: UUID,
    principal: Principal = Depends(superadmin_only),
    db: AsyncSession = Depends(get_db),
):
    await SchoolService(db).delete_school(school_id)
    return envelope(message="School deleted successfully")


@router.get("/{school_id}/allowed-login")
async def get_allowed_login(
    school_id: UUID,
    principal: Principal = Depends(superadmin_only),
    db: AsyncSession = Depends(get_db),
):
    gate = await SchoolService(db).get_login_gate(school_id)
    return envelope(dump(AllowedLoginOut, gate))


@router.put("/{school_id}/allowed-login")
async def update_allowed_login(
    school_id: UUID,
    data: AllowedLoginUpdate,
    principal: Principal = Depends(superadmin_only),
    db: AsyncSession = Depends(get_db),
):
    """Turn school admin / teacher sign-in on or off for a school"""
    gate = await SchoolService(db).update_login_gate(school_id, data)
    return envelope(dump(AllowedLoginOut, gate), "Login settings updated successfully")
