# idcard_api/routers/login_logs.py
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.database import get_db
from ..core.tenancy import Principal, Role, resolve_scope
from ..schemas.common import PageParams, dump_many, envelope
from ..schemas.user import LoginLogOut
from ..services.login_log_service import LoginLogService
from .deps import page_params, require_roles

router = APIRouter(prefix="/login-logs", tags=["Login Logs"])


@router.get("")
async def list_login_logs(
    school_id: Optional[UUID] = Query(None, alias="schoolId"),
    paging: PageParams = Depends(page_params),
    principal: Principal = Depends(require_roles(Role.SUPERADMIN)),
    db: AsyncSession = Depends(get_db),
):
    """Successful sign-ins, newest first"""
    service = LoginLogService(db)
    result = await service.list_logs(resolve_scope(principal, school_id), page=paging.page, limit=paging.limit)
    return envelope(dump_many(LoginLogOut, result["items"]), pagination=service.pagination(result))
