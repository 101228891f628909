# idcard_api/routers/sessions.py
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.database import get_db
from ..core.tenancy import ADMIN_ROLES, ALL_ROLES, Principal, resolve_scope
from ..schemas.common import PageParams, dump, dump_many, envelope
from ..schemas.session import SessionCreate, SessionOut
from ..services.session_service import SessionService
from .deps import page_params, require_roles

router = APIRouter(prefix="/sessions", tags=["Sessions"])


@router.post("", status_code=201)
async def create_session(
    data: SessionCreate,
    principal: Principal = Depends(require_roles(*ADMIN_ROLES)),
    db: AsyncSession = Depends(get_db),
):
    """Create an (inactive) academic session"""
    school_id = resolve_scope(principal, data.school_id, required=True)
    session = await SessionService(db).create_session(data, school_id)
    return envelope(dump(SessionOut, session), "Session created successfully")


@router.get("")
async def list_sessions(
    school_id: Optional[UUID] = Query(None, alias="schoolId"),
    session_id: Optional[UUID] = Query(None, alias="sessionId"),
    paging: PageParams = Depends(page_params),
    principal: Principal = Depends(require_roles(*ALL_ROLES)),
    db: AsyncSession = Depends(get_db),
):
    service = SessionService(db)
    result = await service.list_sessions(
        resolve_scope(principal, school_id),
        session_id=session_id,
        page=paging.page,
        limit=paging.limit,
    )
    return envelope(dump_many(SessionOut, result["items"]), pagination=service.pagination(result))


@router.patch("/{session_id}/activate")
async def activate_session(
    session_id: UUID,
    principal: Principal = Depends(require_roles(*ADMIN_ROLES)),
    db: AsyncSession = Depends(get_db),
):
    """Activate a session; every other session of the school is deactivated"""
    session = await SessionService(db).activate(session_id, resolve_scope(principal))
    return envelope(dump(SessionOut, session), "Session activated successfully")


@router.patch("/{session_id}/deactivate")
async def deactivate_session(
    session_id: UUID,
    principal: Principal = Depends(require_roles(*ADMIN_ROLES)),
    db: AsyncSession = Depends(get_db),
):
    session = await SessionService(db).deactivate(session_id, resolve_scope(principal))
    return envelope(dump(SessionOut, session), "Session deactivated successfully")
