# idcard_api/routers/users.py
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.config import Settings
from ..core.database import get_db
from ..core.tenancy import ADMIN_ROLES, Principal, Role, resolve_scope
from ..schemas.common import PageParams, dump, dump_many, envelope
from ..schemas.user import UserCreate, UserOut, UserUpdate
from ..services.user_service import UserService
from .deps import get_app_settings, page_params, require_roles

router = APIRouter(prefix="/users", tags=["Users"])

admins = require_roles(*ADMIN_ROLES)


@router.post("", status_code=201)
async def create_user(
    data: UserCreate,
    principal: Principal = Depends(admins),
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
):
    user = await UserService(db, settings).create_user(data, principal)
    return envelope(dump(UserOut, user), "User created successfully")


@router.get("")
async def list_users(
    school_id: Optional[UUID] = Query(None, alias="schoolId"),
    role: Optional[Role] = Query(None),
    paging: PageParams = Depends(page_params),
    principal: Principal = Depends(admins),
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
):
    service = UserService(db, settings)
    scope = resolve_scope(principal, school_id)
    result = await service.list_users(principal, scope, role=role, page=paging.page, limit=paging.limit)
    return envelope(dump_many(UserOut, result["items"]), pagination=service.pagination(result))


@router.get("/{user_id}")
async def get_user(
    user_id: UUID,
    principal: Principal = Depends(admins),
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
):
    user = await UserService(db, settings).get_user(user_id, principal, resolve_scope(principal))
    return envelope(dump(UserOut, user))


@router.put("/{user_id}")
async def update_user(
    user_id: UUID,
    data: UserUpdate,
    principal: Principal = Depends(admins),
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
):
    user = await UserService(db, settings).update_user(user_id, data, principal, resolve_scope(principal))
    return envelope(dump(UserOut, user), "User updated successfully")


@router.delete("/{user_id}")
async def delete_user(
    user_id: UUID,
    principal: Principal = Depends(admins),
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
):
    await UserService(db, settings).delete_user(user_id, principal, resolve_scope(principal))
    return envelope(message="User deleted successfully")
