# idcard_api/services/user_service.py
"""User accounts (superadmins, school admins, teachers)."""
import logging
from typing import Any, Dict, Optional
from uuid import UUID

from sqlalchemy import or_
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.config import Settings
from ..core.exceptions import ErrorCode, ServiceError
from ..core.security import hash_password
from ..core.tenancy import Principal, Role, ensure_tenant, resolve_scope
from ..models import User
from ..schemas.user import UserCreate, UserUpdate
from .base_service import BaseService
from .school_service import SchoolService

logger = logging.getLogger(__name__)

DUPLICATE_USER = "User with this email or username already exists"
WRONG_TENANT = "User does not belong to your school"


class UserService(BaseService[User]):
    not_found_message = "User not found"

    def __init__(self, db: AsyncSession, settings: Settings):
        super().__init__(User, db)
        self.settings = settings

    async def create_user(self, data: UserCreate, principal: Principal) -> User:
        role = data.role
        if principal.is_superadmin:
            school_id = None if role is Role.SUPERADMIN else data.school_id
        else:
            if role is Role.SUPERADMIN:
                raise ServiceError(ErrorCode.FORBIDDEN, "Only a superadmin can create superadmin accounts")
            school_id = resolve_scope(principal, data.school_id)

        if role is not Role.SUPERADMIN:
            if school_id is None:
                raise ServiceError(ErrorCode.VALIDATION_ERROR, "School ID is required")
            await SchoolService(self.db).require_school(school_id)

        email = data.email.lower()
        await self._check_unique(email, data.username)

        user = User(
            name=data.name,
            email=email,
            username=data.username,
            password_hash=hash_password(data.password, self.settings.bcrypt_rounds),
            role=role.value,
            school_id=school_id,
            status=data.status,
        )
        user = await self.save(user, ServiceError(ErrorCode.DUPLICATE_USER, DUPLICATE_USER))
        logger.info(f"Created {user.role} user {user.username}")
        return user

    async def list_users(
        self,
        principal: Principal,
        scope: Optional[UUID],
        role: Optional[Role] = None,
        page: int = 1,
        limit: int = 10,
    ) -> Dict[str, Any]:
        conditions = []
        if scope is not None:
            conditions.append(User.school_id == scope)
        if not principal.is_superadmin:
            conditions.append(User.role != Role.SUPERADMIN.value)
        if role is not None:
            conditions.append(User.role == role.value)

        return await self.get_paginated(
            page=page,
            limit=limit,
            order_by=[User.name.asc()],
            conditions=conditions,
        )

    async def get_user(self, user_id: UUID, principal: Principal, scope: Optional[UUID]) -> User:
        user = await self.get_or_404(user_id)
        self._check_access(user, principal, scope)
        return user

    async def update_user(
        self, user_id: UUID, data: UserUpdate, principal: Principal, scope: Optional[UUID]
    ) -> User:
        user = await self.get_user(user_id, principal, scope)
        changes = data.model_dump(exclude_unset=True)

        if not principal.is_superadmin:
            if changes.get("role") is Role.SUPERADMIN:
                raise ServiceError(ErrorCode.FORBIDDEN, "Only a superadmin can grant the superadmin role")
            if changes.get("school_id") not in (None, principal.school_id):
                raise ServiceError(ErrorCode.FORBIDDEN, "You cannot move users to another school")

        role = changes.get("role") or Role(user.role)
        if role is not Role.SUPERADMIN and not (changes.get("school_id") or user.school_id):
            raise ServiceError(ErrorCode.VALIDATION_ERROR, "School ID is required")

        if changes.get("email"):
            changes["email"] = changes["email"].lower()
        if changes.get("email") or changes.get("username"):
            await self._check_unique(changes.get("email"), changes.get("username"), exclude_id=user.id)
        if changes.get("school_id"):
            await SchoolService(self.db).require_school(changes["school_id"])

        password = changes.pop("password", None)
        if password:
            user.password_hash = hash_password(password, self.settings.bcrypt_rounds)

        for key, value in changes.items():
            if value is None:
                continue
            setattr(user, key, value.value if isinstance(value, Role) else value)

        return await self.save(user, ServiceError(ErrorCode.DUPLICATE_USER, DUPLICATE_USER))

    async def delete_user(self, user_id: UUID, principal: Principal, scope: Optional[UUID]) -> None:
        user = await self.get_user(user_id, principal, scope)
        await self.hard_delete(user)
        logger.info(f"Deleted user {user_id}")

    def _check_access(self, user: User, principal: Principal, scope: Optional[UUID]):
        if not principal.is_superadmin and user.role == Role.SUPERADMIN.value:
            raise ServiceError(ErrorCode.FORBIDDEN, "You cannot access superadmin accounts")
        if scope is not None:
            ensure_tenant(user.school_id, scope, WRONG_TENANT)

    async def _check_unique(
        self, email: Optional[str], username: Optional[str], exclude_id: Optional[UUID] = None
    ):
        clauses = []
        if email:
            clauses.append(User.email == email)
        if username:
            clauses.append(User.username == username)
        if not clauses:
            return

        conditions = [or_(*clauses)]
        if exclude_id is not None:
            conditions.append(User.id != exclude_id)
        if await self.exists(*conditions):
            raise ServiceError(ErrorCode.DUPLICATE_USER, DUPLICATE_USER)
