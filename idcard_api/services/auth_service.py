# idcard_api/services/auth_service.py
"""Password and Google sign-in, plus the login gate both share."""
import logging
import secrets
from typing import Any, Dict, Optional

from fastapi import Request
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.config import Settings
from ..core.exceptions import ErrorCode, ServiceError
from ..core.security import create_access_token, unusable_password_hash, verify_password
from ..core.tenancy import Principal, Role
from ..models import AllowedLogin, School, User
from ..schemas.auth import AuthUser
from ..schemas.common import dump
from .login_log_service import LoginLogService

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid credentials"
DEFAULT_SCHOOL_NAME = "Default School"


def client_ip(request: Request) -> str:
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        return forwarded.split(",")[0].strip()
    if request.client and request.client.host:
        return request.client.host
    return "127.0.0.1"


class AuthService:
    def __init__(self, db: AsyncSession, settings: Settings):
        self.db = db
        self.settings = settings

    async def authenticate(self, email: str, password: str, ip_address: str) -> Dict[str, Any]:
        logger.info(f"Login attempt for email: {email}")

        user = await self._get_by_email(email)
        if user is None:
            raise ServiceError(ErrorCode.INVALID_CREDENTIALS, INVALID_CREDENTIALS)

        self._check_active(user)
        await self._check_login_allowed(user)

        if not verify_password(password, user.password_hash):
            logger.info(f"Login failed: wrong password for {user.username}")
            raise ServiceError(ErrorCode.INVALID_CREDENTIALS, INVALID_CREDENTIALS)

        return await self._issue(user, ip_address)

    async def authenticate_federated(self, claims: Dict[str, Any], ip_address: str) -> Dict[str, Any]:
        """Sign in with verified Google claims, provisioning the account on first use."""
        email = (claims.get("email") or "").strip().lower()
        if not email:
            raise ServiceError(ErrorCode.VALIDATION_ERROR, "Google account has no email address")

        user = await self._get_by_email(email)
        if user is None:
            user = await self._provision_google_user(email, claims.get("name"))

        self._check_active(user)
        await self._check_login_allowed(user)
        return await self._issue(user, ip_address)

    async def current_user(self, principal: Principal) -> Dict[str, Any]:
        user = await self.db.get(User, principal.user_id)
        if user is None:
            raise ServiceError(ErrorCode.NOT_FOUND, "User not found")
        return await self.user_payload(user)

    async def user_payload(self, user: User) -> Dict[str, Any]:
        school_name = None
        if user.school_id:
            school = await self.db.get(School, user.school_id)
            school_name = school.name if school else None

        payload = dump(AuthUser, user)
        payload["schoolName"] = school_name
        return payload

    async def _get_by_email(self, email: str) -> Optional[User]:
        stmt = select(User).where(User.email == email.strip().lower())
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()

    @staticmethod
    def _check_active(user: User):
        if user.status != "active":
            raise ServiceError(ErrorCode.ACCOUNT_INACTIVE, "Account is inactive")

    async def _check_login_allowed(self, user: User):
        if user.role == Role.SUPERADMIN.value:
            return
        if not user.school_id:
            raise ServiceError(ErrorCode.INVALID_CREDENTIALS, INVALID_CREDENTIALS)

        stmt = select(AllowedLogin).where(AllowedLogin.school_id == user.school_id)
        gate = (await self.db.execute(stmt)).scalar_one_or_none()
        if gate is None:
            raise ServiceError(ErrorCode.INVALID_CREDENTIALS, INVALID_CREDENTIALS)

        allowed = {
            Role.SCHOOLADMIN.value: gate.allow_school_admin,
            Role.TEACHER.value: gate.allow_teacher,
        }.get(user.role, False)
        if not allowed:
            logger.info(f"Login blocked for {user.username}: role {user.role} disabled for school {user.school_id}")
            raise ServiceError(ErrorCode.INVALID_CREDENTIALS, INVALID_CREDENTIALS)

    async def _issue(self, user: User, ip_address: str) -> Dict[str, Any]:
        token = create_access_token(user.id, user.role, user.school_id, self.settings)
        # A failed log write rolls back and expires `user`
        payload = await self.user_payload(user)
        username = user.username

        try:
            await LoginLogService(self.db).record(user, ip_address)
        except SQLAlchemyError as e:
            # The sign-in still succeeds without its audit entry
            await self.db.rollback()
            logger.error(f"Failed to create login log for {username}: {e}")

        return {"token": token, "user": payload}

    async def _default_school(self) -> School:
        stmt = (
            select(School)
            .where(School.status == "active")
            .order_by(School.created_at, School.id)
            .limit(1)
        )
        school = (await self.db.execute(stmt)).scalar_one_or_none()
        if school is not None:
            return school

        school = School(
            name=DEFAULT_SCHOOL_NAME,
            address="Not specified",
            contact_email="admin@defaultschool.edu",
            status="active",
        )
        self.db.add(school)
        await self.db.flush()
        self.db.add(AllowedLogin(school_id=school.id, allow_school_admin=True, allow_teacher=True))
        logger.info(f"Provisioned {DEFAULT_SCHOOL_NAME} {school.id} for Google sign-in")
        return school

    async def _unique_username(self, email: str) -> str:
        local_part = email.split("@")[0][:23]
        while True:
            candidate = f"{local_part}_{secrets.randbelow(10**6):06d}"
            taken = await self.db.execute(select(User.id).where(User.username == candidate))
            if taken.first() is None:
                return candidate

    async def _provision_google_user(self, email: str, name: Optional[str]) -> User:
        school = await self._default_school()
        user = User(
            name=name or email.split("@")[0],
            email=email,
            username=await self._unique_username(email),
            password_hash=unusable_password_hash(self.settings.bcrypt_rounds),
            role=Role.TEACHER.value,
            school_id=school.id,
            status="active",
        )
        self.db.add(user)
        await self.db.commit()
        await self.db.refresh(user)
        logger.info(f"Created user {user.username} from Google sign-in")
        return user
