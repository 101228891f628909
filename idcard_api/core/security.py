# idcard_api/core/security.py
"""Password hashing and access-token handling."""
import logging
import secrets
from datetime import datetime, timedelta, timezone
from functools import lru_cache
from typing import Any, Dict, Iterable, Optional
from uuid import UUID

import jwt
from passlib.context import CryptContext

from .config import Settings
from .exceptions import ErrorCode, ServiceError
from .tenancy import Principal, Role

logger = logging.getLogger(__name__)

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


@lru_cache
def _context_for_rounds(rounds: int) -> CryptContext:
    return CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=rounds)


def hash_password(plain_password: str, rounds: Optional[int] = None) -> str:
    if not plain_password:
        raise ValueError("Password cannot be empty")
    if rounds:
        return _context_for_rounds(rounds).hash(plain_password)
    return pwd_context.hash(plain_password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Constant-time comparison against the stored hash; never raises."""
    if not plain_password or not hashed_password:
        return False
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except (ValueError, TypeError) as e:
        logger.error(f"Password verification error: {e}")
        return False


def unusable_password_hash(rounds: Optional[int] = None) -> str:
    """Hash of a random secret nobody knows, for federated-only accounts."""
    return hash_password(secrets.token_urlsafe(32), rounds=rounds)


def create_access_token(
    user_id: UUID,
    role: str,
    school_id: Optional[UUID],
    settings: Settings,
    expires_delta: Optional[timedelta] = None,
) -> str:
    if not settings.jwt_secret_key:
        logger.error("jwt_secret_key is not configured")
        raise ServiceError(
            ErrorCode.CONFIGURATION_ERROR,
            "Server configuration error: JWT secret not defined",
        )

    now = datetime.now(timezone.utc)
    expire = now + (expires_delta or timedelta(minutes=settings.jwt_expire_minutes))
    claims: Dict[str, Any] = {
        "sub": str(user_id),
        "role": role,
        "school_id": str(school_id) if school_id else None,
        "iat": int(now.timestamp()),
        "exp": int(expire.timestamp()),
    }
    return jwt.encode(claims, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str, settings: Settings) -> Principal:
    if not settings.jwt_secret_key:
        raise ServiceError(
            ErrorCode.CONFIGURATION_ERROR,
            "Server configuration error: JWT secret not defined",
        )

    try:
        claims = jwt.decode(
            token,
            settings.jwt_secret_key,
            algorithms=[settings.jwt_algorithm],
            options={"require": ["exp", "sub"]},
        )
    except jwt.ExpiredSignatureError:
        raise ServiceError(ErrorCode.UNAUTHENTICATED, "Token expired")
    except jwt.PyJWTError:
        raise ServiceError(ErrorCode.UNAUTHENTICATED, "Invalid token")

    try:
        return Principal(
            user_id=UUID(claims["sub"]),
            role=Role(claims.get("role")),
            school_id=UUID(claims["school_id"]) if claims.get("school_id") else None,
        )
    except (ValueError, TypeError):
        raise ServiceError(ErrorCode.UNAUTHENTICATED, "Invalid token")


def authorize(token: Optional[str], allowed_roles: Iterable[Role], settings: Settings) -> Principal:
    """Validate a bearer token and check the caller's role."""
    if not token:
        raise ServiceError(ErrorCode.UNAUTHENTICATED, "No token, authorization denied")

    principal = decode_access_token(token, settings)
    allowed = tuple(allowed_roles)
    if allowed and principal.role not in allowed:
        raise ServiceError(
            ErrorCode.FORBIDDEN,
            f"Role {principal.role.value} is not allowed to access this resource",
        )
    return principal
