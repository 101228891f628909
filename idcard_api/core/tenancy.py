# idcard_api/core/tenancy.py
"""Caller identity and tenant scoping.

Every tenant-scoped operation receives its effective school id from
:func:`resolve_scope`, so the role branch lives here and nowhere else.
A scope of ``None`` means an unrestricted superadmin caller.
"""
import enum
from dataclasses import dataclass
from typing import Optional
from uuid import UUID

from .exceptions import ErrorCode, ServiceError


class Role(str, enum.Enum):
    SUPERADMIN = "Superadmin"
    SCHOOLADMIN = "Schooladmin"
    TEACHER = "Teacher"


ALL_ROLES = (Role.SUPERADMIN, Role.SCHOOLADMIN, Role.TEACHER)
ADMIN_ROLES = (Role.SUPERADMIN, Role.SCHOOLADMIN)


@dataclass(frozen=True)
class Principal:
    user_id: UUID
    role: Role
    school_id: Optional[UUID] = None

    @property
    def is_superadmin(self) -> bool:
        return self.role is Role.SUPERADMIN


def resolve_scope(
    principal: Principal,
    requested_school_id: Optional[UUID] = None,
    required: bool = False,
) -> Optional[UUID]:
    """Return the school id the caller may act on."""
    if principal.is_superadmin:
        scope = requested_school_id
    else:
        if principal.school_id is None:
            raise ServiceError(
                ErrorCode.VALIDATION_ERROR,
                "School ID is required for non-superadmin users",
            )
        if requested_school_id is not None and requested_school_id != principal.school_id:
            raise ServiceError(ErrorCode.FORBIDDEN, "You do not have access to this school")
        scope = principal.school_id

    if required and scope is None:
        raise ServiceError(ErrorCode.VALIDATION_ERROR, "School ID is required")
    return scope


def ensure_tenant(entity_school_id: Optional[UUID], scope: Optional[UUID], message: str):
    """Raise WrongTenant when a scoped caller touches another school's entity."""
    if scope is not None and entity_school_id != scope:
        raise ServiceError(ErrorCode.WRONG_TENANT, message)
