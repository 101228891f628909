# idcard_api/core/exceptions.py
"""Custom exceptions for the ID card administration API.

Services raise :class:`ServiceError` carrying an :class:`ErrorCode`. Every code
belongs to one :class:`ErrorKind`, and the HTTP layer picks the status from the
kind alone.
"""
import enum
from typing import Any, Dict, Optional


class ErrorKind(str, enum.Enum):
    VALIDATION = "Validation"
    UNAUTHENTICATED = "Unauthenticated"
    FORBIDDEN = "Forbidden"
    NOT_FOUND = "NotFound"
    CONFLICT = "Conflict"
    INVALID_STATE_TRANSITION = "InvalidStateTransition"
    INTERNAL = "Internal"


class ErrorCode(str, enum.Enum):
    # Identity & access
    INVALID_CREDENTIALS = "InvalidCredentials"
    ACCOUNT_INACTIVE = "AccountInactive"
    CONFIGURATION_ERROR = "ConfigurationError"
    UNAUTHENTICATED = "Unauthenticated"
    FORBIDDEN = "Forbidden"
    WRONG_TENANT = "WrongTenant"

    # Lookups
    NOT_FOUND = "NotFound"
    SESSION_NOT_FOUND = "SessionNotFound"
    CLASS_NOT_FOUND = "ClassNotFound"

    # Input
    VALIDATION_ERROR = "ValidationError"
    INVALID_DATE_RANGE = "InvalidDateRange"

    # Uniqueness
    DUPLICATE_NAME = "DuplicateName"
    DUPLICATE_ADMISSION_NO = "DuplicateAdmissionNo"
    DUPLICATE_EMAIL = "DuplicateEmail"
    DUPLICATE_USER = "DuplicateUser"
    CLASS_ALREADY_ASSIGNED = "ClassAlreadyAssigned"

    # State machine
    SESSION_INACTIVE = "SessionInactive"
    CLASS_FROZEN = "ClassFrozen"
    ALREADY_INACTIVE = "AlreadyInactive"
    ALREADY_FROZEN = "AlreadyFrozen"
    ALREADY_UNFROZEN = "AlreadyUnfrozen"

    INTERNAL_ERROR = "InternalError"


ERROR_KINDS: Dict[ErrorCode, ErrorKind] = {
    ErrorCode.INVALID_CREDENTIALS: ErrorKind.UNAUTHENTICATED,
    ErrorCode.ACCOUNT_INACTIVE: ErrorKind.UNAUTHENTICATED,
    ErrorCode.CONFIGURATION_ERROR: ErrorKind.INTERNAL,
    ErrorCode.UNAUTHENTICATED: ErrorKind.UNAUTHENTICATED,
    ErrorCode.FORBIDDEN: ErrorKind.FORBIDDEN,
    ErrorCode.WRONG_TENANT: ErrorKind.FORBIDDEN,
    ErrorCode.NOT_FOUND: ErrorKind.NOT_FOUND,
    ErrorCode.SESSION_NOT_FOUND: ErrorKind.NOT_FOUND,
    ErrorCode.CLASS_NOT_FOUND: ErrorKind.NOT_FOUND,
    ErrorCode.VALIDATION_ERROR: ErrorKind.VALIDATION,
    ErrorCode.INVALID_DATE_RANGE: ErrorKind.VALIDATION,
    ErrorCode.DUPLICATE_NAME: ErrorKind.CONFLICT,
    ErrorCode.DUPLICATE_ADMISSION_NO: ErrorKind.CONFLICT,
    ErrorCode.DUPLICATE_EMAIL: ErrorKind.CONFLICT,
    ErrorCode.DUPLICATE_USER: ErrorKind.CONFLICT,
    ErrorCode.CLASS_ALREADY_ASSIGNED: ErrorKind.CONFLICT,
    ErrorCode.SESSION_INACTIVE: ErrorKind.INVALID_STATE_TRANSITION,
    ErrorCode.CLASS_FROZEN: ErrorKind.INVALID_STATE_TRANSITION,
    ErrorCode.ALREADY_INACTIVE: ErrorKind.INVALID_STATE_TRANSITION,
    ErrorCode.ALREADY_FROZEN: ErrorKind.INVALID_STATE_TRANSITION,
    ErrorCode.ALREADY_UNFROZEN: ErrorKind.INVALID_STATE_TRANSITION,
    ErrorCode.INTERNAL_ERROR: ErrorKind.INTERNAL,
}

HTTP_STATUS: Dict[ErrorKind, int] = {
    ErrorKind.VALIDATION: 400,
    ErrorKind.UNAUTHENTICATED: 401,
    ErrorKind.FORBIDDEN: 403,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.CONFLICT: 409,
    ErrorKind.INVALID_STATE_TRANSITION: 400,
    ErrorKind.INTERNAL: 500,
}


class ServiceError(Exception):
    """Base exception raised by every service operation."""

    def __init__(self, code: ErrorCode, message: str, details: Optional[Dict[str, Any]] = None):
        self.code = code
        self.message = message
        self.details = details
        super().__init__(message)

    @property
    def kind(self) -> ErrorKind:
        return ERROR_KINDS[self.code]

    @property
    def status_code(self) -> int:
        return HTTP_STATUS[self.kind]

    def __repr__(self) -> str:
        return f"ServiceError({self.code.value!r}, {self.message!r})"


def not_found_error(message: str = "Resource not found") -> ServiceError:
    return ServiceError(ErrorCode.NOT_FOUND, message)


def validation_error(message: str) -> ServiceError:
    return ServiceError(ErrorCode.VALIDATION_ERROR, message)


def wrong_tenant_error(message: str) -> ServiceError:
    return ServiceError(ErrorCode.WRONG_TENANT, message)
