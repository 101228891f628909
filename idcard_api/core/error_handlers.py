from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
import logging

from ..schemas.common import describe_errors
from .exceptions import ErrorCode, ErrorKind, ServiceError

logger = logging.getLogger(__name__)


def error_response(status_code: int, error: str, message: str, headers: dict = None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"success": False, "error": error, "message": message},
        headers=headers,
    )


async def service_exception_handler(request: Request, exc: ServiceError):
    """Handle errors raised by the service layer"""
    if exc.kind is ErrorKind.INTERNAL:
        logger.error(f"Service error {exc.code.value}: {exc.message} - Path: {request.url.path}")
    else:
        logger.info(f"{exc.code.value}: {exc.message} - Path: {request.url.path}")

    headers = {"WWW-Authenticate": "Bearer"} if exc.kind is ErrorKind.UNAUTHENTICATED else None
    return error_response(exc.status_code, exc.code.value, exc.message, headers)


async def request_validation_handler(request: Request, exc: RequestValidationError):
    """Malformed bodies, query strings and ids are all 400s"""
    return error_response(400, ErrorCode.VALIDATION_ERROR.value, describe_errors(exc.errors()))


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    error = {
        401: ErrorCode.UNAUTHENTICATED.value,
        403: ErrorCode.FORBIDDEN.value,
        404: ErrorCode.NOT_FOUND.value,
    }.get(exc.status_code, "HTTPError")
    return error_response(exc.status_code, error, str(exc.detail), getattr(exc, "headers", None))


async def general_exception_handler(request: Request, exc: Exception):
    """Handle general exceptions"""
    logger.exception(f"Unexpected error: {exc} - Path: {request.url.path}")
    return error_response(500, ErrorCode.INTERNAL_ERROR.value, "Internal server error")


def register_exception_handlers(app: FastAPI):
    app.add_exception_handler(ServiceError, service_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, general_exception_handler)
