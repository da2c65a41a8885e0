"""
Application exceptions and global handlers.
"""
from typing import Optional

from fastapi import HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from loguru import logger

from .response import error_response


RECOVERY_TITLE = "Oops! Something went wrong"
RECOVERY_MESSAGE = "We're sorry for the inconvenience. Please try refreshing the page."


class AppException(Exception):
    """Base application exception."""

    def __init__(
        self,
        message: str = "Internal server error",
        code: int = 500,
        data: Optional[dict] = None
    ):
        self.message = message
        self.code = code
        self.data = data
        super().__init__(self.message)


class NotFoundException(AppException):
    def __init__(self, message: str = "Resource not found"):
        super().__init__(message=message, code=404)


class BadRequestException(AppException):
    def __init__(self, message: str = "Bad request"):
        super().__init__(message=message, code=400)


class UnauthorizedException(AppException):
    def __init__(self, message: str = "Authentication required"):
        super().__init__(message=message, code=401)


class ForbiddenException(AppException):
    def __init__(self, message: str = "Access denied"):
        super().__init__(message=message, code=403)


class ConflictException(AppException):
    def __init__(self, message: str = "Resource already exists"):
        super().__init__(message=message, code=409)


class FormValidationException(AppException):
    """
    Field-level validation failure.

    ``errors`` maps each offending field to its first message; nothing
    was submitted to the backend.
    """

    def __init__(self, errors: dict[str, str], message: str = "Please fix the highlighted fields"):
        self.errors = errors
        super().__init__(message=message, code=422, data={"errors": errors})


class BackendNotConfiguredException(AppException):
    def __init__(self, message: str = "Backend is not configured"):
        super().__init__(message=message, code=503)


class MalformedDataException(AppException):
    """The backend returned data that does not match the expected shape."""

    def __init__(self, message: str = "Backend returned malformed data"):
        super().__init__(message=message, code=502)


async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
    logger.warning(f"AppException: {exc.message} | Path: {request.url.path}")
    return JSONResponse(
        status_code=exc.code,
        content=error_response(message=exc.message, code=exc.code, data=exc.data)
    )


async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    logger.warning(f"HTTPException: {exc.detail} | Path: {request.url.path}")
    return JSONResponse(
        status_code=exc.status_code,
        content=error_response(message=str(exc.detail), code=exc.status_code)
    )


def _field_name(loc: tuple) -> str:
    # ("body", "mobile") -> "mobile"; ("query", "page") -> "page"
    parts = [str(p) for p in loc if p not in ("body", "query", "path", "form")]
    return ".".join(parts) or "request"


def _clean_message(error: dict) -> str:
    if error["type"] == "missing":
        return "This field is required"
    return error["msg"].removeprefix("Value error, ")


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    errors: dict[str, str] = {}
    for error in exc.errors():
        errors.setdefault(_field_name(tuple(error["loc"])), _clean_message(error))

    logger.warning(f"ValidationError: {errors} | Path: {request.url.path}")
    return JSONResponse(
        status_code=422,
        content=error_response(
            message="Please fix the highlighted fields",
            code=422,
            data={"errors": errors}
        )
    )


async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Last line of defence: log and hand the client a recovery payload."""
    logger.exception(f"Unhandled Exception: {exc} | Path: {request.url.path}")
    return JSONResponse(
        status_code=500,
        content=error_response(
            message=RECOVERY_TITLE,
            code=500,
            data={"detail": RECOVERY_MESSAGE, "action": "reload"}
        )
    )
