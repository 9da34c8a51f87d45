import logging

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import ValidationError as PydanticValidationError
from starlette.exceptions import HTTPException

from optima_scheduler import InvalidInputError, SchedulingError, UnknownStrategyError

logger = logging.getLogger(__name__)


class OptimaException(Exception):
    """Base exception for Optima API"""

    def __init__(self, message: str, error_code: str | None = None):
        self.message = message
        self.error_code = error_code
        super().__init__(message)


class ResourceNotFoundError(OptimaException):
    """Resource not found exception"""

    def __init__(self, resource_type: str, resource_id: int | str | None = None):
        message = f"{resource_type} not found"
        if resource_id is not None:
            message += f" with ID: {resource_id}"
        super().__init__(message, "RESOURCE_NOT_FOUND")


class ValidationError(OptimaException):
    """Validation error exception"""

    def __init__(self, message: str, field: str | None = None):
        self.field = field
        if field:
            message = f"Validation error for field '{field}': {message}"
        super().__init__(message, "VALIDATION_ERROR")


def _error_content(request: Request, detail, error_code: str | None, **extra) -> dict:
    return {
        "detail": detail,
        "error_code": error_code,
        "path": str(request.url),
        **extra,
    }


def _format_errors(errors) -> list[dict]:
    return [
        {
            "field": " -> ".join(str(loc) for loc in error["loc"]),
            "message": error["msg"],
            "type": error["type"],
        }
        for error in errors
    ]


async def http_exception_handler(request: Request, exc: HTTPException):
    """Handle HTTP exceptions"""
    return JSONResponse(
        status_code=exc.status_code,
        content=_error_content(request, exc.detail, getattr(exc, "error_code", None)),
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Handle request validation errors"""
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content=_error_content(
            request,
            "Request validation failed",
            "VALIDATION_ERROR",
            errors=_format_errors(exc.errors()),
        ),
    )


async def pydantic_validation_exception_handler(
    request: Request, exc: PydanticValidationError
):
    """Handle Pydantic validation errors"""
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content=_error_content(
            request,
            "Data validation failed",
            "VALIDATION_ERROR",
            errors=_format_errors(exc.errors()),
        ),
    )


async def optima_exception_handler(request: Request, exc: OptimaException):
    """Handle custom Optima exceptions"""
    status_code = status.HTTP_400_BAD_REQUEST

    if isinstance(exc, ResourceNotFoundError):
        status_code = status.HTTP_404_NOT_FOUND
    elif isinstance(exc, ValidationError):
        status_code = status.HTTP_422_UNPROCESSABLE_ENTITY

    return JSONResponse(
        status_code=status_code,
        content=_error_content(request, exc.message, exc.error_code),
    )


async def scheduling_exception_handler(request: Request, exc: SchedulingError):
    """Handle errors raised by the scheduling engine"""
    status_code = status.HTTP_400_BAD_REQUEST
    extra = {}

    if isinstance(exc, UnknownStrategyError):
        extra["available"] = exc.available
    elif isinstance(exc, InvalidInputError):
        status_code = status.HTTP_422_UNPROCESSABLE_ENTITY

    logger.warning(f"⚠️ Scheduling request rejected: {exc.message}")
    return JSONResponse(
        status_code=status_code,
        content=_error_content(request, exc.message, exc.error_code, **extra),
    )


async def general_exception_handler(request: Request, exc: Exception):
    """Handle general exceptions"""
    logger.error(f"❌ Unhandled error on {request.url}: {exc}", exc_info=exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=_error_content(request, "Internal server error", "INTERNAL_ERROR"),
    )
