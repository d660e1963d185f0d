# app/api/v1/error_handlers.py
"""
FastAPI exception handlers that map domain exceptions to HTTP responses.

Every error response has the same body:

    {
        "error_code": "DuplicateError",
        "message": "Pos with name 'Cafe Botanik' already exists.",
        "status_code": 409,
        "status_message": "Conflict",
        "timestamp": "2026-10-17T09:12:44.120Z",
        "path": "/api/pos"
    }

Status codes come from the exceptions themselves (`DomainError.http_status()`).
"""

from datetime import datetime, timezone
from http import HTTPStatus
import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from app.exceptions.base import (
    DomainError,
    DuplicateError,
    MissingFieldError,
    NotFoundError,
    ValidationError,
)
from .schemas import ErrorResponse

logger = logging.getLogger(__name__)

UNEXPECTED_ERROR_MESSAGE = "An unexpected error occurred."


def error_response(request: Request, status_code: int, error_code: str, message: str) -> JSONResponse:
    body = ErrorResponse(
        error_code=error_code,
        message=message,
        status_code=status_code,
        status_message=HTTPStatus(status_code).phrase,
        timestamp=datetime.now(timezone.utc),
        path=request.url.path,
    )
    return JSONResponse(status_code=status_code, content=body.model_dump(mode="json"))


async def domain_error_handler(request: Request, exc: DomainError) -> JSONResponse:
    # client-level scenarios: INFO, no traceback
    logger.info(
        "api.domain_error",
        extra={
            "error_type": type(exc).__name__,
            "method": request.method,
            "path": request.url.path,
            "fields": exc.fields,
        },
    )
    return error_response(request, exc.http_status(), type(exc).__name__, exc.message)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    details = "; ".join(
        f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}" for error in exc.errors()
    )
    logger.info("api.request_invalid", extra={"method": request.method, "path": request.url.path})
    return error_response(request, 400, "ValidationError", details or "Invalid request.")


async def unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(
        "api.unexpected_error",
        extra={"method": request.method, "path": request.url.path, "error_type": type(exc).__name__},
    )
    return error_response(request, 500, type(exc).__name__, UNEXPECTED_ERROR_MESSAGE)


def register_exception_handlers(app: FastAPI) -> None:
    # most specific first; each maps through DomainError.http_status()
    for exc_type in (NotFoundError, DuplicateError, MissingFieldError, ValidationError, DomainError):
        app.add_exception_handler(exc_type, domain_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unexpected_error_handler)
