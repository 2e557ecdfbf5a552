"""Exception handlers for the virtual shell FastAPI application.

This module defines custom exception handlers that convert Python exceptions
into consistent, user-friendly JSON responses.
"""

import logging

from fastapi import Request, status
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from models.errors import ErrorKind, FsError


logger = logging.getLogger(__name__)

# HTTP status for each filesystem error kind; anything else is a bad request
ERROR_STATUS_CODES = {
    ErrorKind.NO_SUCH_ENTRY: status.HTTP_404_NOT_FOUND,
    ErrorKind.NO_SUCH_PARENT: status.HTTP_404_NOT_FOUND,
    ErrorKind.ALREADY_EXISTS: status.HTTP_409_CONFLICT,
}


# Custom Exception Classes
# These let you raise specific, meaningful errors in your route handlers


class FileSystemOperationError(Exception):
    """Raised when a filesystem operation returns a failed FsResult.

    Args:
        error: The FsError describing what went wrong.
        operation: Name of the attempted operation (e.g. "mkdir").
    """

    def __init__(self, error: FsError, operation: str):
        self.error = error
        self.operation = operation
        super().__init__(f"{operation}: {error}")

    @property
    def status_code(self) -> int:
        return ERROR_STATUS_CODES.get(self.error.kind, status.HTTP_400_BAD_REQUEST)


# Exception Handlers
# These convert exceptions into JSON responses


async def filesystem_error_handler(request: Request, exc: FileSystemOperationError):
    """Handle FileSystemOperationError exceptions.

    Returns 404 for missing entries or parents, 409 when the target already
    exists, and 400 for every other kind.

    Args:
        request: The incoming request that triggered the error.
        exc: The FileSystemOperationError exception.

    Returns:
        JSONResponse with the error kind, offending path and message.
    """
    logger.debug(f"{request.method} {request.url.path} failed: {exc}")
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "error": exc.error.kind.value,
            "detail": exc.error.message,
            "path": exc.error.path,
            "operation": exc.operation,
        },
    )


async def validation_exception_handler(request: Request, exc: ValidationError):
    """Handle Pydantic validation errors.

    Args:
        request: The incoming request that triggered the error.
        exc: The ValidationError exception.

    Returns:
        JSONResponse with validation error details.
    """
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={
            "error": "Validation Error",
            "detail": "The request data failed validation",
            "validation_errors": exc.errors(include_url=False, include_context=False),
        },
    )


async def value_error_handler(request: Request, exc: ValueError):
    """Handle ValueError exceptions.

    ValueErrors indicate input values that passed Pydantic validation but
    were rejected further down.
    """
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "error": "Invalid Value",
            "detail": str(exc),
            "type": "ValueError",
        },
    )


async def runtime_error_handler(request: Request, exc: RuntimeError):
    """Handle RuntimeError exceptions (e.g. filesystem not initialized)."""
    logger.error(f"Runtime error on {request.method} {request.url.path}: {exc}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": "Runtime Error",
            "detail": str(exc),
            "type": "RuntimeError",
        },
    )


async def generic_exception_handler(request: Request, exc: Exception):
    """Handle any unhandled exceptions.

    This is a catch-all handler for unexpected errors. It logs the traceback
    and prevents it from being exposed to clients.
    """
    logger.exception(f"Unhandled exception on {request.method} {request.url.path}: {exc}")

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": "Internal Server Error",
            "detail": "An unexpected error occurred",
            "type": type(exc).__name__,
        },
    )
