"""
Error taxonomy and FastAPI exception handlers.
Every failure leaves the API as the same envelope: {"success": false, "message": ...}.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class AppError(Exception):
    """Base for errors that map to a client-facing status and message."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Server error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(AppError):
    """Bad or missing input. Always client-fixable."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid input"


class AuthError(AppError):
    """Missing, invalid or expired credentials (unauthenticated)."""

    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Not authorized"


class ForbiddenError(AppError):
    """Authenticated, but the role requirement is not met."""

    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Forbidden"


class ConflictError(AppError):
    # The public contract reports duplicate emails as a plain 400
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Resource already exists"


class NotFoundError(AppError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found"


class ServerError(AppError):
    """Unexpected store or hashing failure. The message is always generic."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Server error"


def error_response(status_code: int, message: str, headers: dict | None = None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"success": False, "message": message},
        headers=headers,
    )


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, AuthError) else None
    return error_response(exc.status_code, exc.message, headers)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Unparseable bodies are reported as 400, like any other bad input."""
    logger.info("Rejected request body on %s %s: %s", request.method, request.url.path, exc.errors())
    return error_response(status.HTTP_400_BAD_REQUEST, "Invalid request body")


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return error_response(exc.status_code, str(exc.detail), getattr(exc, "headers", None))


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Catch-all: log the traceback, return a generic message."""
    logger.exception("Unhandled exception on %s %s", request.method, request.url.path)
    return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, ServerError.default_message)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
