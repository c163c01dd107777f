"""
Todo API - Error Taxonomy

Domain exceptions raised by services and the access guard, and the
FastAPI handlers that render them as JSON responses.
"""

import logging
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pymongo.errors import PyMongoError

logger = logging.getLogger(__name__)


class TodoAPIError(Exception):
    """Base class for errors that map onto an HTTP status."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail: str = "Internal server error"

    def __init__(self, detail: Optional[str] = None, headers: Optional[dict] = None):
        self.detail = detail or self.default_detail
        self.headers = headers
        super().__init__(self.detail)

    def to_body(self) -> dict:
        return {"detail": self.detail}


class ValidationError(TodoAPIError):
    """Malformed or missing required input."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Validation failed"

    def __init__(self, errors: Optional[list[dict]] = None, detail: Optional[str] = None):
        super().__init__(detail)
        self.errors = errors or []

    @classmethod
    def for_field(cls, field: str, message: str) -> "ValidationError":
        return cls([{"field": field, "message": message}])

    def to_body(self) -> dict:
        return {"detail": self.detail, "errors": self.errors}


class InvalidCredentials(TodoAPIError):
    """Unknown username or wrong password. Deliberately one error for both."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Invalid credentials"


class Unauthorized(TodoAPIError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_detail = "Not authenticated"

    def __init__(self, detail: Optional[str] = None):
        super().__init__(detail, headers={"WWW-Authenticate": "Bearer"})


class Forbidden(TodoAPIError):
    status_code = status.HTTP_403_FORBIDDEN
    default_detail = "Invalid or expired token"


class NotFound(TodoAPIError):
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = "Not found"


class ConflictError(TodoAPIError):
    status_code = status.HTTP_409_CONFLICT
    default_detail = "Conflict"


class InternalError(TodoAPIError):
    pass


async def _handle_todo_api_error(request: Request, exc: TodoAPIError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.detail)
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_body(),
        headers=exc.headers,
    )


async def _handle_request_validation_error(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    errors = []
    for error in exc.errors():
        # loc is ("body", "title") or ("path", "task_id"); drop the source part
        loc = [str(part) for part in error.get("loc", ()) if part not in ("body", "query", "path")]
        errors.append({"field": ".".join(loc) or "body", "message": error.get("msg", "Invalid value")})
    return await _handle_todo_api_error(request, ValidationError(errors))


async def _handle_store_error(request: Request, exc: PyMongoError) -> JSONResponse:
    logger.exception("Store operation failed for %s %s", request.method, request.url.path)
    return await _handle_todo_api_error(request, InternalError())


async def _handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unexpected error for %s %s", request.method, request.url.path)
    return await _handle_todo_api_error(request, InternalError())


def register_exception_handlers(app: FastAPI) -> None:
    """Attach the error taxonomy handlers to an application."""
    app.add_exception_handler(TodoAPIError, _handle_todo_api_error)
    app.add_exception_handler(RequestValidationError, _handle_request_validation_error)
    app.add_exception_handler(PyMongoError, _handle_store_error)
    app.add_exception_handler(Exception, _handle_unexpected_error)
