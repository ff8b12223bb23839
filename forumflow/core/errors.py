"""
Error taxonomy and the exception handlers that turn it into JSON responses.

Every failure leaves the API as ``{"error": ..., "details": ...}``; ``details``
is only included when the service runs in development mode.
"""
import logging
from typing import Any, Dict, Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from pymongo.errors import PyMongoError
from starlette.exceptions import HTTPException as StarletteHTTPException

from forumflow.core.config import settings

logger = logging.getLogger("forumflow")


class ForumError(Exception):
    """Base exception class for ForumFlow errors"""
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str, details: Optional[Any] = None):
        super().__init__(message)
        self.message = message
        self.details = details


class Unauthorized(ForumError):
    """Raised when the credential is missing or malformed"""
    status_code = status.HTTP_401_UNAUTHORIZED


class Forbidden(ForumError):
    """Raised when the credential is rejected or the role is insufficient"""
    status_code = status.HTTP_403_FORBIDDEN


class BadRequest(ForumError):
    """Raised on missing or invalid input"""
    status_code = status.HTTP_400_BAD_REQUEST


class NotFound(ForumError):
    """Raised when a referenced entity does not exist"""
    status_code = status.HTTP_404_NOT_FOUND

    @classmethod
    def for_resource(cls, resource_type: str, resource_id: str) -> "NotFound":
        return cls(f"{resource_type} not found", details={"id": resource_id})


class ServerError(ForumError):
    """Raised on unexpected persistence or identity-provider failures"""
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


def error_body(message: str, details: Optional[Any] = None, **extra: Any) -> Dict[str, Any]:
    body: Dict[str, Any] = {"error": message, **extra}
    if details is not None and settings.expose_error_details:
        body["details"] = jsonable_encoder(details)
    return body


async def forum_error_handler(request: Request, exc: ForumError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error(f"{exc.message} on {request.method} {request.url.path}: {exc.details}")
    return JSONResponse(status_code=exc.status_code, content=error_body(exc.message, exc.details))


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=error_body("Invalid request", exc.errors()),
    )


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    if exc.status_code == status.HTTP_404_NOT_FOUND:
        return JSONResponse(
            status_code=exc.status_code,
            content=error_body("Route not found", path=request.url.path, method=request.method),
        )
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(str(exc.detail)),
        headers=getattr(exc, "headers", None),
    )


async def database_error_handler(request: Request, exc: PyMongoError) -> JSONResponse:
    logger.error(f"Database error on {request.method} {request.url.path}: {exc}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_body("Database error", str(exc)),
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_body("Internal server error", str(exc)),
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ForumError, forum_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(PyMongoError, database_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
