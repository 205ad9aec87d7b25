"""
Error taxonomy and problem-details rendering.

Services raise the ``APIError`` subclasses below; the handlers registered by
``register_exception_handlers`` turn them (and framework errors) into
``application/problem+json`` responses of the shape
``{type, title, status, detail, instance}``.
"""

import logging
import re
from typing import Dict, Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)

PROBLEM_TYPE_BASE = "https://example.com/errors/"
PROBLEM_MEDIA_TYPE = "application/problem+json"

STATUS_TITLES = {
    400: "Bad Request",
    401: "Unauthorized",
    403: "Forbidden",
    404: "Not Found",
    405: "Method Not Allowed",
    409: "Conflict",
    500: "Internal Server Error",
}


class APIError(Exception):
    """Base class for errors surfaced to API callers"""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    title = "Internal Server Error"

    def __init__(self, detail: Optional[str] = None, headers: Optional[Dict[str, str]] = None):
        self.detail = detail or self.title
        self.headers = headers
        super().__init__(self.detail)


class InvalidRequestError(APIError):
    status_code = status.HTTP_400_BAD_REQUEST
    title = "Bad Request"


class AuthenticationRequiredError(APIError):
    status_code = status.HTTP_401_UNAUTHORIZED
    title = "Unauthorized"

    def __init__(self, detail: str = "Authentication required"):
        super().__init__(detail, headers={"WWW-Authenticate": "Bearer"})


class AuthorizationDeniedError(APIError):
    status_code = status.HTTP_403_FORBIDDEN
    title = "Forbidden"


class NotFoundError(APIError):
    status_code = status.HTTP_404_NOT_FOUND
    title = "Not Found"


class ConflictError(APIError):
    status_code = status.HTTP_409_CONFLICT
    title = "Conflict"


def problem_type(title: str) -> str:
    return PROBLEM_TYPE_BASE + re.sub(r"\s+", "-", title.lower())


def problem_response(
    status_code: int,
    title: str,
    detail: Optional[str] = None,
    instance: Optional[str] = None,
    headers: Optional[Dict[str, str]] = None,
) -> JSONResponse:
    """Build a problem-details JSON response"""
    body = {
        "type": problem_type(title),
        "title": title,
        "status": status_code,
        "detail": detail or title,
    }
    if instance:
        body["instance"] = instance

    return JSONResponse(
        content=body,
        status_code=status_code,
        headers=headers,
        media_type=PROBLEM_MEDIA_TYPE,
    )


def format_validation_errors(exc: RequestValidationError) -> str:
    """Flatten pydantic errors into a single readable sentence"""
    messages = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()) if part not in ("body", "query", "path"))
        message = error.get("msg", "Invalid value")
        messages.append(f"{location}: {message}" if location else message)
    return "; ".join(messages) or "Invalid request"


async def api_error_handler(request: Request, exc: APIError) -> JSONResponse:
    return problem_response(
        exc.status_code,
        exc.title,
        exc.detail,
        instance=request.url.path,
        headers=exc.headers,
    )


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return problem_response(
        status.HTTP_400_BAD_REQUEST,
        STATUS_TITLES[400],
        format_validation_errors(exc),
        instance=request.url.path,
    )


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    title = STATUS_TITLES.get(exc.status_code, "Error")
    detail = exc.detail if isinstance(exc.detail, str) else title
    return problem_response(
        exc.status_code,
        title,
        detail,
        instance=request.url.path,
        headers=getattr(exc, "headers", None),
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return problem_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        STATUS_TITLES[500],
        "An unexpected error occurred",
        instance=request.url.path,
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(APIError, api_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
