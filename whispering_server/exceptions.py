# Copyright (C) 2024 Whispering Network Contributors
# SPDX-License-Identifier: GPL-3.0-or-later

"""Error taxonomy and the JSON error responses they map to."""

import logging
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class WhisperError(Exception):
    """Base class for errors that map to an HTTP status."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Internal server error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(WhisperError):
    """Malformed request payload. Carries field-level errors."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid request data"

    def __init__(self, message: str | None = None, errors: list[dict[str, str]] | None = None):
        super().__init__(message)
        self.errors = errors or []


class NotFoundError(WhisperError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found"


class AuthError(WhisperError):
    """Bad credentials or disabled account."""

    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Invalid credentials"


class ConflictError(WhisperError):
    """Unique constraint violated (e.g. duplicate username)."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Already exists"


class InternalError(WhisperError):
    pass


def _field_errors(exc: RequestValidationError) -> list[dict[str, str]]:
    """Flatten pydantic errors to {field, message} pairs; drops the leading 'body'/'path' loc."""
    out = []
    for err in exc.errors():
        loc = [str(p) for p in err.get("loc", ()) if p not in ("body", "path", "query")]
        out.append({"field": ".".join(loc), "message": err.get("msg", "Invalid value")})
    return out


def _error_response(exc: WhisperError) -> JSONResponse:
    content: dict[str, Any] = {"message": exc.message}
    if isinstance(exc, ValidationError):
        content["errors"] = exc.errors
    return JSONResponse(status_code=exc.status_code, content=content)


async def whisper_error_handler(request: Request, exc: WhisperError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return _error_response(exc)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Body validation failures become 400 ValidationError.

    An id in the path that is not a usable id (not a number, out of range)
    cannot name an existing row, so it is answered as not found.
    """
    if any(tuple(err.get("loc", ()))[:1] == ("path",) for err in exc.errors()):
        return _error_response(NotFoundError())
    return _error_response(ValidationError(errors=_field_errors(exc)))


async def catch_unhandled_errors(request: Request, call_next):
    """Catch-all: log server side, return a generic 500.

    Installed as the innermost middleware so the response still passes
    through CORS and the request log.
    """
    try:
        return await call_next(request)
    except Exception:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return _error_response(InternalError())


def register_exception_handlers(app: FastAPI) -> None:
    """Install error handlers. Call before adding other middleware."""
    app.add_exception_handler(WhisperError, whisper_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.middleware("http")(catch_unhandled_errors)
