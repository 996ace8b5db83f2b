"""
Application error hierarchy and FastAPI exception handlers.

AppError is the base for all typed errors. The global exception handler
converts AppError subclasses to consistent JSON responses of the shape
``{"message": ..., "code": ...}``.

Non-AppError exceptions bubble up as 500s (with Sentry reporting when it is
configured). The exception text is only exposed outside production.
"""

from __future__ import annotations

from typing import Any, Optional

import sentry_sdk
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from shared.logging import get_logger

log = get_logger(__name__)


class AppError(Exception):
    """Base application error. All typed errors inherit from this."""

    status_code: int = 500
    error_code: str = "internal_error"

    def __init__(
        self,
        message: str,
        *,
        field: Optional[str] = None,
        details: Optional[Any] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.field = field
        self.details = details

    def to_dict(self) -> dict:
        payload: dict = {"message": self.message, "code": self.error_code}
        if self.field is not None:
            payload["field"] = self.field
        if self.details is not None:
            payload["details"] = self.details
        return payload


class ValidationError(AppError):
    status_code = 400
    error_code = "validation_error"


class AuthenticationError(AppError):
    status_code = 401
    error_code = "authentication_error"


class ForbiddenError(AuthenticationError):
    """A token was presented but cannot be accepted (bad signature, expiry, domain)."""

    status_code = 403
    error_code = "forbidden"


class DecryptionError(AuthenticationError):
    """Ciphertext is malformed or was not produced for the given private key."""

    error_code = "decryption_error"


class NotFoundError(AppError):
    status_code = 404
    error_code = "not_found"


class ConflictError(AppError):
    status_code = 400
    error_code = "conflict"


class DependencyError(AppError):
    """The document store (or another backing service) is unavailable."""

    status_code = 500
    error_code = "dependency_error"


def register_error_handlers(app: FastAPI) -> None:
    """Register global exception handlers on the FastAPI app."""

    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        errors = exc.errors()
        field = None
        message = "Invalid request body"
        if errors:
            loc = [str(part) for part in errors[0].get("loc", ()) if part != "body"]
            field = ".".join(loc) or None
            message = errors[0].get("msg", message)
        err = ValidationError(message, field=field)
        return JSONResponse(status_code=err.status_code, content=err.to_dict())

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(
        request: Request, exc: Exception
    ) -> JSONResponse:
        return internal_error_response(request, exc)


def internal_error_response(request: Request, exc: Exception) -> JSONResponse:
    """Build the JSON 500 for an exception no handler claimed.

    Also used by the HTTP middleware, which turns unhandled exceptions into
    responses itself so CORS and request-id headers still get attached.
    """
    sentry_sdk.capture_exception(exc)
    log.error(
        "unhandled_exception",
        path=request.url.path,
        error=str(exc),
        error_type=type(exc).__name__,
    )
    content: dict = {"message": "Internal Server Error", "code": "internal_error"}
    settings = getattr(request.app.state, "settings", None)
    if settings is not None and not settings.is_production:
        content["details"] = str(exc)
    return JSONResponse(status_code=500, content=content)
