"""Application-level exception handling helpers.

Every failure leaves the service as a terse ``text/plain`` response; auth
failures carry an empty body.
"""

from __future__ import annotations

import logging
from contextvars import Token
from http import HTTPStatus
from typing import Mapping

from fastapi import FastAPI, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import PlainTextResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.requests import Request

from .core.context import REQUEST_ID_HEADER, bind_request_id, reset_request_id

logger = logging.getLogger(__name__)


class ApplicationError(Exception):
    """Base class for domain-specific errors."""

    def __init__(self, message: str, *, status_code: int = status.HTTP_400_BAD_REQUEST) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class UnauthenticatedError(ApplicationError):
    """No credential was presented."""

    def __init__(self, message: str = "") -> None:
        super().__init__(message, status_code=status.HTTP_401_UNAUTHORIZED)


class ForbiddenError(ApplicationError):
    """The credential is invalid or does not grant access to the resource."""

    def __init__(self, message: str = "") -> None:
        super().__init__(message, status_code=status.HTTP_403_FORBIDDEN)


class NotFoundError(ApplicationError):
    def __init__(self, message: str = "Resource not found.") -> None:
        super().__init__(message, status_code=status.HTTP_404_NOT_FOUND)


class UserNotFoundError(ApplicationError):
    """Login attempted for a username that was never registered."""

    def __init__(self, message: str = "User not found") -> None:
        super().__init__(message, status_code=status.HTTP_400_BAD_REQUEST)


class InvalidCredentialError(ApplicationError):
    """Login attempted with the wrong password."""

    def __init__(self, message: str = "Invalid password") -> None:
        super().__init__(message, status_code=status.HTTP_400_BAD_REQUEST)


class StorageError(ApplicationError):
    """A persistence operation failed."""

    def __init__(self, message: str = "Internal server error.") -> None:
        super().__init__(message, status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)


def _bind_request_context(request: Request) -> Token[str] | None:
    request_id = getattr(request.state, "request_id", None)
    if not request_id:
        return None
    return bind_request_id(request_id)


def _reset_request_context(token: Token[str] | None) -> None:
    if token is not None:
        reset_request_id(token)


def _text_response(
    request: Request,
    *,
    status_code: int,
    message: str,
    headers: Mapping[str, str] | None = None,
) -> PlainTextResponse:
    response = PlainTextResponse(message, status_code=status_code)
    if headers:
        response.headers.update(headers)
    request_id = getattr(request.state, "request_id", None)
    if request_id:
        response.headers.setdefault(REQUEST_ID_HEADER, request_id)
    return response


def _log_for(status_code: int):
    return logger.error if status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR else logger.warning


_LOGGED_VALIDATION_KEYS = ("loc", "type", "msg")


def _summarise_validation_errors(exc: RequestValidationError) -> list[dict]:
    """Drop the offending ``input`` values so submitted secrets never reach the logs."""
    return [
        {key: error[key] for key in _LOGGED_VALIDATION_KEYS if key in error}
        for error in exc.errors()
    ]


def register_exception_handlers(app: FastAPI) -> None:
    """Register exception handlers with the provided FastAPI app."""

    @app.exception_handler(ApplicationError)
    async def _handle_application_error(
        request: Request,
        exc: ApplicationError,
    ) -> PlainTextResponse:
        token = _bind_request_context(request)
        try:
            _log_for(exc.status_code)(
                "Application error encountered",
                extra={
                    "error": type(exc).__name__,
                    "status_code": exc.status_code,
                    "path": request.url.path,
                },
            )
            return _text_response(request, status_code=exc.status_code, message=exc.message)
        finally:
            _reset_request_context(token)

    @app.exception_handler(RequestValidationError)
    async def _handle_request_validation_error(
        request: Request,
        exc: RequestValidationError,
    ) -> PlainTextResponse:
        token = _bind_request_context(request)
        try:
            logger.warning(
                "Request validation failed",
                extra={"errors": _summarise_validation_errors(exc), "path": request.url.path},
            )
            return _text_response(
                request,
                status_code=422,
                message="Request validation failed.",
            )
        finally:
            _reset_request_context(token)

    @app.exception_handler(StarletteHTTPException)
    async def _handle_http_exception(
        request: Request,
        exc: StarletteHTTPException,
    ) -> PlainTextResponse:
        token = _bind_request_context(request)
        try:
            if isinstance(exc.detail, str) and exc.detail:
                message = exc.detail
            else:
                try:
                    message = HTTPStatus(exc.status_code).phrase
                except ValueError:
                    message = "Error"
            _log_for(exc.status_code)(
                "HTTP exception raised",
                extra={"status_code": exc.status_code, "path": request.url.path},
            )
            return _text_response(
                request,
                status_code=exc.status_code,
                message=message,
                headers=exc.headers or None,
            )
        finally:
            _reset_request_context(token)

    @app.exception_handler(Exception)
    async def _handle_unhandled_exception(
        request: Request,
        exc: Exception,
    ) -> PlainTextResponse:
        token = _bind_request_context(request)
        try:
            logger.exception("Unhandled application error.")
            return _text_response(
                request,
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                message="Internal server error.",
            )
        finally:
            _reset_request_context(token)


__all__ = [
    "ApplicationError",
    "ForbiddenError",
    "InvalidCredentialError",
    "NotFoundError",
    "StorageError",
    "UnauthenticatedError",
    "UserNotFoundError",
    "register_exception_handlers",
]
