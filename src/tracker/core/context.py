"""Identifiers describing the request currently being served.

``CorrelationIdMiddleware`` binds the request id and the auth gate binds the
caller's user id. Log records and error responses read them back from here.
"""

from __future__ import annotations

from contextvars import ContextVar, Token

REQUEST_ID_HEADER = "X-Request-ID"
NO_REQUEST_ID = "-"

_current_request_id: ContextVar[str] = ContextVar("tracker_request_id", default=NO_REQUEST_ID)
_current_user_id: ContextVar[str | None] = ContextVar("tracker_user_id", default=None)


def get_request_id() -> str:
    return _current_request_id.get()


def bind_request_id(request_id: str) -> Token[str]:
    return _current_request_id.set(request_id)


def reset_request_id(token: Token[str]) -> None:
    _current_request_id.reset(token)


def get_user_id() -> str | None:
    """Id of the authenticated caller, or ``None`` before the auth gate has run."""
    return _current_user_id.get()


def bind_user_id(user_id: str) -> Token[str | None]:
    return _current_user_id.set(user_id)


def reset_user_id(token: Token[str | None]) -> None:
    _current_user_id.reset(token)


def current_identifiers() -> dict[str, str]:
    """The bound identifiers, omitting the user id when nobody is authenticated."""
    identifiers = {"request_id": get_request_id()}
    user_id = get_user_id()
    if user_id is not None:
        identifiers["user_id"] = user_id
    return identifiers


__all__ = [
    "NO_REQUEST_ID",
    "REQUEST_ID_HEADER",
    "bind_request_id",
    "bind_user_id",
    "current_identifiers",
    "get_request_id",
    "get_user_id",
    "reset_request_id",
    "reset_user_id",
]
