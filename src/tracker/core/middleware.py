"""Application middleware implementations."""

from __future__ import annotations

import logging
import uuid

import anyio
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import PlainTextResponse, Response
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from .context import REQUEST_ID_HEADER, bind_request_id, reset_request_id

logger = logging.getLogger(__name__)


class CorrelationIdMiddleware(BaseHTTPMiddleware):
    """Attach a correlation identifier to each request/response cycle."""

    def __init__(self, app, header_name: str = REQUEST_ID_HEADER):  # type: ignore[override]
        super().__init__(app)
        self._header_name = header_name

    async def dispatch(self, request: Request, call_next) -> Response:  # type: ignore[override]
        request_id = request.headers.get(self._header_name) or self._generate_request_id()
        token = bind_request_id(request_id)
        request.state.request_id = request_id
        try:
            response = await call_next(request)
        finally:
            reset_request_id(token)
        response.headers.setdefault(self._header_name, request_id)
        return response

    @staticmethod
    def _generate_request_id() -> str:
        return uuid.uuid4().hex


class RequestTimeoutMiddleware:
    """Cancel HTTP handlers that run longer than ``timeout_seconds``.

    A ``504`` is sent only when the downstream app has not started its
    response yet; a timeout of ``0`` disables the guard.
    """

    def __init__(self, app: ASGIApp, timeout_seconds: float) -> None:
        self.app = app
        self._timeout = timeout_seconds

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http" or self._timeout <= 0:
            await self.app(scope, receive, send)
            return

        response_started = False

        async def _send(message: Message) -> None:
            nonlocal response_started
            if message["type"] == "http.response.start":
                response_started = True
            await send(message)

        with anyio.move_on_after(self._timeout) as cancel_scope:
            await self.app(scope, receive, _send)

        if cancel_scope.cancelled_caught:
            logger.warning(
                "Request timed out",
                extra={"path": scope.get("path"), "timeout_seconds": self._timeout},
            )
            if not response_started:
                response = PlainTextResponse("Request timed out.", status_code=504)
                await response(scope, receive, send)


__all__ = ["CorrelationIdMiddleware", "RequestTimeoutMiddleware"]
