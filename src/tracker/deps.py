"""Reusable FastAPI dependencies, including the authentication gate."""

from __future__ import annotations

from collections.abc import AsyncIterator
from typing import Annotated

from fastapi import Depends, Request, Security
from fastapi.security import APIKeyHeader
from sqlmodel.ext.asyncio.session import AsyncSession

from .core.config import Settings, get_settings
from .core.context import bind_user_id
from .db.session import get_session
from .errors import ForbiddenError, UnauthenticatedError
from .schemas.auth import TokenClaims
from .services.tokens import InvalidTokenError, TokenService

_BEARER_SCHEME = "bearer"

_authorization_header = APIKeyHeader(
    name="Authorization",
    auto_error=False,
    description="Signed token returned by /login, sent as-is (a 'Bearer ' prefix is also accepted).",
)


async def get_db_session() -> AsyncIterator[AsyncSession]:
    """FastAPI dependency that yields a database session."""

    async for session in get_session():
        yield session


SettingsDependency = Annotated[Settings, Depends(get_settings)]
DatabaseSessionDependency = Annotated[AsyncSession, Depends(get_db_session)]


def get_token_service(settings: SettingsDependency) -> TokenService:
    return TokenService.from_settings(settings)


TokenServiceDependency = Annotated[TokenService, Depends(get_token_service)]


def extract_token(authorization: str | None) -> str | None:
    """Return the credential carried by an ``Authorization`` header value."""
    if authorization is None:
        return None
    value = authorization.strip()
    scheme, _, credential = value.partition(" ")
    if scheme.lower() == _BEARER_SCHEME:
        value = credential.strip()
    return value or None


async def require_claims(
    request: Request,
    token_service: TokenServiceDependency,
    authorization: str | None = Security(_authorization_header),
) -> TokenClaims:
    """Reject the request unless it carries a valid token; expose its claims.

    Missing credentials yield 401 and invalid ones 403, both with empty bodies.
    """
    token = extract_token(authorization)
    if token is None:
        raise UnauthenticatedError()
    try:
        claims = token_service.verify(token)
    except InvalidTokenError as exc:
        raise ForbiddenError() from exc
    request.state.claims = claims
    # Scoped to this request's task context; later log lines carry the caller.
    bind_user_id(claims.sub)
    return claims


ClaimsDependency = Annotated[TokenClaims, Depends(require_claims)]


__all__ = [
    "ClaimsDependency",
    "DatabaseSessionDependency",
    "SettingsDependency",
    "TokenServiceDependency",
    "extract_token",
    "get_db_session",
    "get_token_service",
    "require_claims",
]
