"""Authentication service encapsulating registration and login."""

from __future__ import annotations

import logging

from sqlmodel.ext.asyncio.session import AsyncSession

from ..core.security import verify_password
from ..errors import InvalidCredentialError, UserNotFoundError
from ..models import DEFAULT_ROLE, User
from ..schemas.auth import TokenClaims
from .tokens import TokenService
from .users import UserService

logger = logging.getLogger(__name__)


class AuthService:
    """High-level authentication workflows."""

    def __init__(self, session: AsyncSession, token_service: TokenService) -> None:
        self._session = session
        self._token_service = token_service
        self._user_service = UserService(session)

    async def register_user(
        self,
        *,
        username: str,
        password: str,
        role: str | None = DEFAULT_ROLE,
    ) -> User:
        return await self._user_service.create_user(
            username=username,
            password=password,
            role=role,
        )

    async def authenticate_user(self, username: str, password: str) -> User:
        user = await self._user_service.get_user_by_username(username)
        if user is None:
            raise UserNotFoundError()
        if not verify_password(password, user.hashed_password):
            logger.info("Rejected login with invalid password", extra={"user_id": user.id})
            raise InvalidCredentialError()
        return user

    def issue_token(self, user: User) -> str:
        claims = TokenClaims(sub=user.id, username=user.username, role=user.role)
        return self._token_service.issue(claims)

    async def login(self, username: str, password: str) -> str:
        """Verify the credentials and return a freshly signed token."""
        user = await self.authenticate_user(username, password)
        token = self.issue_token(user)
        logger.info("User logged in", extra={"user_id": user.id})
        return token


__all__ = ["AuthService"]
