"""Service layer orchestrating credential storage."""

from __future__ import annotations

import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel.ext.asyncio.session import AsyncSession

from ..core.security import get_password_hash
from ..errors import StorageError
from ..models import DEFAULT_ROLE, User
from ..repositories import UserRepository

logger = logging.getLogger(__name__)


class UserService:
    """Persist and look up user credentials."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session
        self._repository = UserRepository(session)

    async def create_user(
        self,
        *,
        username: str,
        password: str,
        role: str | None = DEFAULT_ROLE,
    ) -> User:
        """Hash ``password`` and insert a new user record.

        No duplicate check is made up front; a uniqueness violation raised by
        the database surfaces as ``StorageError`` like any other write failure.
        """
        user = User(
            username=username,
            role=role,
            hashed_password=get_password_hash(password),
        )
        try:
            await self._repository.save(user)
            await self._session.commit()
        except SQLAlchemyError as exc:
            await self._session.rollback()
            logger.error("Failed to register user", exc_info=exc)
            raise StorageError("Error registering new user.") from exc
        await self._repository.reload(user)
        logger.info("Registered user", extra={"user_id": user.id})
        return user

    async def get_user_by_username(self, username: str) -> User | None:
        """Fetch a user by username."""
        return await self._repository.get_by_username(username)


__all__ = ["UserService"]
