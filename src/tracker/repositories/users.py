"""Queries over the ``users`` table."""

from __future__ import annotations

from ..models import User
from .base import Repository


class UserRepository(Repository[User]):
    model = User

    async def get_by_username(self, username: str) -> User | None:
        """Return the earliest registered user with ``username``, if any."""
        matches = await self.select_where(User.username == username, limit=1)
        return matches[0] if matches else None


__all__ = ["UserRepository"]
