"""Domain service layer package."""

from __future__ import annotations

from .auth import AuthService
from .projects import ProjectService
from .tasks import TaskService
from .tokens import InvalidTokenError, TokenService
from .users import UserService

__all__ = [
    "AuthService",
    "InvalidTokenError",
    "ProjectService",
    "TaskService",
    "TokenService",
    "UserService",
]
