"""Domain models exposed by the tracker."""

from __future__ import annotations

from .common import TimestampMixin
from .project import Project, ProjectBase
from .task import Task, TaskBase
from .user import DEFAULT_ROLE, User, UserBase

__all__ = [
    "DEFAULT_ROLE",
    "Project",
    "ProjectBase",
    "Task",
    "TaskBase",
    "TimestampMixin",
    "User",
    "UserBase",
]
