"""Queries over the ``tasks`` table."""

from __future__ import annotations

from ..models import Task
from .base import OwnedRepository


class TaskRepository(OwnedRepository[Task]):
    model = Task

    async def list_for_project(self, project_id: str, owner_id: str) -> list[Task]:
        """The owner's tasks that reference ``project_id``; other users' tasks never match."""
        return await self.list_for_owner(owner_id, Task.project_id == project_id)


__all__ = ["TaskRepository"]
