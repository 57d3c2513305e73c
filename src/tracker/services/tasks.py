"""Service layer encapsulating task-related operations."""

from __future__ import annotations

import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel.ext.asyncio.session import AsyncSession

from ..errors import StorageError
from ..models import Task
from ..repositories import ProjectRepository, TaskRepository

logger = logging.getLogger(__name__)

_UNSET = object()


class TaskService:
    """Business operations for ``Task`` entities, scoped to their creator."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session
        self._repository = TaskRepository(session)
        self._project_repository = ProjectRepository(session)

    async def create_task(
        self,
        *,
        owner_id: str,
        project_id: str,
        name: str,
        status: str | None = None,
    ) -> Task:
        """Create a task referencing ``project_id``.

        The project does not have to exist. A project that exists but belongs
        to another user raises ``PermissionError``.
        """
        project = await self._project_repository.find(project_id)
        if project is not None and project.owner_id != owner_id:
            raise PermissionError(f"Project {project_id} is not owned by {owner_id}")

        task = Task(owner_id=owner_id, project_id=project_id, name=name, status=status)
        try:
            await self._repository.save(task)
            await self._session.commit()
        except SQLAlchemyError as exc:
            await self._session.rollback()
            logger.error("Failed to create task", exc_info=exc)
            raise StorageError("Error creating task.") from exc
        await self._repository.reload(task)
        logger.info(
            "Task created",
            extra={"task_id": task.id, "project_id": project_id, "dangling": project is None},
        )
        return task

    async def list_tasks_for_project(self, project_id: str, owner_id: str) -> list[Task]:
        return await self._repository.list_for_project(project_id, owner_id)

    async def update_task_for_owner(
        self,
        task_id: str,
        owner_id: str,
        *,
        name: str | None = None,
        status: str | None | object = _UNSET,
    ) -> Task:
        """Overwrite the supplied fields of a task the caller owns."""
        task = await self._repository.get_owned(task_id, owner_id)
        if name is not None:
            task.name = name
        if status is not _UNSET:
            task.status = status  # type: ignore[assignment]
        self._session.add(task)
        await self._session.commit()
        await self._repository.reload(task)
        logger.info("Task updated", extra={"task_id": task_id})
        return task

    async def delete_task_for_owner(self, task_id: str, owner_id: str) -> None:
        task = await self._repository.get_owned(task_id, owner_id)
        await self._repository.remove(task)
        await self._session.commit()
        logger.info("Task deleted", extra={"task_id": task_id})


__all__ = ["TaskService"]
