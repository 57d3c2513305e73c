"""Service layer encapsulating project-related operations."""

from __future__ import annotations

import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel.ext.asyncio.session import AsyncSession

from ..errors import StorageError
from ..models import Project
from ..repositories import ProjectRepository

logger = logging.getLogger(__name__)

_UNSET = object()


class ProjectService:
    """Owner-scoped business operations for ``Project`` entities."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session
        self._repository = ProjectRepository(session)

    async def create_project(
        self,
        *,
        owner_id: str,
        name: str,
        description: str | None = None,
    ) -> Project:
        """Create a project owned by ``owner_id``."""
        project = Project(owner_id=owner_id, name=name, description=description)
        try:
            await self._repository.save(project)
            await self._session.commit()
        except SQLAlchemyError as exc:
            await self._session.rollback()
            logger.error("Failed to create project", exc_info=exc)
            raise StorageError("Error creating project.") from exc
        await self._repository.reload(project)
        logger.info("Project created", extra={"project_id": project.id, "owner_id": owner_id})
        return project

    async def list_projects_for_owner(self, owner_id: str) -> list[Project]:
        return await self._repository.list_for_owner(owner_id)

    async def update_project_for_owner(
        self,
        project_id: str,
        owner_id: str,
        *,
        name: str | None = None,
        description: str | None | object = _UNSET,
    ) -> Project:
        """Overwrite the supplied fields of a project the caller owns.

        Raises ``ValueError`` when the project is missing and ``PermissionError``
        when it belongs to someone else.
        """
        project = await self._repository.get_owned(project_id, owner_id)
        if name is not None:
            project.name = name
        if description is not _UNSET:
            project.description = description  # type: ignore[assignment]
        self._session.add(project)
        await self._session.commit()
        await self._repository.reload(project)
        logger.info("Project updated", extra={"project_id": project_id})
        return project

    async def delete_project_for_owner(self, project_id: str, owner_id: str) -> None:
        """Delete a project the caller owns. Tasks referencing it are kept."""
        project = await self._repository.get_owned(project_id, owner_id)
        await self._repository.remove(project)
        await self._session.commit()
        logger.info("Project deleted", extra={"project_id": project_id})


__all__ = ["ProjectService"]
