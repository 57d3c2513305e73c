"""Routes handling task CRUD operations."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Query, status
from fastapi.responses import PlainTextResponse

from ...deps import ClaimsDependency, DatabaseSessionDependency
from ...errors import ForbiddenError, NotFoundError
from ...schemas import TaskCreate, TaskRead, TaskUpdate
from ...services import TaskService

router = APIRouter(prefix="/tasks", tags=["tasks"])

_FORBIDDEN_MESSAGE = "You are not permitted to modify this task."
_NOT_FOUND_MESSAGE = "Task not found."

ProjectIdQuery = Annotated[
    str,
    Query(
        alias="projectId",
        min_length=1,
        description="Project reference whose tasks should be returned.",
    ),
]


@router.post(
    "",
    response_class=PlainTextResponse,
    status_code=status.HTTP_200_OK,
    summary="Create a task under a project reference",
)
async def create_task(
    payload: TaskCreate,
    session: DatabaseSessionDependency,
    claims: ClaimsDependency,
) -> str:
    service = TaskService(session)
    try:
        await service.create_task(
            owner_id=claims.sub,
            project_id=payload.project_id,
            name=payload.name,
            status=payload.status,
        )
    except PermissionError as exc:
        raise ForbiddenError("You are not permitted to add tasks to this project.") from exc
    return "Task created successfully!"


@router.get(
    "",
    response_model=list[TaskRead],
    summary="List the caller's tasks for a project",
)
async def list_tasks(
    project_id: ProjectIdQuery,
    session: DatabaseSessionDependency,
    claims: ClaimsDependency,
) -> list[TaskRead]:
    service = TaskService(session)
    tasks = await service.list_tasks_for_project(project_id, claims.sub)
    return [TaskRead.model_validate(task) for task in tasks]


@router.put(
    "/{task_id}",
    response_class=PlainTextResponse,
    summary="Update a task's name and status",
)
async def update_task(
    task_id: str,
    payload: TaskUpdate,
    session: DatabaseSessionDependency,
    claims: ClaimsDependency,
) -> str:
    service = TaskService(session)
    try:
        await service.update_task_for_owner(
            task_id,
            claims.sub,
            **payload.model_dump(exclude_unset=True),
        )
    except PermissionError as exc:
        raise ForbiddenError(_FORBIDDEN_MESSAGE) from exc
    except ValueError as exc:
        raise NotFoundError(_NOT_FOUND_MESSAGE) from exc
    return "Task updated successfully!"


@router.delete(
    "/{task_id}",
    response_class=PlainTextResponse,
    summary="Delete a task",
)
async def delete_task(
    task_id: str,
    session: DatabaseSessionDependency,
    claims: ClaimsDependency,
) -> str:
    service = TaskService(session)
    try:
        await service.delete_task_for_owner(task_id, claims.sub)
    except PermissionError as exc:
        raise ForbiddenError(_FORBIDDEN_MESSAGE) from exc
    except ValueError as exc:
        raise NotFoundError(_NOT_FOUND_MESSAGE) from exc
    return "Task deleted successfully!"
