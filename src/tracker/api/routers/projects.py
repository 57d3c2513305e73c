"""Routes handling project CRUD operations."""

from __future__ import annotations

from fastapi import APIRouter, status
from fastapi.responses import PlainTextResponse

from ...deps import ClaimsDependency, DatabaseSessionDependency
from ...errors import ForbiddenError, NotFoundError
from ...schemas import ProjectCreate, ProjectRead, ProjectUpdate
from ...services import ProjectService

router = APIRouter(prefix="/projects", tags=["projects"])

_FORBIDDEN_MESSAGE = "You are not permitted to modify this project."
_NOT_FOUND_MESSAGE = "Project not found."


@router.post(
    "",
    response_class=PlainTextResponse,
    status_code=status.HTTP_200_OK,
    summary="Create a project owned by the caller",
)
async def create_project(
    payload: ProjectCreate,
    session: DatabaseSessionDependency,
    claims: ClaimsDependency,
) -> str:
    service = ProjectService(session)
    await service.create_project(
        owner_id=claims.sub,
        name=payload.name,
        description=payload.description,
    )
    return "Project created successfully!"


@router.get(
    "",
    response_model=list[ProjectRead],
    summary="List the caller's projects",
)
async def list_projects(
    session: DatabaseSessionDependency,
    claims: ClaimsDependency,
) -> list[ProjectRead]:
    service = ProjectService(session)
    projects = await service.list_projects_for_owner(claims.sub)
    return [ProjectRead.model_validate(project) for project in projects]


@router.put(
    "/{project_id}",
    response_class=PlainTextResponse,
    summary="Update a project's name and description",
)
async def update_project(
    project_id: str,
    payload: ProjectUpdate,
    session: DatabaseSessionDependency,
    claims: ClaimsDependency,
) -> str:
    service = ProjectService(session)
    try:
        await service.update_project_for_owner(
            project_id,
            claims.sub,
            **payload.model_dump(exclude_unset=True),
        )
    except PermissionError as exc:
        raise ForbiddenError(_FORBIDDEN_MESSAGE) from exc
    except ValueError as exc:
        raise NotFoundError(_NOT_FOUND_MESSAGE) from exc
    return "Project updated successfully!"


@router.delete(
    "/{project_id}",
    response_class=PlainTextResponse,
    summary="Delete a project",
)
async def delete_project(
    project_id: str,
    session: DatabaseSessionDependency,
    claims: ClaimsDependency,
) -> str:
    service = ProjectService(session)
    try:
        await service.delete_project_for_owner(project_id, claims.sub)
    except PermissionError as exc:
        raise ForbiddenError(_FORBIDDEN_MESSAGE) from exc
    except ValueError as exc:
        raise NotFoundError(_NOT_FOUND_MESSAGE) from exc
    return "Project deleted successfully!"
