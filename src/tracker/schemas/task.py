"""Task-related Pydantic schemas."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

TASK_READ_EXAMPLE = {
    "id": "9e8d7c6b5a4f3e2d1c0b9a8f7e6d5c4b",
    "name": "Draft landing page copy",
    "status": "in progress",
    "projectId": "4f1c2a8e9b7d4c3e8a1f0b2c3d4e5f60",
    "owner_id": "0a1b2c3d4e5f60718293a4b5c6d7e8f9",
    "created_at": "2024-01-01T12:00:00Z",
    "updated_at": "2024-01-02T08:30:00Z",
}


class TaskCreate(BaseModel):
    """Payload for creating a new task under a project reference."""

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "name": "Draft landing page copy",
                "status": "todo",
                "projectId": "4f1c2a8e9b7d4c3e8a1f0b2c3d4e5f60",
            }
        },
    )

    name: str = Field(min_length=1, max_length=255)
    status: str | None = None
    project_id: str = Field(alias="projectId", min_length=1, max_length=64)


class TaskUpdate(BaseModel):
    """Payload for overwriting a task's name and status."""

    name: str | None = Field(default=None, min_length=1, max_length=255)
    status: str | None = None


class TaskRead(BaseModel):
    """Public representation of a task."""

    model_config = ConfigDict(
        from_attributes=True,
        json_schema_extra={"example": TASK_READ_EXAMPLE},
    )

    id: str
    name: str
    status: str | None = None
    # Same wire name as the create payload and the list query parameter.
    project_id: str = Field(serialization_alias="projectId")
    owner_id: str
    created_at: datetime
    updated_at: datetime


__all__ = ["TaskCreate", "TaskRead", "TaskUpdate"]
