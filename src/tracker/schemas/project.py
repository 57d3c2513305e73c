"""Project-related Pydantic schemas."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

PROJECT_READ_EXAMPLE = {
    "id": "4f1c2a8e9b7d4c3e8a1f0b2c3d4e5f60",
    "name": "Website relaunch",
    "description": "Everything needed for the Q3 launch.",
    "owner_id": "0a1b2c3d4e5f60718293a4b5c6d7e8f9",
    "created_at": "2024-01-01T12:00:00Z",
    "updated_at": "2024-01-02T08:30:00Z",
}


class ProjectCreate(BaseModel):
    """Payload for creating a new project."""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {"name": "Website relaunch", "description": "Everything needed for the Q3 launch."}
        }
    )

    name: str = Field(min_length=1, max_length=255)
    description: str | None = None


class ProjectUpdate(BaseModel):
    """Payload for overwriting a project's name and description.

    Only fields present in the request body are applied.
    """

    name: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = None


class ProjectRead(BaseModel):
    """Public representation of a project."""

    model_config = ConfigDict(
        from_attributes=True,
        json_schema_extra={"example": PROJECT_READ_EXAMPLE},
    )

    id: str
    name: str
    description: str | None = None
    owner_id: str
    created_at: datetime
    updated_at: datetime


__all__ = ["ProjectCreate", "ProjectRead", "ProjectUpdate"]
