"""Task domain models built with SQLModel."""

from __future__ import annotations

import sqlalchemy as sa
from sqlmodel import Field, SQLModel

from .common import TimestampMixin, new_identifier


class TaskBase(SQLModel, table=False):
    """Shared attributes for task models."""

    name: str = Field(
        max_length=255,
        sa_column=sa.Column(sa.String(length=255), nullable=False),
    )
    # Free-form, caller supplied; no vocabulary is enforced.
    status: str | None = Field(
        default=None,
        sa_column=sa.Column(sa.Text(), nullable=True),
    )
    # Client-supplied reference, intentionally not a foreign key.
    project_id: str = Field(
        max_length=64,
        sa_column=sa.Column(sa.String(length=64), nullable=False),
    )
    owner_id: str = Field(
        sa_column=sa.Column(
            sa.String(length=32),
            sa.ForeignKey("users.id"),
            nullable=False,
        ),
    )


class Task(TaskBase, TimestampMixin, table=True):
    """Persistent task model."""

    __tablename__ = "tasks"
    __table_args__ = (sa.Index("ix_tasks_project_owner", "project_id", "owner_id"),)

    id: str = Field(
        default_factory=new_identifier,
        sa_column=sa.Column(sa.String(length=32), primary_key=True),
    )


__all__ = ["Task", "TaskBase"]
