"""Project domain models built with SQLModel."""

from __future__ import annotations

import sqlalchemy as sa
from sqlmodel import Field, SQLModel

from .common import TimestampMixin, new_identifier


class ProjectBase(SQLModel, table=False):
    """Shared attributes for project models."""

    name: str = Field(
        max_length=255,
        sa_column=sa.Column(sa.String(length=255), nullable=False),
    )
    description: str | None = Field(
        default=None,
        sa_column=sa.Column(sa.Text(), nullable=True),
    )
    owner_id: str = Field(
        sa_column=sa.Column(
            sa.String(length=32),
            sa.ForeignKey("users.id"),
            nullable=False,
        ),
    )


class Project(ProjectBase, TimestampMixin, table=True):
    """Persistent project model. Deleting a project leaves its tasks in place."""

    __tablename__ = "projects"
    __table_args__ = (sa.Index("ix_projects_owner_id", "owner_id"),)

    id: str = Field(
        default_factory=new_identifier,
        sa_column=sa.Column(sa.String(length=32), primary_key=True),
    )


__all__ = ["Project", "ProjectBase"]
