"""User domain models built with SQLModel."""

from __future__ import annotations

import sqlalchemy as sa
from sqlmodel import Field, SQLModel

from .common import TimestampMixin, new_identifier

DEFAULT_ROLE = "user"


class UserBase(SQLModel, table=False):
    """Shared attributes for user models."""

    username: str = Field(
        max_length=150,
        sa_column=sa.Column(sa.String(length=150), nullable=False, unique=True),
    )
    role: str | None = Field(
        default=DEFAULT_ROLE,
        max_length=64,
        sa_column=sa.Column(sa.String(length=64), nullable=True),
    )


class User(UserBase, TimestampMixin, table=True):
    """Persistent user model."""

    __tablename__ = "users"

    id: str = Field(
        default_factory=new_identifier,
        sa_column=sa.Column(sa.String(length=32), primary_key=True),
    )
    hashed_password: str = Field(
        max_length=255,
        sa_column=sa.Column(sa.String(length=255), nullable=False),
    )


__all__ = ["DEFAULT_ROLE", "User", "UserBase"]
