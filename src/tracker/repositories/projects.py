"""Queries over the ``projects`` table."""

from __future__ import annotations

from ..models import Project
from .base import OwnedRepository


class ProjectRepository(OwnedRepository[Project]):
    model = Project


__all__ = ["ProjectRepository"]
