"""Pydantic schemas for public interfaces."""

from __future__ import annotations

from .auth import LoginRequest, LoginResponse, RegisterRequest, TokenClaims
from .project import ProjectCreate, ProjectRead, ProjectUpdate
from .task import TaskCreate, TaskRead, TaskUpdate

__all__ = [
    "LoginRequest",
    "LoginResponse",
    "ProjectCreate",
    "ProjectRead",
    "ProjectUpdate",
    "RegisterRequest",
    "TaskCreate",
    "TaskRead",
    "TaskUpdate",
    "TokenClaims",
]
