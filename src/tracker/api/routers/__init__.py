"""Router registrations for the tracker API."""

from __future__ import annotations

from fastapi import APIRouter

from .auth import router as auth_router
from .projects import router as projects_router
from .tasks import router as tasks_router

api_router = APIRouter()
api_router.include_router(auth_router)
api_router.include_router(projects_router)
api_router.include_router(tasks_router)

__all__ = ["api_router"]
