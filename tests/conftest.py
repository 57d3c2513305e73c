from __future__ import annotations

from collections.abc import AsyncIterator, Awaitable, Callable
from dataclasses import dataclass
from itertools import count

import pytest_asyncio
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncEngine, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

from tracker import models  # noqa: F401
from tracker.core.config import get_settings
from tracker.deps import get_db_session
from tracker.main import create_app


@dataclass(slots=True)
class AuthenticatedUser:
    username: str
    password: str
    role: str
    token: str

    @property
    def headers(self) -> dict[str, str]:
        return {"Authorization": self.token}


@pytest_asyncio.fixture
async def engine() -> AsyncIterator[AsyncEngine]:
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as connection:
        await connection.run_sync(SQLModel.metadata.create_all)
    try:
        yield engine
    finally:
        await engine.dispose()


@pytest_asyncio.fixture
async def session(engine: AsyncEngine) -> AsyncIterator[AsyncSession]:
    session_factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with session_factory() as session:
        try:
            yield session
        finally:
            if session.in_transaction():
                await session.rollback()


@pytest_asyncio.fixture
async def app(session: AsyncSession) -> AsyncIterator[FastAPI]:
    get_settings.cache_clear()
    application = create_app()

    async def _override_db_session() -> AsyncIterator[AsyncSession]:
        yield session

    application.dependency_overrides[get_db_session] = _override_db_session
    try:
        yield application
    finally:
        application.dependency_overrides.clear()


@pytest_asyncio.fixture
async def client(app: FastAPI) -> AsyncIterator[AsyncClient]:
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as http_client:
        yield http_client


@pytest_asyncio.fixture
async def authenticated_user(
    client: AsyncClient,
) -> AsyncIterator[Callable[..., Awaitable[AuthenticatedUser]]]:
    counter = count()

    async def _factory(
        *,
        username: str | None = None,
        password: str = "StrongPass123!",
        role: str = "user",
    ) -> AuthenticatedUser:
        actual_username = username or f"user-{next(counter)}"
        response = await client.post(
            "/register",
            json={"username": actual_username, "password": password, "role": role},
        )
        assert response.status_code == 200, response.text
        response = await client.post(
            "/login",
            json={"username": actual_username, "password": password},
        )
        assert response.status_code == 200, response.text
        return AuthenticatedUser(
            username=actual_username,
            password=password,
            role=role,
            token=response.json()["token"],
        )

    yield _factory
