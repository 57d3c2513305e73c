from __future__ import annotations

from collections.abc import Awaitable, Callable
from datetime import datetime, timedelta, timezone

import pytest
from httpx import AsyncClient

from tracker.core.config import get_settings
from tracker.core.security import encode_token
from tracker.deps import extract_token
from tracker.schemas import TokenClaims
from tracker.services import TokenService

PROTECTED_ENDPOINTS = [
    ("POST", "/projects", {"name": "P", "description": "d"}),
    ("GET", "/projects", None),
    ("PUT", "/projects/abc", {"name": "P"}),
    ("DELETE", "/projects/abc", None),
    ("POST", "/tasks", {"name": "T", "status": "todo", "projectId": "p1"}),
    ("GET", "/tasks?projectId=p1", None),
    ("PUT", "/tasks/abc", {"name": "T"}),
    ("DELETE", "/tasks/abc", None),
]


@pytest.mark.asyncio
@pytest.mark.parametrize(("method", "path", "body"), PROTECTED_ENDPOINTS)
async def test_missing_credentials_are_unauthenticated(
    client: AsyncClient,
    method: str,
    path: str,
    body: dict | None,
) -> None:
    response = await client.request(method, path, json=body)

    assert response.status_code == 401
    assert response.content == b""


@pytest.mark.asyncio
@pytest.mark.parametrize(("method", "path", "body"), PROTECTED_ENDPOINTS)
async def test_garbage_token_is_forbidden(
    client: AsyncClient,
    method: str,
    path: str,
    body: dict | None,
) -> None:
    response = await client.request(
        method,
        path,
        json=body,
        headers={"Authorization": "definitely-not-a-token"},
    )

    assert response.status_code == 403
    assert response.content == b""


@pytest.mark.asyncio
async def test_token_signed_with_another_secret_is_forbidden(client: AsyncClient) -> None:
    forged = encode_token(
        {"sub": "someone", "username": "mallory", "role": "admin"},
        secret="not-the-server-secret",
        algorithm=get_settings().jwt_algorithm,
    )

    response = await client.get("/projects", headers={"Authorization": forged})

    assert response.status_code == 403
    assert response.content == b""


@pytest.mark.asyncio
async def test_tampered_token_is_forbidden(
    client: AsyncClient,
    authenticated_user: Callable[..., Awaitable],
) -> None:
    user = await authenticated_user()
    header, payload, signature = user.token.split(".")
    tampered_signature = ("A" if signature[0] != "A" else "B") + signature[1:]

    response = await client.get(
        "/projects",
        headers={"Authorization": ".".join([header, payload, tampered_signature])},
    )

    assert response.status_code == 403


@pytest.mark.asyncio
async def test_token_without_identity_claims_is_forbidden(client: AsyncClient) -> None:
    settings = get_settings()
    token = encode_token(
        {"role": "user"},
        secret=settings.jwt_secret_key,
        algorithm=settings.jwt_algorithm,
    )

    response = await client.get("/projects", headers={"Authorization": token})

    assert response.status_code == 403


@pytest.mark.asyncio
async def test_expired_token_is_forbidden(client: AsyncClient) -> None:
    settings = get_settings()
    token = encode_token(
        {
            "sub": "someone",
            "username": "late",
            "role": "user",
            "exp": datetime.now(timezone.utc) - timedelta(minutes=1),
        },
        secret=settings.jwt_secret_key,
        algorithm=settings.jwt_algorithm,
    )

    response = await client.get("/projects", headers={"Authorization": token})

    assert response.status_code == 403


@pytest.mark.asyncio
async def test_raw_and_bearer_forms_are_accepted(
    client: AsyncClient,
    authenticated_user: Callable[..., Awaitable],
) -> None:
    user = await authenticated_user()

    raw = await client.get("/projects", headers={"Authorization": user.token})
    bearer = await client.get("/projects", headers={"Authorization": f"Bearer {user.token}"})

    assert raw.status_code == 200
    assert bearer.status_code == 200


@pytest.mark.asyncio
async def test_token_issued_by_service_passes_gate(client: AsyncClient) -> None:
    token = TokenService.from_settings(get_settings()).issue(
        TokenClaims(sub="external-id", username="svc", role=None)
    )

    response = await client.get("/projects", headers={"Authorization": token})

    assert response.status_code == 200
    assert response.json() == []


@pytest.mark.parametrize(
    ("header", "expected"),
    [
        (None, None),
        ("", None),
        ("   ", None),
        ("Bearer ", None),
        ("abc.def.ghi", "abc.def.ghi"),
        ("Bearer abc.def.ghi", "abc.def.ghi"),
        ("bearer  abc.def.ghi ", "abc.def.ghi"),
    ],
)
def test_extract_token(header: str | None, expected: str | None) -> None:
    assert extract_token(header) == expected
