"""Routes handling registration and login."""

from __future__ import annotations

from fastapi import APIRouter, status
from fastapi.responses import PlainTextResponse

from ...deps import DatabaseSessionDependency, TokenServiceDependency
from ...schemas import LoginRequest, LoginResponse, RegisterRequest
from ...services import AuthService, UserService

router = APIRouter(tags=["auth"])


@router.post(
    "/register",
    response_class=PlainTextResponse,
    status_code=status.HTTP_200_OK,
    summary="Register a new user account",
)
async def register(
    payload: RegisterRequest,
    session: DatabaseSessionDependency,
) -> str:
    await UserService(session).create_user(
        username=payload.username,
        password=payload.password,
        role=payload.role,
    )
    return "User registered successfully!"


@router.post(
    "/login",
    response_model=LoginResponse,
    status_code=status.HTTP_200_OK,
    summary="Exchange username and password for a signed token",
)
async def login(
    payload: LoginRequest,
    session: DatabaseSessionDependency,
    token_service: TokenServiceDependency,
) -> LoginResponse:
    service = AuthService(session, token_service)
    token = await service.login(payload.username, payload.password)
    return LoginResponse(token=token)
