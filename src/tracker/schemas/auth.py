"""Schemas describing authentication payloads."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from ..models import DEFAULT_ROLE


class RegisterRequest(BaseModel):
    """Incoming payload for registering a new user."""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {"username": "alice", "password": "pw1", "role": "user"},
        }
    )

    username: str = Field(min_length=1, max_length=150)
    password: str = Field(min_length=1)
    role: str | None = Field(default=DEFAULT_ROLE, max_length=64)


class LoginRequest(BaseModel):
    """Credentials exchanged for a signed token."""

    username: str
    password: str


class LoginResponse(BaseModel):
    """Signed token returned after a successful login."""

    token: str


class TokenClaims(BaseModel):
    """Validated identity claims carried by a token."""

    model_config = ConfigDict(extra="ignore")

    sub: str
    username: str
    role: str | None = None


__all__ = ["LoginRequest", "LoginResponse", "RegisterRequest", "TokenClaims"]
