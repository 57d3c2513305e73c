"""Security helpers for password hashing and JWT encoding."""

from __future__ import annotations

from typing import Any

from jose import JWTError, jwt
from passlib.context import CryptContext

BCRYPT_ROUNDS = 10

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=BCRYPT_ROUNDS)


def get_password_hash(password: str) -> str:
    """Return a salted bcrypt hash of ``password``."""

    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a plain password against its hashed counterpart."""

    return pwd_context.verify(plain_password, hashed_password)


def encode_token(payload: dict[str, Any], *, secret: str, algorithm: str) -> str:
    """Sign ``payload`` and return the compact JWT string."""

    return jwt.encode(payload, secret, algorithm=algorithm)


def decode_token(*, token: str, secret: str, algorithm: str) -> dict[str, Any]:
    """Decode a JWT token and return its payload."""

    return jwt.decode(token, secret, algorithms=[algorithm])


__all__ = [
    "BCRYPT_ROUNDS",
    "JWTError",
    "decode_token",
    "encode_token",
    "get_password_hash",
    "verify_password",
]
