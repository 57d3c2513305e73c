"""Issue and verify the signed bearer tokens presented on protected routes."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any

from pydantic import ValidationError

from ..core.config import Settings
from ..core.security import JWTError, decode_token, encode_token
from ..schemas.auth import TokenClaims


class InvalidTokenError(Exception):
    """Raised when a token has a bad signature or an unexpected structure."""


class TokenService:
    """Stateless JWT issuance bound to an explicit signing configuration.

    Tokens carry no ``exp`` claim unless ``expire_minutes`` is set, so
    verification checks signature and shape only.
    """

    def __init__(
        self,
        secret_key: str,
        *,
        algorithm: str = "HS256",
        expire_minutes: int | None = None,
    ) -> None:
        if not secret_key:
            raise ValueError("A signing secret is required.")
        self._secret_key = secret_key
        self._algorithm = algorithm
        self._expire_minutes = expire_minutes

    @classmethod
    def from_settings(cls, settings: Settings) -> "TokenService":
        return cls(
            settings.jwt_secret_key,
            algorithm=settings.jwt_algorithm,
            expire_minutes=settings.access_token_expire_minutes,
        )

    def issue(self, claims: TokenClaims) -> str:
        """Sign ``claims`` into a compact token string."""
        now = datetime.now(timezone.utc)
        payload: dict[str, Any] = {**claims.model_dump(), "iat": now}
        if self._expire_minutes is not None:
            payload["exp"] = now + timedelta(minutes=self._expire_minutes)
        return encode_token(payload, secret=self._secret_key, algorithm=self._algorithm)

    def verify(self, token: str) -> TokenClaims:
        """Return the claims carried by ``token`` or raise ``InvalidTokenError``."""
        try:
            payload = decode_token(token=token, secret=self._secret_key, algorithm=self._algorithm)
        except JWTError as exc:
            raise InvalidTokenError(str(exc)) from exc
        try:
            return TokenClaims.model_validate(payload)
        except ValidationError as exc:
            raise InvalidTokenError("Token payload is missing required claims.") from exc


__all__ = ["InvalidTokenError", "TokenService"]
