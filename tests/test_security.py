from __future__ import annotations

import pytest
from jose import jwt
from pydantic import ValidationError

from tracker.core.config import Settings
from tracker.core.security import get_password_hash, verify_password
from tracker.schemas import TokenClaims
from tracker.services import InvalidTokenError, TokenService


def test_password_hash_is_salted() -> None:
    first = get_password_hash("same-password")
    second = get_password_hash("same-password")

    assert first != second
    assert verify_password("same-password", first)
    assert verify_password("same-password", second)
    assert not verify_password("other-password", first)


def test_issue_and_verify_round_trip() -> None:
    service = TokenService("unit-secret")
    token = service.issue(TokenClaims(sub="u1", username="alice", role="user"))

    claims = service.verify(token)

    assert claims == TokenClaims(sub="u1", username="alice", role="user")
    payload = jwt.get_unverified_claims(token)
    assert "exp" not in payload
    assert "iat" in payload


def test_expiry_is_added_when_configured() -> None:
    service = TokenService("unit-secret", expire_minutes=5)
    token = service.issue(TokenClaims(sub="u1", username="alice", role="user"))

    payload = jwt.get_unverified_claims(token)

    assert payload["exp"] - payload["iat"] == 300


def test_verify_rejects_other_secret() -> None:
    token = TokenService("secret-a").issue(TokenClaims(sub="u1", username="alice"))

    with pytest.raises(InvalidTokenError):
        TokenService("secret-b").verify(token)


@pytest.mark.parametrize("token", ["", "garbage", "a.b.c"])
def test_verify_rejects_malformed_tokens(token: str) -> None:
    with pytest.raises(InvalidTokenError):
        TokenService("unit-secret").verify(token)


def test_token_service_requires_secret() -> None:
    with pytest.raises(ValueError):
        TokenService("")


def test_from_settings_uses_configured_secret() -> None:
    settings = Settings(jwt_secret_key="configured", access_token_expire_minutes=10)
    token = TokenService.from_settings(settings).issue(TokenClaims(sub="u1", username="alice"))

    decoded = jwt.decode(token, "configured", algorithms=[settings.jwt_algorithm])

    assert decoded["username"] == "alice"


def test_settings_reject_default_secret_in_production() -> None:
    with pytest.raises(ValidationError):
        Settings(environment="production")

    settings = Settings(environment="production", jwt_secret_key="real-secret")
    assert settings.environment == "production"


def test_settings_reject_empty_secret(monkeypatch: pytest.MonkeyPatch) -> None:
    with pytest.raises(ValidationError):
        Settings(jwt_secret_key="")

    monkeypatch.setenv("JWT_SECRET_KEY", "")
    with pytest.raises(ValidationError):
        Settings()


def test_settings_parse_comma_separated_origins() -> None:
    settings = Settings(cors_allow_origins="https://a.example, https://b.example,")

    assert settings.cors_allow_origins == ["https://a.example", "https://b.example"]


def test_settings_defaults() -> None:
    settings = Settings()

    assert settings.access_token_expire_minutes is None
    assert settings.request_timeout_seconds == 30.0
    assert settings.log_level == "INFO"
