"""Unit tests for JWT handler."""

from datetime import timedelta
from unittest.mock import patch

import pytest
from jose import jwt

from config.settings import settings
from src.erp_common.errors import ExpiredTokenError, InvalidTokenError
from src.erp_gateway.auth.jwt_handler import TokenClaims, create_access_token, decode_token

CLAIMS = TokenClaims(user_id="user-123", username="alice", email="a@x.com", is_admin=False)


def test_access_token_contains_correct_claims() -> None:
    token = create_access_token(CLAIMS)
    # Decode without verification to inspect claims
    payload = jwt.get_unverified_claims(token)
    assert payload["sub"] == "user-123"
    assert payload["username"] == "alice"
    assert payload["email"] == "a@x.com"
    assert payload["is_admin"] is False
    assert "exp" in payload


def test_default_lifetime_is_24_hours() -> None:
    payload = jwt.get_unverified_claims(create_access_token(CLAIMS))
    assert payload["exp"] - payload["iat"] == 24 * 60 * 60


def test_decode_returns_claims_unchanged() -> None:
    admin = TokenClaims(user_id="u-1", username="root", email="r@x.com", is_admin=True)
    assert decode_token(create_access_token(admin)) == admin


def test_expired_token_raises_expired_error() -> None:
    with patch(
        "src.erp_gateway.auth.jwt_handler._ACCESS_EXPIRE",
        timedelta(seconds=-1),
    ):
        token = create_access_token(CLAIMS)
    with pytest.raises(ExpiredTokenError):
        decode_token(token)


def test_tampered_token_raises_invalid_error() -> None:
    """Tampered token signature must be rejected."""
    token = create_access_token(CLAIMS)
    tampered = token[:-4] + ("xxxx" if not token.endswith("xxxx") else "yyyy")
    with pytest.raises(InvalidTokenError):
        decode_token(tampered)


def test_token_signed_with_other_secret_is_invalid() -> None:
    token = jwt.encode({"sub": "user-123"}, "another-secret", algorithm="HS256")
    with pytest.raises(InvalidTokenError):
        decode_token(token)


def test_token_without_subject_is_invalid() -> None:
    token = jwt.encode({"username": "alice"}, settings.JWT_SECRET, algorithm="HS256")
    with pytest.raises(InvalidTokenError):
        decode_token(token)


def test_garbage_raises_invalid_error() -> None:
    with pytest.raises(InvalidTokenError):
        decode_token("not.a.real.token")
