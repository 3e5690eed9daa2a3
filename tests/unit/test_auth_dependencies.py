"""Unit tests for the authentication gate (mocked store)."""

from types import SimpleNamespace
from unittest.mock import AsyncMock

import pytest

from src.erp_common.datetime_utils import utc_now
from src.erp_common.errors import (
    InvalidTokenError,
    MissingTokenError,
    UnknownSubjectError,
)
from src.erp_gateway.auth.dependencies import get_current_user, parse_bearer
from src.erp_gateway.auth.jwt_handler import TokenClaims, create_access_token
from src.erp_gateway.user.models import CurrentUser, User


def _request() -> SimpleNamespace:
    return SimpleNamespace(state=SimpleNamespace())


def _stored_user() -> User:
    return User(
        id="u-1",
        username="alice-now",
        email="alice-now@x.com",
        password_hash="$2b$04$fakehash",
        is_admin=False,
        created_at=utc_now(),
    )


class TestParseBearer:
    def test_valid(self) -> None:
        assert parse_bearer("Bearer abc.def.ghi") == "abc.def.ghi"

    @pytest.mark.parametrize(
        "header",
        [None, "", "Bearer", "Bearer ", "bearer abc", "Token abc", "Bearer a b", "abc"],
    )
    def test_malformed(self, header: str | None) -> None:
        with pytest.raises(MissingTokenError):
            parse_bearer(header)


class TestGetCurrentUser:
    async def test_resolves_live_user_from_store(self) -> None:
        store = AsyncMock()
        store.find_by_id.return_value = _stored_user()
        token = create_access_token(
            TokenClaims(user_id="u-1", username="alice", email="a@x.com", is_admin=False)
        )
        request = _request()

        current = await get_current_user(request, store, f"Bearer {token}")  # type: ignore[arg-type]

        # Fields come from the store row, not from the (possibly stale) claims
        assert current == CurrentUser(
            id="u-1", username="alice-now", email="alice-now@x.com", is_admin=False
        )
        assert request.state.user == current
        store.find_by_id.assert_awaited_once_with("u-1")

    async def test_deleted_subject_is_unknown(self) -> None:
        store = AsyncMock()
        store.find_by_id.return_value = None
        token = create_access_token(
            TokenClaims(user_id="gone", username="x", email="x@x.com", is_admin=True)
        )

        with pytest.raises(UnknownSubjectError):
            await get_current_user(_request(), store, f"Bearer {token}")  # type: ignore[arg-type]

    async def test_invalid_token_never_hits_store(self) -> None:
        store = AsyncMock()
        with pytest.raises(InvalidTokenError):
            await get_current_user(_request(), store, "Bearer garbage")  # type: ignore[arg-type]
        store.find_by_id.assert_not_awaited()

    async def test_missing_header(self) -> None:
        with pytest.raises(MissingTokenError):
            await get_current_user(_request(), AsyncMock(), None)  # type: ignore[arg-type]
