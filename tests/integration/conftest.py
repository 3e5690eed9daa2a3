"""Integration-test fixtures.

Each test gets a fresh SQLite database (see tests/conftest.py). There is no
API path that creates an admin, so the admin account is seeded through the
store and then logs in over HTTP like any other user.
"""

import uuid

import pytest
from fastapi import FastAPI
from httpx import AsyncClient

from src.erp_common.datetime_utils import utc_now
from src.erp_gateway.auth.password import hash_password
from src.erp_gateway.user.models import User

ADMIN_EMAIL = "admin@example.com"
ADMIN_PASSWORD = "AdminPass1"


@pytest.fixture
async def admin_token(app: FastAPI, client: AsyncClient) -> str:
    """Bearer token of a seeded admin account."""
    await app.state.user_store.insert(
        User(
            id=str(uuid.uuid4()),
            username="admin",
            email=ADMIN_EMAIL,
            password_hash=await hash_password(ADMIN_PASSWORD),
            is_admin=True,
            created_at=utc_now(),
        )
    )
    resp = await client.post(
        "/auth/login", json={"email": ADMIN_EMAIL, "password": ADMIN_PASSWORD}
    )
    assert resp.status_code == 200
    token: str = resp.json()["token"]
    return token
