"""Shared test fixtures."""

import os

# Settings are read at import time; these must be set before any src import.
os.environ.setdefault("JWT_SECRET", "test-secret-do-not-use-in-prod")
os.environ.setdefault("BCRYPT_ROUNDS", "4")

from collections.abc import AsyncGenerator
from pathlib import Path

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from src.erp_common.database import build_engine, build_session_factory, create_schema
from src.erp_gateway.user.store import UserStore
from src.main import create_app


def _sqlite_url(tmp_path: Path) -> str:
    return f"sqlite+aiosqlite:///{tmp_path / 'test.db'}"


@pytest.fixture
async def store(tmp_path: Path) -> AsyncGenerator[UserStore, None]:
    """UserStore backed by a throwaway SQLite file."""
    engine = build_engine(_sqlite_url(tmp_path))
    await create_schema(engine)
    yield UserStore(build_session_factory(engine))
    await engine.dispose()


@pytest.fixture
def app(tmp_path: Path) -> FastAPI:
    return create_app(_sqlite_url(tmp_path))


@pytest.fixture
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    """Async HTTP client for testing FastAPI endpoints.

    ASGITransport does not send lifespan events, so the lifespan is entered
    here to build the engine and UserStore.
    """
    async with app.router.lifespan_context(app):
        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://test") as ac:
            yield ac
