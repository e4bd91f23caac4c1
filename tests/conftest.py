"""Shared fixtures: a throwaway SQLite database and an ASGI client bound to it."""

import os

# settings se leen al importar socialnet, así que van antes
os.environ["JWT_SECRET"] = "test-secret"
os.environ["DATABASE_URL"] = "sqlite+aiosqlite://"
os.environ["ACCESS_TOKEN_EXPIRE_MIN"] = "15"

from types import SimpleNamespace
from uuid import uuid4

import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine, AsyncSession

from socialnet.main import app
from socialnet.db.base import Base
from socialnet.db.session import enable_sqlite_fk, get_session


def make_user_payload(prefix: str) -> dict[str, str]:
    suffix = uuid4().hex[:8]
    return {
        "username": f"{prefix}_{suffix}",
        "name": f"{prefix.title()} Tester",
        "email": f"{prefix}_{suffix}@example.com",
        "password": "Sup3rSecret!",
        "bio": "A ship in a harbour is safe",
    }


@pytest_asyncio.fixture
async def engine(tmp_path):
    eng = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
    enable_sqlite_fk(eng)
    async with eng.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield eng
    await eng.dispose()


@pytest_asyncio.fixture
async def session_factory(engine):
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def db_session(session_factory):
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def async_client(session_factory):
    async def _get_session():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_session] = _get_session
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def register(async_client):
    """Signs up and logs in a fresh user; returns its id, username, token and auth headers."""

    async def _register(prefix: str = "user"):
        payload = make_user_payload(prefix)
        res = await async_client.post("/api/users/signup/", json=payload)
        assert res.status_code == 201, res.text
        user = res.json()

        res = await async_client.post(
            "/api/users/login/",
            json={"username": payload["username"], "password": payload["password"]},
        )
        assert res.status_code == 200, res.text
        token = res.json()["access_token"]
        return SimpleNamespace(
            id=user["id"],
            username=user["username"],
            password=payload["password"],
            token=token,
            headers={"x-jwt-token": token},
        )

    return _register
