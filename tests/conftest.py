"""
Test fixtures using async SQLite for fast, isolated tests.
No PostgreSQL or Mapbox account required.
"""
import json
from typing import Any, Callable

import httpx
import pytest
import pytest_asyncio
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from app.db.base import Base
from app.auth.models import User
from app.addresses.models import Address  # noqa: F401
from app.core.security import hash_password
from app.maps.client import MapboxClient


def _enable_foreign_keys(engine: AsyncEngine) -> None:
    # SQLite ignores ON DELETE CASCADE unless asked.
    @event.listens_for(engine.sync_engine, "connect")
    def _on_connect(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


async def make_engine(url: str = "sqlite+aiosqlite:///:memory:") -> AsyncEngine:
    engine = create_async_engine(url, echo=False)
    _enable_foreign_keys(engine)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    return engine


@pytest_asyncio.fixture
async def db():
    """Create a fresh in-memory SQLite database for each test."""
    engine = await make_engine()
    session_factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    async with session_factory() as session:
        yield session

    await engine.dispose()


@pytest_asyncio.fixture
async def file_engine(tmp_path):
    """File-backed SQLite so several sessions get their own connections."""
    engine = await make_engine(f"sqlite+aiosqlite:///{tmp_path / 'race.db'}")
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def make_user(db: AsyncSession) -> Callable[..., Any]:
    """Factory for persisted users. Uses a cheap bcrypt cost."""

    async def _make(email: str = "driver@example.com", password: str = "password") -> User:
        user = User(email=email, hashed_password=hash_password(password, rounds=4))
        db.add(user)
        await db.commit()
        await db.refresh(user)
        return user

    return _make


def _mapbox_stub(
    routes: dict[str, Any] | None = None,
    geocode: dict[str, Any] | None = None,
    status_code: int = 200,
) -> tuple[MapboxClient, list[httpx.Request]]:
    """A MapboxClient backed by canned responses. Returns (client, seen_requests)."""
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        if status_code != 200:
            return httpx.Response(status_code, json={"message": "upstream said no"})
        if request.url.path.startswith("/directions/"):
            return httpx.Response(200, content=json.dumps(routes or {"routes": []}))
        return httpx.Response(200, content=json.dumps(geocode or {"features": []}))

    client = MapboxClient(
        access_token="test-token",
        base_url="https://api.mapbox.test",
        transport=httpx.MockTransport(handler),
    )
    return client, seen


@pytest.fixture
def mapbox_stub() -> Callable[..., tuple[MapboxClient, list[httpx.Request]]]:
    return _mapbox_stub


@pytest.fixture
def seattle_route() -> dict[str, Any]:
    return {
        "routes": [
            {
                "distance": 13250.4,
                "duration": 1134.2,
                "geometry": {
                    "type": "LineString",
                    "coordinates": [[-122.3, 47.6], [-122.25, 47.65], [-122.2, 47.7]],
                },
            },
            {
                "distance": 15000.0,
                "duration": 1500.0,
                "geometry": {
                    "type": "LineString",
                    "coordinates": [[-122.3, 47.6], [-122.2, 47.7]],
                },
            },
        ]
    }


@pytest.fixture
def main_st_features() -> dict[str, Any]:
    return {
        "features": [
            {
                "id": f"address.{i}",
                "place_name": f"{100 + i} Main St, Springfield",
                "center": [-122.33 + i * 0.01, 47.61 + i * 0.01],
            }
            for i in range(7)
        ]
    }
