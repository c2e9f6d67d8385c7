"""
Pytest fixtures for test database, client, and store doubles.

Tables are created and dropped around every test on an isolated database
(a temporary SQLite file unless TEST_DATABASE_URL points elsewhere). Each
HTTP request gets its own session, as in production, so concurrent
requests really race on the database's unique indexes.
"""

import os
import tempfile
from pathlib import Path

_TEST_DB_PATH = Path(tempfile.gettempdir()) / f"event_admin_test_{os.getpid()}.db"
TEST_DATABASE_URL = os.environ.get("TEST_DATABASE_URL", f"sqlite+aiosqlite:///{_TEST_DB_PATH}")

# Settings are cached on first import; point the app at the test database first
os.environ.setdefault("DATABASE_URL", TEST_DATABASE_URL)
os.environ.setdefault("ENVIRONMENT", "test")

from datetime import datetime, timezone, timedelta  # noqa: E402
from typing import Any, AsyncGenerator, Mapping, Optional  # noqa: E402

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import AsyncClient, ASGITransport  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker  # noqa: E402
from sqlalchemy.pool import NullPool  # noqa: E402

from event_admin.main import app  # noqa: E402
from event_admin.db.base import Base  # noqa: E402
from event_admin.db.session import build_engine, get_db  # noqa: E402
from event_admin.infrastructure.sqlalchemy_store import SqlAlchemyStore  # noqa: E402
from event_admin.models import Event  # noqa: E402
from event_admin.services.interfaces.store import Store, StoreResult  # noqa: E402


class RecordingStore(Store):
    """Store double returning canned results and recording every call."""

    def __init__(
        self,
        insert_result: Optional[StoreResult] = None,
        update_result: Optional[StoreResult] = None,
        select_result: Optional[StoreResult] = None,
    ):
        self.insert_result = insert_result or StoreResult()
        self.update_result = update_result or StoreResult(data=[])
        self.select_result = select_result or StoreResult()
        self.calls: list[tuple] = []

    async def insert(self, table: str, row: Mapping[str, Any]) -> StoreResult:
        self.calls.append(("insert", table, dict(row)))
        return self.insert_result

    async def update(self, table: str, changes: Mapping[str, Any], filters: Mapping[str, Any]) -> StoreResult:
        self.calls.append(("update", table, dict(changes), dict(filters)))
        return self.update_result

    async def select_one(self, table: str, filters: Mapping[str, Any]) -> StoreResult:
        self.calls.append(("select_one", table, dict(filters)))
        return self.select_result


@pytest.fixture
def make_store():
    """Factory for RecordingStore instances with canned results."""
    return RecordingStore


@pytest_asyncio.fixture(scope="function")
async def db_engine():
    """Create tables, yield engine, then drop tables for isolation."""
    engine = build_engine(TEST_DATABASE_URL, poolclass=NullPool, echo=False)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
def session_factory(db_engine) -> async_sessionmaker:
    return async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture(scope="function")
async def db_session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    async with session_factory() as session:
        yield session


@pytest.fixture
def store(db_session: AsyncSession) -> SqlAlchemyStore:
    return SqlAlchemyStore(db_session)


@pytest_asyncio.fixture(scope="function")
async def client(session_factory) -> AsyncGenerator[AsyncClient, None]:
    """HTTP client that overrides the DB dependency with test sessions."""

    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def test_event(db_session: AsyncSession) -> Event:
    """Create a published test event with an empty typeform config."""
    event = Event(
        title="Foundathon 3.0",
        description="A test hackathon",
        start_date=datetime.now(timezone.utc) + timedelta(days=30),
        end_date=datetime.now(timezone.utc) + timedelta(days=31),
        venue="Main Auditorium",
        tags=["hackathon", "tech"],
        event_type="hackathon",
        slug="foundathon-3",
        typeform_config=[],
    )
    db_session.add(event)
    await db_session.commit()
    await db_session.refresh(event)
    return event


@pytest.fixture
def event_payload() -> dict:
    return {
        "title": "Python Meetup",
        "description": "Monthly gathering",
        "start_date": (datetime.now(timezone.utc) + timedelta(days=7)).isoformat(),
        "venue": "Room 101",
        "tags": ["python", "community"],
        "event_type": "meetup",
        "slug": "python-meetup-october",
    }
