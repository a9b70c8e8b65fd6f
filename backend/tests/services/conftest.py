"""Service test fixtures — in-memory fake repository, async DB, FastAPI test client.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - get_db dependency overridden to use test DB session
    - fake_tasks logs every port call as (operation, argument) in call order
    - fake_tasks.failures[operation] is raised instead of running that operation

Design Decisions:
    - SQLite in-memory: fast, no external dependency, sufficient for adapter and route tests
    - Fake repository over AsyncMock: the services' ordering and merge rules are only
      observable against a store that actually filters, sorts, and enforces uniqueness
"""

import uuid
from datetime import datetime, timedelta, timezone

import pytest
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from httpx import ASGITransport, AsyncClient

from taskboard.core.domain_types import SortDirection
from taskboard.core.repository_protocols import (
    TaskFilter, UniqueConstraintViolation,
)
from taskboard.db.base import Base
from taskboard.infrastructure.database import get_db, DatabaseSessionManager
import taskboard.infrastructure.database as db_module
from taskboard.main import app


class FakeTaskRepository:
    """In-memory TaskRepository with a deterministic clock."""

    def __init__(self):
        self.records: list[dict] = []
        self.calls: list[tuple[str, object]] = []
        self.failures: dict[str, BaseException] = {}
        self._clock = datetime(2026, 1, 1, tzinfo=timezone.utc)

    def tick(self) -> datetime:
        self._clock += timedelta(seconds=1)
        return self._clock

    def seed(self, **fields) -> dict:
        now = self.tick()
        record = {
            "id": str(uuid.uuid4()),
            "task_name": "Seeded task",
            "description": "Seeded task description",
            "priority": 3,
            "tags": [],
            "is_done": False,
            "user_id": "u1",
            "created_at": now,
            "updated_at": now,
        }
        record.update(fields)
        self.records.append(record)
        return dict(record)

    def operations(self) -> list[str]:
        return [name for name, _ in self.calls]

    def _enter(self, operation: str, argument: object) -> None:
        self.calls.append((operation, argument))
        if operation in self.failures:
            raise self.failures[operation]

    def _matching(self, criteria: TaskFilter) -> list[dict]:
        return [
            r for r in self.records
            if (criteria.user_id is None or r["user_id"] == criteria.user_id)
            and (criteria.task_name is None or r["task_name"] == criteria.task_name)
            and (criteria.is_done is None or r["is_done"] == criteria.is_done)
            and (criteria.exclude_id is None or r["id"] != criteria.exclude_id)
        ]

    def _taken(self, task_name: str, user_id: str, exclude_id: str | None) -> bool:
        return bool(self._matching(
            TaskFilter(task_name=task_name, user_id=user_id, exclude_id=exclude_id),
        ))

    async def find_one(self, criteria):
        self._enter("find_one", criteria)
        found = self._matching(criteria)
        return dict(found[0]) if found else None

    async def find_many(self, criteria, sort):
        self._enter("find_many", (criteria, sort))
        found = [dict(r) for r in self._matching(criteria)]
        for field, direction in reversed(sort):
            found.sort(
                key=lambda r: r[field], reverse=direction == SortDirection.DESC,
            )
        return found

    async def find_by_id(self, task_id):
        self._enter("find_by_id", task_id)
        for r in self.records:
            if r["id"] == task_id:
                return dict(r)
        return None

    async def insert(self, record):
        self._enter("insert", record)
        if self._taken(record["task_name"], record["user_id"], None):
            raise UniqueConstraintViolation("duplicate key")
        return self.seed(**record)

    async def update_by_id(self, task_id, changes):
        self._enter("update_by_id", (task_id, changes))
        for r in self.records:
            if r["id"] == task_id:
                name = changes.get("task_name", r["task_name"])
                if self._taken(name, r["user_id"], task_id):
                    raise UniqueConstraintViolation("duplicate key")
                r.update(changes)
                r["updated_at"] = self.tick()
                return dict(r)
        return None


@pytest.fixture
def fake_tasks():
    return FakeTaskRepository()


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
async def client(test_engine, test_session_factory):
    """FastAPI test client with DB dependency overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db

    # Readiness probe reads db_manager directly
    original_manager = db_module.db_manager
    fake_manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    fake_manager.engine = test_engine
    fake_manager._session_factory = test_session_factory
    db_module.db_manager = fake_manager

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager = original_manager
