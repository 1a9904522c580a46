"""Service test fixtures — fake command bridge, async DB, FastAPI test client.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - fake_bridge records every call in order; nothing reaches a real store
    - client overrides get_orchestrator / get_notification_log with per-test instances

Design Decisions:
    - SQLite in-memory with StaticPool: every session shares the one connection,
      so the schema created at fixture setup is visible to the bridge
      (ADR: PostgreSQL-specific features not exercised here)
    - FakeBridge configured per command: a value, an exception to raise, or a
      callable; an asyncio.Event gate lets a test hold a call in flight
"""

import asyncio

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.pool import StaticPool

from stockroom.api.dependencies import get_notification_log, get_orchestrator
from stockroom.db.base import Base
from stockroom.infrastructure.database import DatabaseSessionManager
from stockroom.main import app
from stockroom.services.catalog_orchestrator import CatalogOrchestrator
from stockroom.services.notification_log import NotificationLog


class FakeBridge:
    """In-memory CommandBridge that records calls.

    results: command name -> return value | Exception instance | callable(*args)
    gates:   command name -> asyncio.Event awaited before the call resolves
    """

    def __init__(self, records=None):
        self.log: list[dict] = []
        self.results: dict = {
            "fetch_all": list(records or []),
            "create": "new-id-1",
            "update": True,
            "delete": True,
        }
        self.gates: dict[str, asyncio.Event] = {}

    def calls(self, command: str) -> list[dict]:
        return [c for c in self.log if c["command"] == command]

    async def _resolve(self, command: str, *args):
        self.log.append({"command": command, "args": args})
        gate = self.gates.get(command)
        if gate is not None:
            await gate.wait()
        result = self.results[command]
        if isinstance(result, Exception):
            raise result
        return result(*args) if callable(result) else result

    async def fetch_all(self, collection):
        return await self._resolve("fetch_all", collection)

    async def create(self, collection, item):
        return await self._resolve("create", collection, dict(item))

    async def update(self, collection, item_id, item):
        return await self._resolve("update", collection, item_id, dict(item))

    async def delete(self, collection, item_id):
        return await self._resolve("delete", collection, item_id)


@pytest.fixture
def fake_bridge():
    return FakeBridge()


@pytest.fixture
def notifications():
    return NotificationLog()


@pytest.fixture
def orchestrator(fake_bridge, notifications):
    return CatalogOrchestrator(fake_bridge, notifications)


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        echo=False,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def db_manager(test_engine):
    return DatabaseSessionManager.from_engine(test_engine)


@pytest.fixture
async def client(orchestrator, notifications):
    """FastAPI test client wired to the per-test orchestrator."""
    app.dependency_overrides[get_orchestrator] = lambda: orchestrator
    app.dependency_overrides[get_notification_log] = lambda: notifications

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
