"""Shared test fixtures."""

import os
from collections.abc import AsyncGenerator

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy import event
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

# In-memory SQLite for tests; must be set before the app modules are imported
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")
os.environ.setdefault("ENVIRONMENT", "development")

from pagebuilder.core.dependencies import get_db  # noqa: E402
from pagebuilder.core.exceptions import UpstreamUnavailableError  # noqa: E402
from pagebuilder.db.base import Base  # noqa: E402
from pagebuilder.main import app  # noqa: E402
from pagebuilder.services.data_store import DataStore  # noqa: E402


class FlakyDataStore(DataStore):
    """DataStore that fails chosen operations with UpstreamUnavailableError.

    ``arm("update", after=2)`` lets two updates through and fails every one
    after that, until ``disarm("update")``.
    """

    def __init__(self, db: AsyncSession):
        super().__init__(db)
        self._budget: dict[str, int] = {}
        self.calls: list[tuple[str, str]] = []

    def arm(self, op: str, after: int = 0) -> None:
        self._budget[op] = after

    def disarm(self, op: str) -> None:
        self._budget.pop(op, None)

    def _check(self, op: str, table: str) -> None:
        self.calls.append((op, table))
        if op not in self._budget:
            return
        if self._budget[op] == 0:
            raise UpstreamUnavailableError(f"{op} on {table} unavailable")
        self._budget[op] -= 1

    async def select(self, table, filters=None, order_by=None, descending=False, limit=None):
        self._check("select", table)
        return await super().select(table, filters, order_by, descending, limit)

    async def insert(self, table, record):
        self._check("insert", table)
        return await super().insert(table, record)

    async def update(self, table, key, values):
        self._check("update", table)
        return await super().update(table, key, values)

    async def delete(self, table, key):
        self._check("delete", table)
        return await super().delete(table, key)


@pytest.fixture
async def engine() -> AsyncGenerator[AsyncEngine, None]:
    """Fresh in-memory database per test, schema created from the models."""
    engine = create_async_engine("sqlite+aiosqlite://", poolclass=StaticPool)

    # pysqlite/aiosqlite need BEGIN emitted by SQLAlchemy for SAVEPOINT to work
    @event.listens_for(engine.sync_engine, "connect")
    def _on_connect(dbapi_connection, _connection_record):
        dbapi_connection.isolation_level = None
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    @event.listens_for(engine.sync_engine, "begin")
    def _on_begin(conn):
        conn.exec_driver_sql("BEGIN")

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
async def db(engine: AsyncEngine) -> AsyncGenerator[AsyncSession, None]:
    factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with factory() as session:
        yield session
        await session.rollback()


@pytest.fixture
def data(db: AsyncSession) -> FlakyDataStore:
    return FlakyDataStore(db)


@pytest.fixture
async def client(engine: AsyncEngine) -> AsyncGenerator[AsyncClient, None]:
    """HTTP test client for the FastAPI app, bound to the test database."""
    factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    async def _test_get_db() -> AsyncGenerator[AsyncSession, None]:
        async with factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = _test_get_db
    try:
        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://test") as c:
            yield c
    finally:
        app.dependency_overrides.pop(get_db, None)
