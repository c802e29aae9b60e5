"""
In-memory Store

Owns the async engine, the per-kind id counters and the clock. One Store is
built per process (or per test) and nothing else holds global state.
"""

from __future__ import annotations

import asyncio
import logging
from collections import Counter
from collections.abc import AsyncGenerator, AsyncIterator, Callable
from contextlib import asynccontextmanager
from datetime import UTC, datetime

from fastapi import Request
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from tinysteps.config import settings
from tinysteps.core.models import Base

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(UTC)


def _create_engine(database_url: str) -> AsyncEngine:
    """Create the async engine.

    In-memory SQLite lives inside a single connection, so every session
    has to share it through a StaticPool.
    """
    if database_url.startswith("sqlite"):
        return create_async_engine(
            database_url,
            echo=False,
            poolclass=StaticPool,
            connect_args={"check_same_thread": False},
        )
    return create_async_engine(database_url, echo=False)


class Store:
    """Process-lifetime state for the whole application.

    All units of work run one at a time under ``_lock``, so a duplicate
    completion request always sees the commit of the one before it.
    """

    def __init__(self, database_url: str | None = None, clock: Clock | None = None):
        """Initialize the store.

        Args:
            database_url: SQLAlchemy async URL (defaults to settings.DATABASE_URL)
            clock: Callable returning the current aware UTC datetime
        """
        self.database_url = database_url or settings.DATABASE_URL
        self.clock: Clock = clock or utc_now
        self.engine = _create_engine(self.database_url)
        self.session_factory = async_sessionmaker(
            self.engine, class_=AsyncSession, expire_on_commit=False
        )
        self._lock = asyncio.Lock()
        self._sequences: Counter[str] = Counter()
        self._schema_ready = False

    # ------------------------------------------------------------------
    # Clock and identifiers
    # ------------------------------------------------------------------

    def now(self) -> datetime:
        return self.clock()

    def next_sequence(self, kind: str) -> int:
        """Advance and return the counter for ``kind``.

        Contains no await point, so increments are atomic within the event loop.
        """
        self._sequences[kind] += 1
        return self._sequences[kind]

    def next_id(self, prefix: str) -> str:
        """Mint an id such as ``session_00000001``."""
        return f"{prefix}_{self.next_sequence(prefix):08d}"

    # ------------------------------------------------------------------
    # Schema lifecycle
    # ------------------------------------------------------------------

    async def _create_schema(self) -> None:
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        self._schema_ready = True

    async def initialize(self) -> None:
        """Create all tables if they do not exist yet."""
        async with self._lock:
            if not self._schema_ready:
                await self._create_schema()

    async def reset_all(self) -> None:
        """Drop every record and zero every id counter.

        Must not be called from inside ``unit_of_work``.
        """
        async with self._lock:
            async with self.engine.begin() as conn:
                await conn.run_sync(Base.metadata.drop_all)
                await conn.run_sync(Base.metadata.create_all)
            self._schema_ready = True
            self._sequences.clear()
        logger.info("Store reset: all records and counters cleared")

    async def dispose(self) -> None:
        """Close database connections. An in-memory database is gone afterwards."""
        await self.engine.dispose()
        self._schema_ready = False

    async def ping(self) -> bool:
        """Return True if the database answers a trivial query."""
        async with self.unit_of_work() as session:
            await session.execute(text("SELECT 1"))
        return True

    # ------------------------------------------------------------------
    # Units of work
    # ------------------------------------------------------------------

    @asynccontextmanager
    async def unit_of_work(self) -> AsyncIterator[AsyncSession]:
        """Yield a database session while holding the store lock.

        Uncommitted changes are rolled back if the body raises.
        """
        async with self._lock:
            if not self._schema_ready:
                await self._create_schema()
            async with self.session_factory() as session:
                try:
                    yield session
                except Exception:
                    await session.rollback()
                    raise


def get_store(request: Request) -> Store:
    """FastAPI dependency returning the application's Store."""
    store: Store = request.app.state.store
    return store


async def get_db(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency yielding a serialized database session."""
    async with get_store(request).unit_of_work() as session:
        yield session
