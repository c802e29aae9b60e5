"""
Pytest Configuration and Fixtures

Shared test fixtures for unit, API and integration tests.

Every test gets its own in-memory Store. ``db_session`` holds the store
lock for the whole test, so a test uses either ``db_session`` (service
tests) or ``client`` (API tests), never both.
"""

from collections.abc import Awaitable, Callable
from datetime import UTC, datetime, timedelta
from typing import Any

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from tinysteps.core.database import Store
from tinysteps.learning import DeletionQueue, IdentityLedger, SessionEngine
from tinysteps.main import create_app


class FrozenClock:
    """Clock that only moves when told to."""

    def __init__(self, start: datetime):
        self.current = start

    def __call__(self) -> datetime:
        return self.current

    def advance(self, **kwargs: float) -> None:
        self.current += timedelta(**kwargs)


@pytest.fixture
def clock() -> FrozenClock:
    return FrozenClock(datetime(2026, 3, 2, 9, 30, tzinfo=UTC))


@pytest.fixture
async def store(clock: FrozenClock) -> Store:
    """Fresh in-memory store with a frozen clock."""
    store = Store("sqlite+aiosqlite://", clock=clock)
    await store.reset_all()

    yield store

    await store.dispose()


@pytest.fixture
async def db_session(store: Store) -> AsyncSession:
    """Database session for service-level tests."""
    async with store.unit_of_work() as session:
        yield session


@pytest.fixture
async def client(store: Store) -> AsyncClient:
    """Create test client bound to the test store."""
    app = create_app(store=store)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


# ============================================================================
# Service fixtures
# ============================================================================


@pytest.fixture
def ledger(db_session: AsyncSession, store: Store) -> IdentityLedger:
    return IdentityLedger(db_session, store)


@pytest.fixture
def engine(db_session: AsyncSession, store: Store) -> SessionEngine:
    return SessionEngine(db_session, store)


@pytest.fixture
def deletion_queue(db_session: AsyncSession, store: Store) -> DeletionQueue:
    return DeletionQueue(db_session, store)


@pytest.fixture
async def consenting_parent(ledger: IdentityLedger):
    """Parent who has accepted consent."""
    parent, _ = await ledger.resolve_or_create_parent(email="parent@example.com")
    await ledger.record_consent(parent.id, accepted=True, market="Singapore")
    return parent


@pytest.fixture
async def child(ledger: IdentityLedger, consenting_parent):
    """48-month-old child of ``consenting_parent``."""
    return await ledger.create_child(
        consenting_parent.id,
        display_name="Kai",
        age_months=48,
        home_language="Mandarin",
        avatar_id="panda",
    )


# ============================================================================
# HTTP fixtures
# ============================================================================

SignupFn = Callable[[str], Awaitable[dict[str, Any]]]


def auth_headers(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def signup(client: AsyncClient) -> SignupFn:
    """Sign up by email (if the identity contains @) or phone."""

    async def _signup(identity: str) -> dict[str, Any]:
        payload = {"email": identity} if "@" in identity else {"phone": identity}
        response = await client.post("/api/v1/parent/signup", json=payload)
        assert response.status_code == 201
        body = response.json()
        body["headers"] = auth_headers(body["token"])
        return body

    return _signup


@pytest.fixture
def consent(client: AsyncClient) -> Callable[[dict[str, Any]], Awaitable[None]]:
    async def _consent(auth: dict[str, Any]) -> None:
        response = await client.post(
            "/api/v1/consent",
            json={"accepted": True, "market": "Singapore"},
            headers=auth["headers"],
        )
        assert response.status_code == 201

    return _consent


@pytest.fixture
async def parent_auth(signup: SignupFn, consent) -> dict[str, Any]:
    """Signed-up parent with accepted consent."""
    auth = await signup("parent1@example.com")
    await consent(auth)
    return auth


@pytest.fixture
async def child_id(client: AsyncClient, parent_auth: dict[str, Any]) -> str:
    response = await client.post(
        "/api/v1/children",
        json={"display_name": "Kai", "age_months": 50, "home_language": "Mandarin", "avatar_id": "panda"},
        headers=parent_auth["headers"],
    )
    assert response.status_code == 201
    return response.json()["id"]
