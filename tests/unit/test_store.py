"""
Unit Tests for the Store

Id minting, the clock, reset and unit-of-work behaviour.
"""

from datetime import UTC, datetime

import pytest
from sqlalchemy import func, select

from tinysteps.core.database import Store, utc_now
from tinysteps.core.models import Parent


def test_ids_are_prefixed_and_zero_padded(store: Store):
    assert store.next_id("parent") == "parent_00000001"
    assert store.next_id("parent") == "parent_00000002"
    assert store.next_id("child") == "child_00000001"


def test_sequences_are_independent_per_kind(store: Store):
    store.next_sequence("evt")
    store.next_sequence("evt")
    assert store.next_sequence("evt") == 3
    assert store.next_sequence("other") == 1


def test_clock_is_injectable(store: Store, clock):
    assert store.now() == datetime(2026, 3, 2, 9, 30, tzinfo=UTC)
    clock.advance(hours=2)
    assert store.now() == datetime(2026, 3, 2, 11, 30, tzinfo=UTC)


def test_default_clock_is_aware_utc():
    assert utc_now().tzinfo is UTC


async def test_ping(store: Store):
    assert await store.ping() is True


async def test_reset_all_clears_records_and_counters(store: Store):
    async with store.unit_of_work() as session:
        session.add(Parent(id=store.next_id("parent"), login_key="email:a@x.com", email="a@x.com"))
        await session.commit()

    await store.reset_all()

    async with store.unit_of_work() as session:
        count = await session.scalar(select(func.count()).select_from(Parent))
    assert count == 0
    assert store.next_id("parent") == "parent_00000001"


async def test_unit_of_work_rolls_back_on_error(store: Store):
    with pytest.raises(RuntimeError):
        async with store.unit_of_work() as session:
            session.add(Parent(id="parent_x", login_key="email:x@x.com", email="x@x.com"))
            await session.flush()
            raise RuntimeError("boom")

    async with store.unit_of_work() as session:
        assert await session.get(Parent, "parent_x") is None


async def test_schema_created_lazily(clock):
    fresh = Store("sqlite+aiosqlite://", clock=clock)
    try:
        async with fresh.unit_of_work() as session:
            count = await session.scalar(select(func.count()).select_from(Parent))
        assert count == 0
    finally:
        await fresh.dispose()


async def test_created_at_is_timezone_aware_after_reload(store: Store):
    moment = datetime(2026, 3, 2, 9, 30, tzinfo=UTC)
    async with store.unit_of_work() as session:
        session.add(
            Parent(id="parent_tz", login_key="email:tz@x.com", email="tz@x.com", created_at=moment)
        )
        await session.commit()

    async with store.unit_of_work() as session:
        parent = await session.get(Parent, "parent_tz")
        assert parent.created_at == moment
        assert parent.created_at.tzinfo is not None
