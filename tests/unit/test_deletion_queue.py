"""
Unit Tests for the Data Deletion Queue
"""

import pytest

from tinysteps.analytics import AnalyticsSink
from tinysteps.core.exceptions import NotFoundError


async def test_queues_request(deletion_queue, child, consenting_parent, store):
    request = await deletion_queue.request_deletion(consenting_parent.id, child.id)

    assert request.id == "del_00000001"
    assert request.status == "queued"
    assert request.child_id == child.id
    assert request.parent_id == consenting_parent.id
    assert request.requested_at == store.now()


async def test_every_call_queues_a_new_request(deletion_queue, child, consenting_parent):
    first = await deletion_queue.request_deletion(consenting_parent.id, child.id)
    second = await deletion_queue.request_deletion(consenting_parent.id, child.id)

    assert first.id != second.id
    requests = await deletion_queue.list_requests(consenting_parent.id, child.id)
    assert [r.id for r in requests] == [first.id, second.id]


async def test_child_data_left_in_place(deletion_queue, ledger, child, consenting_parent):
    await deletion_queue.request_deletion(consenting_parent.id, child.id)

    still_there = await ledger.get_child(consenting_parent.id, child.id)
    assert still_there.progress is not None


async def test_emits_event(deletion_queue, child, consenting_parent, db_session, store):
    request = await deletion_queue.request_deletion(consenting_parent.id, child.id)

    event = (await AnalyticsSink(db_session, store).list_events())[-1]
    assert event.name == "deletion_requested"
    assert event.event_metadata == {"request_id": request.id}


async def test_other_parent_gets_not_found(deletion_queue, ledger, child):
    other, _ = await ledger.resolve_or_create_parent(email="other@example.com")

    with pytest.raises(NotFoundError):
        await deletion_queue.request_deletion(other.id, child.id)
    with pytest.raises(NotFoundError):
        await deletion_queue.list_requests(other.id, child.id)
