"""
Analytics Sink

Append-only log of domain events raised by the ledger and the session engine.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession

    from tinysteps.core.database import Store

from sqlalchemy import select

from tinysteps.core.enums import AnalyticsEventName
from tinysteps.core.models import AnalyticsEvent

logger = logging.getLogger(__name__)

MetadataValue = str | int | float | bool | None


class AnalyticsSink:
    """Writes events into the caller's unit of work.

    Events are added to the session but not committed; they land together
    with the mutation that raised them.
    """

    def __init__(self, db: AsyncSession, store: Store):
        self.db = db
        self.store = store

    def log_event(
        self,
        name: AnalyticsEventName,
        parent_id: str | None = None,
        child_id: str | None = None,
        metadata: dict[str, MetadataValue] | None = None,
    ) -> AnalyticsEvent:
        """Append an event with the next sequence number.

        Args:
            name: Domain event name
            parent_id: Acting parent, if any
            child_id: Child concerned, if any
            metadata: Flat mapping of scalar values

        Returns:
            The pending AnalyticsEvent
        """
        sequence = self.store.next_sequence("evt")
        event = AnalyticsEvent(
            id=f"evt_{sequence:08d}",
            sequence=sequence,
            name=name,
            parent_id=parent_id,
            child_id=child_id,
            event_metadata=dict(metadata) if metadata is not None else None,
            created_at=self.store.now(),
        )
        self.db.add(event)
        logger.debug(f"Analytics event {event.id}: {name}")
        return event

    async def list_events(self) -> list[AnalyticsEvent]:
        """Return the full log in encounter order."""
        result = await self.db.execute(select(AnalyticsEvent).order_by(AnalyticsEvent.sequence))
        return list(result.scalars().all())

