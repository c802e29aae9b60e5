"""
Data Deletion Queue

Parents can ask for a child's data to be erased. Requests are only queued
here; an external worker performs the deletion.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession

    from tinysteps.core.database import Store

from sqlalchemy import select

from tinysteps.analytics import AnalyticsSink
from tinysteps.core.enums import AnalyticsEventName, DeletionStatus
from tinysteps.core.models import DeletionRequest
from tinysteps.learning.identity import IdentityLedger

logger = logging.getLogger(__name__)


class DeletionQueue:
    """Append-only queue of deletion requests."""

    def __init__(self, db: AsyncSession, store: Store):
        self.db = db
        self.store = store
        self.identity = IdentityLedger(db, store)
        self.analytics = AnalyticsSink(db, store)

    async def request_deletion(self, parent_id: str, child_id: str) -> DeletionRequest:
        """Queue a deletion request for a child.

        Each call produces a new request; child, session and progress
        records are left untouched.

        Raises:
            NotFoundError: If the child is not owned by ``parent_id``
        """
        child = await self.identity.get_child(parent_id, child_id)

        request = DeletionRequest(
            id=self.store.next_id("del"),
            child_id=child.id,
            parent_id=parent_id,
            status=DeletionStatus.QUEUED,
            requested_at=self.store.now(),
        )
        self.db.add(request)

        self.analytics.log_event(
            AnalyticsEventName.DELETION_REQUESTED,
            parent_id=parent_id,
            child_id=child.id,
            metadata={"request_id": request.id},
        )
        await self.db.commit()

        logger.info(f"Deletion request {request.id} queued for {child.id}")
        return request

    async def list_requests(self, parent_id: str, child_id: str) -> list[DeletionRequest]:
        """Requests queued for a child, oldest first.

        Raises:
            NotFoundError: If the child is not owned by ``parent_id``
        """
        child = await self.identity.get_child(parent_id, child_id)
        result = await self.db.execute(
            select(DeletionRequest)
            .where(DeletionRequest.child_id == child.id)
            .order_by(DeletionRequest.id)
        )
        return list(result.scalars().all())
