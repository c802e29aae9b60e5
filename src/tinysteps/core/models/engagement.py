"""
Engagement Models

Append-only analytics event log and the data-deletion request queue.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from sqlalchemy import JSON, CheckConstraint, ForeignKey, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, PrefixedIdMixin, UTCDateTime


class AnalyticsEvent(Base, PrefixedIdMixin):
    """Domain event raised by a mutating or dashboard operation."""

    __tablename__ = "analytics_events"
    __table_args__ = (
        Index("idx_analytics_events_sequence", "sequence", unique=True),
        Index("idx_analytics_events_child", "child_id"),
    )

    sequence: Mapped[int] = mapped_column(
        Integer, nullable=False, comment="Monotonic position in the log"
    )
    name: Mapped[str] = mapped_column(String(40), nullable=False)
    parent_id: Mapped[str | None] = mapped_column(String(32), nullable=True)
    child_id: Mapped[str | None] = mapped_column(String(32), nullable=True)
    # "metadata" is reserved on declarative classes
    event_metadata: Mapped[dict[str, Any] | None] = mapped_column(
        "metadata", JSON, nullable=True
    )
    created_at: Mapped[datetime] = mapped_column(UTCDateTime(), nullable=False)


class DeletionRequest(Base, PrefixedIdMixin):
    """Request to erase a child's data, picked up by an external worker."""

    __tablename__ = "deletion_requests"
    __table_args__ = (
        CheckConstraint("status IN ('queued')", name="check_deletion_status"),
        Index("idx_deletion_requests_parent", "parent_id"),
    )

    child_id: Mapped[str] = mapped_column(ForeignKey("children.id"), nullable=False)
    parent_id: Mapped[str] = mapped_column(ForeignKey("parents.id"), nullable=False)
    status: Mapped[str] = mapped_column(String(20), nullable=False, default="queued")
    requested_at: Mapped[datetime] = mapped_column(UTCDateTime(), nullable=False)
