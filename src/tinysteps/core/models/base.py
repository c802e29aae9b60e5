"""
SQLAlchemy Base Model and Mixins

Provides base class, column types and common mixins for all TinySteps models.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any

from sqlalchemy import DateTime, String, event
from sqlalchemy.engine import Dialect
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column
from sqlalchemy.types import TypeDecorator


class UTCDateTime(TypeDecorator[datetime]):
    """Timezone-aware datetime column.

    SQLite drops tzinfo on the way in; values are stored as naive UTC and
    handed back as aware UTC so reloaded timestamps compare equal to the
    originals.
    """

    impl = DateTime
    cache_ok = True

    def process_bind_param(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        if value is None:
            return None
        if value.tzinfo is None:
            return value
        return value.astimezone(UTC).replace(tzinfo=None)

    def process_result_value(self, value: Any, dialect: Dialect) -> datetime | None:
        if value is None:
            return None
        return value.replace(tzinfo=UTC) if value.tzinfo is None else value.astimezone(UTC)


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models."""

    pass


class PrefixedIdMixin:
    """Mixin for readable primary keys such as ``child_00000003``.

    Ids are minted by the Store's per-kind counters, never by the database,
    so a rejected request never consumes one.
    """

    id: Mapped[str] = mapped_column(String(32), primary_key=True, comment="<prefix>_<counter>")


class TimestampMixin:
    """Mixin for a created_at timestamp.

    All timestamps use UTC (timezone-aware).
    """

    created_at: Mapped[datetime] = mapped_column(
        UTCDateTime(),
        default=lambda: datetime.now(UTC),
        nullable=False,
        comment="Creation timestamp (UTC)",
    )


# Event listener to stamp in-memory objects before they are flushed
@event.listens_for(TimestampMixin, "init", propagate=True)
def receive_init_timestamps(target, args, kwargs):  # type: ignore[no-untyped-def]
    """Auto-generate created_at on instance creation if not provided."""
    if "created_at" not in kwargs:
        target.created_at = datetime.now(UTC)
