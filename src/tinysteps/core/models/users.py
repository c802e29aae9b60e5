"""
User Models

Parents, their consent records and the bearer tokens issued to them.
"""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .children import Child

from sqlalchemy import ForeignKey, Index, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base, PrefixedIdMixin, TimestampMixin, UTCDateTime


class Parent(Base, PrefixedIdMixin, TimestampMixin):
    """Parent account, identified by email or phone.

    Minimal data collection: no name or password is stored.
    """

    __tablename__ = "parents"

    # Identity
    login_key: Mapped[str] = mapped_column(
        String(320),
        unique=True,
        nullable=False,
        comment="email:<lowercased> or phone:<trimmed>, email preferred",
    )
    email: Mapped[str | None] = mapped_column(String(320), nullable=True)
    phone: Mapped[str | None] = mapped_column(String(32), nullable=True)

    # Relationships
    consent: Mapped[Consent | None] = relationship(
        back_populates="parent", cascade="all, delete-orphan", uselist=False, lazy="selectin"
    )
    children: Mapped[list[Child]] = relationship(
        back_populates="parent", cascade="all, delete-orphan", order_by="Child.id"
    )


class Consent(Base):
    """Parental consent, one row per parent, overwritten on resubmit."""

    __tablename__ = "consents"

    parent_id: Mapped[str] = mapped_column(ForeignKey("parents.id"), primary_key=True)
    accepted: Mapped[bool] = mapped_column(default=False, nullable=False)
    market: Mapped[str] = mapped_column(String(100), nullable=False)
    accepted_at: Mapped[datetime] = mapped_column(UTCDateTime(), nullable=False)

    parent: Mapped[Parent] = relationship(back_populates="consent")


class AuthToken(Base, TimestampMixin):
    """Opaque bearer token issued at signup/login."""

    __tablename__ = "auth_tokens"
    __table_args__ = (Index("idx_auth_tokens_parent", "parent_id"),)

    token: Mapped[str] = mapped_column(String(64), primary_key=True)
    parent_id: Mapped[str] = mapped_column(ForeignKey("parents.id"), nullable=False)
