"""
Child Models

Child profiles with their progress snapshot, completed units and rewards.
"""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .users import Parent

from sqlalchemy import JSON, CheckConstraint, ForeignKey, Index, Integer, SmallInteger, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base, PrefixedIdMixin, TimestampMixin, UTCDateTime


class Child(Base, PrefixedIdMixin, TimestampMixin):
    """Child learner profile owned by one parent."""

    __tablename__ = "children"
    __table_args__ = (
        CheckConstraint("age_months BETWEEN 36 AND 71", name="check_age_months"),
        CheckConstraint(
            "placement_track IN ('starter_a', 'starter_b', 'starter_c')",
            name="check_placement_track",
        ),
        Index("idx_children_parent", "parent_id"),
    )

    parent_id: Mapped[str] = mapped_column(ForeignKey("parents.id"), nullable=False)

    # Profile
    display_name: Mapped[str] = mapped_column(String(100), nullable=False)
    age_months: Mapped[int] = mapped_column(SmallInteger, nullable=False)
    home_language: Mapped[str] = mapped_column(String(50), nullable=False)
    avatar_id: Mapped[str] = mapped_column(String(30), nullable=False)
    placement_track: Mapped[str] = mapped_column(
        String(20), nullable=False, comment="Derived from age at creation"
    )

    # Relationships
    parent: Mapped[Parent] = relationship(back_populates="children")
    progress: Mapped[ChildProgress] = relationship(
        back_populates="child", cascade="all, delete-orphan", uselist=False, lazy="selectin"
    )
    rewards: Mapped[list[Reward]] = relationship(
        back_populates="child",
        cascade="all, delete-orphan",
        order_by="Reward.id",
        lazy="selectin",
    )
    completed_units: Mapped[list[ChildUnitCompletion]] = relationship(
        cascade="all, delete-orphan", lazy="selectin"
    )

    @property
    def completed_unit_ids(self) -> set[str]:
        return {completion.unit_id for completion in self.completed_units}


class ChildProgress(Base):
    """Progress snapshot, one row per child."""

    __tablename__ = "child_progress"

    child_id: Mapped[str] = mapped_column(ForeignKey("children.id"), primary_key=True)
    sessions_completed: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    units_completed: Mapped[int] = mapped_column(
        Integer, default=0, nullable=False, comment="Distinct curriculum units finished"
    )
    milestone_by_skill: Mapped[dict[str, str]] = mapped_column(
        JSON, nullable=False, comment="{skill_area: milestone_level}"
    )
    last_active_at: Mapped[datetime | None] = mapped_column(UTCDateTime(), nullable=True)

    child: Mapped[Child] = relationship(back_populates="progress")


class ChildUnitCompletion(Base):
    """Membership row of a child's completed-unit set."""

    __tablename__ = "child_unit_completions"

    child_id: Mapped[str] = mapped_column(ForeignKey("children.id"), primary_key=True)
    unit_id: Mapped[str] = mapped_column(String(10), primary_key=True)


class Reward(Base, PrefixedIdMixin):
    """Reward earned by completing a session. Never removed."""

    __tablename__ = "rewards"
    __table_args__ = (
        CheckConstraint("type IN ('sticker', 'star', 'badge')", name="check_reward_type"),
        Index("idx_rewards_child", "child_id"),
    )

    child_id: Mapped[str] = mapped_column(ForeignKey("children.id"), nullable=False)
    type: Mapped[str] = mapped_column(String(20), nullable=False)
    label: Mapped[str] = mapped_column(String(100), nullable=False)
    earned_at: Mapped[datetime] = mapped_column(UTCDateTime(), nullable=False)

    child: Mapped[Child] = relationship(back_populates="rewards")
