"""
Lesson Models

Daily lessons, their activities, and the learning sessions played against them.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .children import Reward

from sqlalchemy import JSON, Date, ForeignKey, Index, SmallInteger, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from tinysteps.core.enums import SessionState

from .base import Base, PrefixedIdMixin, UTCDateTime


class DailyLesson(Base, PrefixedIdMixin):
    """Lesson generated for one child on one calendar day.

    Stable for the day: every fetch and every session started that day
    shares this row.
    """

    __tablename__ = "daily_lessons"
    __table_args__ = (
        UniqueConstraint("child_id", "lesson_date", name="uq_daily_lessons_child_date"),
    )

    child_id: Mapped[str] = mapped_column(ForeignKey("children.id"), nullable=False)
    lesson_date: Mapped[date] = mapped_column(Date, nullable=False, comment="UTC calendar day")
    unit_id: Mapped[str] = mapped_column(String(10), nullable=False)
    estimated_minutes: Mapped[int] = mapped_column(SmallInteger, nullable=False)

    activities: Mapped[list[LessonActivity]] = relationship(
        back_populates="lesson",
        cascade="all, delete-orphan",
        order_by="LessonActivity.position",
        lazy="selectin",
    )


class LessonActivity(Base, PrefixedIdMixin):
    """Single activity inside a daily lesson. Immutable once generated."""

    __tablename__ = "lesson_activities"
    __table_args__ = (Index("idx_lesson_activities_lesson", "lesson_id"),)

    lesson_id: Mapped[str] = mapped_column(ForeignKey("daily_lessons.id"), nullable=False)
    position: Mapped[int] = mapped_column(SmallInteger, nullable=False)
    type: Mapped[str] = mapped_column(String(20), nullable=False)
    prompt_audio_url: Mapped[str] = mapped_column(String(500), nullable=False)
    asset_ids: Mapped[list[str]] = mapped_column(JSON, nullable=False)
    target_skill: Mapped[str] = mapped_column(String(20), nullable=False)

    lesson: Mapped[DailyLesson] = relationship(back_populates="activities")


class LearningSession(Base, PrefixedIdMixin):
    """One play-through of a daily lesson.

    Transitions started -> completed exactly once; a completed session is
    never modified again.
    """

    __tablename__ = "learning_sessions"
    __table_args__ = (
        Index("idx_learning_sessions_child", "child_id"),
        Index("idx_learning_sessions_lesson", "lesson_id"),
    )

    parent_id: Mapped[str] = mapped_column(ForeignKey("parents.id"), nullable=False)
    child_id: Mapped[str] = mapped_column(ForeignKey("children.id"), nullable=False)
    lesson_id: Mapped[str] = mapped_column(ForeignKey("daily_lessons.id"), nullable=False)

    started_at: Mapped[datetime] = mapped_column(UTCDateTime(), nullable=False)
    completed_at: Mapped[datetime | None] = mapped_column(UTCDateTime(), nullable=True)
    completed_activity_ids: Mapped[list[str]] = mapped_column(JSON, default=list, nullable=False)

    reward_id: Mapped[str | None] = mapped_column(ForeignKey("rewards.id"), nullable=True)
    reward: Mapped[Reward | None] = relationship(lazy="selectin")

    @property
    def state(self) -> SessionState:
        if self.completed_at is not None and self.reward is not None:
            return SessionState.COMPLETED
        return SessionState.STARTED
