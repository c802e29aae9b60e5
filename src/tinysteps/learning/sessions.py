"""
Session/Progress Engine

Daily lesson caching, the started -> completed session lifecycle, reward
issuance and progress recomputation.

Completion is idempotent: replaying it returns the recorded result and
touches nothing, so retried or duplicated requests never double count.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession

    from tinysteps.core.database import Store
    from tinysteps.core.models import Child, ChildProgress

from sqlalchemy import select

from tinysteps.analytics import AnalyticsSink
from tinysteps.config import settings
from tinysteps.core.enums import AnalyticsEventName, RewardType
from tinysteps.core.exceptions import NotFoundError
from tinysteps.core.models import (
    ChildUnitCompletion,
    DailyLesson,
    LearningSession,
    Reward,
)
from tinysteps.core.validation import clean_activity_ids
from tinysteps.curriculum import generate_daily_lesson, lesson_day
from tinysteps.learning.identity import IdentityLedger
from tinysteps.learning.milestones import compute_milestones

logger = logging.getLogger(__name__)


@dataclass
class SessionCompletion:
    """Outcome of completing a session.

    Attributes:
        session_id: Completed session
        completed_at: When the session was first completed
        reward: Reward minted by the first completion
        progress: Updated progress, None on an idempotent replay
        idempotent: True when the session had already been completed
    """

    session_id: str
    completed_at: datetime
    reward: Reward
    progress: ChildProgress | None = None
    idempotent: bool = False


@dataclass
class ProgressView:
    """Progress snapshot plus the most recent rewards, oldest first."""

    progress: ChildProgress
    rewards: list[Reward]


def reward_for_completion(child: Child) -> tuple[RewardType, str]:
    """Choose the reward minted for a completed session.

    Every completion currently earns the same sticker.
    """
    return RewardType.STICKER, settings.REWARD_LABEL


class SessionEngine:
    """Runs lessons and sessions for one unit of work."""

    def __init__(self, db: AsyncSession, store: Store):
        """Initialize the engine.

        Args:
            db: Database session for this unit of work
            store: Store providing ids and the clock
        """
        self.db = db
        self.store = store
        self.identity = IdentityLedger(db, store)
        self.analytics = AnalyticsSink(db, store)

    def today(self) -> date:
        return lesson_day(self.store.now())

    # ------------------------------------------------------------------
    # Lessons
    # ------------------------------------------------------------------

    async def _cached_lesson(self, child_id: str, day: date) -> DailyLesson | None:
        result = await self.db.execute(
            select(DailyLesson).where(
                DailyLesson.child_id == child_id, DailyLesson.lesson_date == day
            )
        )
        return result.scalar_one_or_none()

    async def _resolve_today_lesson(self, child: Child) -> DailyLesson:
        """Return today's cached lesson, generating and caching it if absent."""
        day = self.today()
        lesson = await self._cached_lesson(child.id, day)
        if lesson is None:
            lesson = generate_daily_lesson(
                child,
                day,
                self.store.next_id,
                estimated_minutes=settings.LESSON_ESTIMATED_MINUTES,
            )
            self.db.add(lesson)
            logger.info(f"Generated lesson {lesson.id} ({lesson.unit_id}) for {child.id} on {day}")
        return lesson

    async def get_today_lesson(self, parent_id: str, child_id: str) -> DailyLesson:
        """Fetch today's lesson for a child, identical on every call that day.

        Raises:
            NotFoundError: If the child is not owned by ``parent_id``
        """
        child = await self.identity.get_child(parent_id, child_id)
        lesson = await self._resolve_today_lesson(child)
        await self.db.commit()
        return lesson

    # ------------------------------------------------------------------
    # Sessions
    # ------------------------------------------------------------------

    async def start_session(
        self, parent_id: str, child_id: str
    ) -> tuple[LearningSession, DailyLesson]:
        """Start a new session bound to today's lesson.

        May be called many times a day; every session shares the day's lesson.

        Raises:
            NotFoundError: If the child is not owned by ``parent_id``
        """
        child = await self.identity.get_child(parent_id, child_id)
        lesson = await self._resolve_today_lesson(child)

        session = LearningSession(
            id=self.store.next_id("session"),
            parent_id=parent_id,
            child_id=child.id,
            lesson_id=lesson.id,
            started_at=self.store.now(),
            completed_at=None,
            completed_activity_ids=[],
            reward=None,
        )
        self.db.add(session)

        self.analytics.log_event(
            AnalyticsEventName.LESSON_STARTED,
            parent_id=parent_id,
            child_id=child.id,
            metadata={"session_id": session.id, "lesson_id": lesson.id},
        )
        await self.db.commit()

        logger.info(f"Session {session.id} started for {child.id} on lesson {lesson.id}")
        return session, lesson

    async def _owned_session(self, parent_id: str, child: Child, session_id: Any) -> LearningSession:
        session = None
        if isinstance(session_id, str) and session_id:
            session = await self.db.get(LearningSession, session_id)
        if session is None or session.parent_id != parent_id or session.child_id != child.id:
            raise NotFoundError("Session not found.")
        return session

    async def complete_session(
        self,
        parent_id: str,
        child_id: str,
        session_id: Any,
        completed_activity_ids: Any = None,
    ) -> SessionCompletion:
        """Complete a session exactly once.

        First completion records the activities, mints a reward, bumps the
        progress counters and emits events. Any later call returns the
        recorded completion with ``idempotent=True`` and changes nothing.

        Raises:
            NotFoundError: If the child or session is not owned by ``parent_id``
        """
        child = await self.identity.get_child(parent_id, child_id)
        session = await self._owned_session(parent_id, child, session_id)

        if session.completed_at is not None and session.reward is not None:
            logger.info(f"Session {session.id} already completed, replaying result")
            return SessionCompletion(
                session_id=session.id,
                completed_at=session.completed_at,
                reward=session.reward,
                idempotent=True,
            )

        activity_ids = clean_activity_ids(completed_activity_ids)
        completed_at = self.store.now()
        todays_lesson = await self._cached_lesson(child.id, lesson_day(completed_at))

        reward_type, label = reward_for_completion(child)
        reward = Reward(
            id=self.store.next_id("reward"),
            child_id=child.id,
            type=reward_type,
            label=label,
            earned_at=completed_at,
        )
        child.rewards.append(reward)

        session.completed_activity_ids = activity_ids
        session.completed_at = completed_at
        session.reward = reward

        progress = child.progress
        progress.sessions_completed += 1
        progress.last_active_at = completed_at

        # Set semantics: replaying the same unit does not count twice
        if todays_lesson is not None and todays_lesson.unit_id not in child.completed_unit_ids:
            child.completed_units.append(
                ChildUnitCompletion(child_id=child.id, unit_id=todays_lesson.unit_id)
            )
        progress.units_completed = len(child.completed_units)
        progress.milestone_by_skill = compute_milestones(progress.sessions_completed)

        for activity_id in activity_ids:
            self.analytics.log_event(
                AnalyticsEventName.ACTIVITY_COMPLETED,
                parent_id=parent_id,
                child_id=child.id,
                metadata={"session_id": session.id, "activity_id": activity_id},
            )
        self.analytics.log_event(
            AnalyticsEventName.LESSON_COMPLETED,
            parent_id=parent_id,
            child_id=child.id,
            metadata={"session_id": session.id, "lesson_id": session.lesson_id},
        )
        self.analytics.log_event(
            AnalyticsEventName.REWARD_EARNED,
            parent_id=parent_id,
            child_id=child.id,
            metadata={"reward_id": reward.id, "reward_type": reward.type},
        )
        await self.db.commit()

        logger.info(
            f"Session {session.id} completed for {child.id}: "
            f"{progress.sessions_completed} sessions, {progress.units_completed} units"
        )
        return SessionCompletion(
            session_id=session.id,
            completed_at=completed_at,
            reward=reward,
            progress=progress,
        )

    # ------------------------------------------------------------------
    # Progress
    # ------------------------------------------------------------------

    async def get_progress(self, parent_id: str, child_id: str) -> ProgressView:
        """Progress snapshot with the most recent rewards for the dashboard.

        Raises:
            NotFoundError: If the child is not owned by ``parent_id``
        """
        child = await self.identity.get_child(parent_id, child_id)

        self.analytics.log_event(
            AnalyticsEventName.DASHBOARD_VIEWED, parent_id=parent_id, child_id=child.id
        )
        await self.db.commit()

        return ProgressView(
            progress=child.progress,
            rewards=list(child.rewards[-settings.RECENT_REWARDS_LIMIT :]),
        )
