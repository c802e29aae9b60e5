"""
Lesson Generation Service

Builds a child's daily lesson from their progress and the curriculum catalog.
Generation is deterministic in content but mints fresh ids on every call;
caching one lesson per child per day is the session engine's job.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import UTC, date, datetime
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from tinysteps.core.models import Child

from tinysteps.core.models import DailyLesson, LessonActivity
from tinysteps.curriculum.catalog import (
    ACTIVITIES_PER_LESSON,
    ACTIVITY_PLAN,
    speech_prompt,
    unit_for_session,
)

DEFAULT_ESTIMATED_MINUTES = 9


def lesson_day(moment: datetime) -> date:
    """Calendar day (UTC) a lesson belongs to."""
    if moment.tzinfo is not None:
        moment = moment.astimezone(UTC)
    return moment.date()


def pick_word(words: tuple[str, ...], cursor: int) -> str:
    return words[cursor % len(words)]


def generate_daily_lesson(
    child: Child,
    lesson_date: date,
    next_id: Callable[[str], str],
    estimated_minutes: int = DEFAULT_ESTIMATED_MINUTES,
) -> DailyLesson:
    """Generate a new (unsaved) lesson for ``child``.

    Args:
        child: Child whose progress drives unit and word selection
        lesson_date: Day the lesson is cached under
        next_id: Id factory, called with "lesson" and "act"
        estimated_minutes: Duration attached to the lesson

    Returns:
        DailyLesson with its ordered activities, not yet added to a session
    """
    sessions = child.progress.sessions_completed
    unit = unit_for_session(sessions)

    activities = []
    for index, template in enumerate(ACTIVITY_PLAN[:ACTIVITIES_PER_LESSON]):
        word = pick_word(unit.vocabulary, sessions + index)
        prompt = f"{template.instruction} Theme {unit.theme}. Word {word}."
        activities.append(
            LessonActivity(
                id=next_id("act"),
                position=index,
                type=template.type,
                prompt_audio_url=speech_prompt(prompt),
                asset_ids=[f"image:{word}", f"theme:{unit.theme.lower()}"],
                target_skill=template.target_skill,
            )
        )

    return DailyLesson(
        id=next_id("lesson"),
        child_id=child.id,
        lesson_date=lesson_date,
        unit_id=unit.id,
        estimated_minutes=estimated_minutes,
        activities=activities,
    )
