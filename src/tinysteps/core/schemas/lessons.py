"""
Lesson and Session Schemas

Request/response models for daily lessons and the session lifecycle.
"""

from datetime import date, datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from tinysteps.core.enums import ActivityType, SkillArea

from .children import ProgressSchema, RewardSchema


class LessonActivitySchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    type: ActivityType
    prompt_audio_url: str
    asset_ids: list[str]
    target_skill: SkillArea


class DailyLessonSchema(BaseModel):
    """Daily lesson response."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    child_id: str
    unit_id: str
    lesson_date: date
    activities: list[LessonActivitySchema]
    estimated_minutes: int


class SessionStartResponse(BaseModel):
    """Response after starting a session."""

    session_id: str
    lesson_id: str
    activities: list[LessonActivitySchema]


class SessionCompleteRequest(BaseModel):
    """Request schema for completing a session.

    Fields are loose. A non-string session id answers 404 and non-string
    activity ids are dropped by the engine rather than rejected.
    """

    session_id: Any = None
    completed_activity_ids: Any = Field(default_factory=list)

    @classmethod
    def from_body(cls, body: Any) -> "SessionCompleteRequest":
        """Build from a raw JSON body; anything but an object counts as empty."""
        return cls.model_validate(body if isinstance(body, dict) else {})


class SessionCompleteResponse(BaseModel):
    """Completion outcome. ``progress`` is omitted on an idempotent replay."""

    model_config = ConfigDict(from_attributes=True)

    session_id: str
    completed_at: datetime
    reward: RewardSchema
    progress: ProgressSchema | None = None
    idempotent: bool = False
