"""
TinySteps SQLAlchemy Models

All state lives in an in-memory database owned by one Store.
"""

from .base import Base, PrefixedIdMixin, TimestampMixin, UTCDateTime
from .children import Child, ChildProgress, ChildUnitCompletion, Reward
from .engagement import AnalyticsEvent, DeletionRequest
from .lessons import DailyLesson, LearningSession, LessonActivity
from .users import AuthToken, Consent, Parent

__all__ = [
    # Base
    "Base",
    "PrefixedIdMixin",
    "TimestampMixin",
    "UTCDateTime",
    # Users
    "Parent",
    "Consent",
    "AuthToken",
    # Children
    "Child",
    "ChildProgress",
    "ChildUnitCompletion",
    "Reward",
    # Lessons
    "DailyLesson",
    "LessonActivity",
    "LearningSession",
    # Engagement
    "AnalyticsEvent",
    "DeletionRequest",
]
