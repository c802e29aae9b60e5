"""Pydantic schemas for API validation."""

from .children import (
    ChildCreate,
    ChildSchema,
    DeletionRequestSchema,
    ProgressDashboardSchema,
    ProgressSchema,
    RewardSchema,
)
from .engagement import AnalyticsEventSchema
from .lessons import (
    DailyLessonSchema,
    LessonActivitySchema,
    SessionCompleteRequest,
    SessionCompleteResponse,
    SessionStartResponse,
)
from .users import AuthResponse, ConsentCreate, ConsentSchema, ParentIdentity

__all__ = [
    # Users
    "ParentIdentity",
    "AuthResponse",
    "ConsentCreate",
    "ConsentSchema",
    # Children
    "ChildCreate",
    "ChildSchema",
    "RewardSchema",
    "ProgressSchema",
    "ProgressDashboardSchema",
    "DeletionRequestSchema",
    # Lessons
    "LessonActivitySchema",
    "DailyLessonSchema",
    "SessionStartResponse",
    "SessionCompleteRequest",
    "SessionCompleteResponse",
    # Engagement
    "AnalyticsEventSchema",
]
