"""
Closed vocabularies shared by models, schemas and services.
"""

from enum import StrEnum


class SkillArea(StrEnum):
    LISTENING = "listening"
    PHONICS = "phonics"
    VOCABULARY = "vocabulary"


class PlacementTrack(StrEnum):
    STARTER_A = "starter_a"
    STARTER_B = "starter_b"
    STARTER_C = "starter_c"


class ActivityType(StrEnum):
    LISTEN_TAP = "listen_tap"
    MATCH_PICTURE = "match_picture"
    LETTER_SOUND = "letter_sound"
    REPEAT_AUDIO = "repeat_audio"
    TRACE_TAP = "trace_tap"


class MilestoneLevel(StrEnum):
    """Competency stages, declared in ascending order."""

    NOT_STARTED = "not_started"
    EMERGING = "emerging"
    DEVELOPING = "developing"
    ESTABLISHED = "established"


class RewardType(StrEnum):
    STICKER = "sticker"
    STAR = "star"
    BADGE = "badge"


class SessionState(StrEnum):
    STARTED = "started"
    COMPLETED = "completed"


class DeletionStatus(StrEnum):
    QUEUED = "queued"


class AnalyticsEventName(StrEnum):
    PARENT_SIGNUP_COMPLETED = "parent_signup_completed"
    CONSENT_ACCEPTED = "consent_accepted"
    CHILD_PROFILE_CREATED = "child_profile_created"
    PLACEMENT_COMPLETED = "placement_completed"
    LESSON_STARTED = "lesson_started"
    ACTIVITY_COMPLETED = "activity_completed"
    LESSON_COMPLETED = "lesson_completed"
    REWARD_EARNED = "reward_earned"
    DASHBOARD_VIEWED = "dashboard_viewed"
    DELETION_REQUESTED = "deletion_requested"
