"""
Curriculum Module

Static catalog of units and activity templates, and daily lesson generation.
"""

from .catalog import (
    ACTIVITY_PLAN,
    AVATAR_IDS,
    CURRICULUM_UNITS,
    ActivityTemplate,
    CurriculumUnit,
    placement_track,
    speech_prompt,
    unit_for_session,
)
from .lessons import generate_daily_lesson, lesson_day

__all__ = [
    "ACTIVITY_PLAN",
    "AVATAR_IDS",
    "CURRICULUM_UNITS",
    "ActivityTemplate",
    "CurriculumUnit",
    "generate_daily_lesson",
    "lesson_day",
    "placement_track",
    "speech_prompt",
    "unit_for_session",
]
