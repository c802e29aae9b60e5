"""
Curriculum Catalog

Static, ordered curriculum data plus the deterministic selection functions
that read it. Everything here is immutable and safe to share.
"""

from __future__ import annotations

from dataclasses import dataclass

from tinysteps.core.enums import ActivityType, PlacementTrack, SkillArea


@dataclass(frozen=True)
class CurriculumUnit:
    """Themed vocabulary set with its phonics sound family.

    Attributes:
        id: Stable unit identifier (u01-u12)
        theme: Display theme, also used in prompts and asset ids
        sound_family: Letter sound practised alongside the theme
        vocabulary: Ordered words cycled through by lesson generation
    """

    id: str
    theme: str
    sound_family: str
    vocabulary: tuple[str, ...]


@dataclass(frozen=True)
class ActivityTemplate:
    """Blueprint for one lesson activity."""

    type: ActivityType
    target_skill: SkillArea
    instruction: str


CURRICULUM_UNITS: tuple[CurriculumUnit, ...] = (
    CurriculumUnit("u01", "Family", "m", ("mama", "dada", "baby", "home", "hug", "love", "family", "hello", "bye", "smile")),
    CurriculumUnit("u02", "Colors", "r", ("red", "blue", "yellow", "green", "orange", "pink", "purple", "black", "white", "brown")),
    CurriculumUnit("u03", "Animals", "c", ("cat", "dog", "duck", "bird", "fish", "lion", "tiger", "rabbit", "bear", "monkey")),
    CurriculumUnit("u04", "Food", "b", ("bread", "banana", "apple", "rice", "milk", "egg", "soup", "carrot", "cake", "water")),
    CurriculumUnit("u05", "Body", "h", ("hand", "head", "eyes", "ears", "nose", "mouth", "feet", "arms", "legs", "hair")),
    CurriculumUnit("u06", "Toys", "t", ("toy", "ball", "car", "doll", "blocks", "kite", "puzzle", "drum", "book", "train")),
    CurriculumUnit("u07", "Home", "s", ("sofa", "table", "bed", "chair", "door", "window", "kitchen", "bath", "room", "lamp")),
    CurriculumUnit("u08", "Routines", "w", ("wake", "wash", "eat", "play", "read", "nap", "walk", "clean", "pack", "sleep")),
    CurriculumUnit("u09", "Numbers", "n", ("one", "two", "three", "four", "five", "six", "seven", "eight", "nine", "ten")),
    CurriculumUnit("u10", "Weather", "s", ("sunny", "rainy", "cloudy", "windy", "storm", "hot", "cold", "wet", "dry", "rainbow")),
    CurriculumUnit("u11", "Transport", "v", ("bus", "car", "train", "bike", "boat", "plane", "van", "taxi", "road", "wheel")),
    CurriculumUnit("u12", "Feelings", "f", ("happy", "sad", "angry", "scared", "excited", "tired", "calm", "kind", "proud", "shy")),
)  # fmt: skip

# 70% listening/comprehension, 20% phonics, 10% speaking imitation.
ACTIVITY_PLAN: tuple[ActivityTemplate, ...] = (
    ActivityTemplate(ActivityType.LISTEN_TAP, SkillArea.LISTENING, "Listen and tap the picture."),
    ActivityTemplate(ActivityType.MATCH_PICTURE, SkillArea.LISTENING, "Match the word to the picture."),
    ActivityTemplate(ActivityType.LISTEN_TAP, SkillArea.VOCABULARY, "Tap the word you hear."),
    ActivityTemplate(ActivityType.LETTER_SOUND, SkillArea.PHONICS, "Pick the letter sound."),
    ActivityTemplate(ActivityType.REPEAT_AUDIO, SkillArea.LISTENING, "Listen and repeat the word."),
)  # fmt: skip

ACTIVITIES_PER_LESSON = 5

AVATAR_IDS: tuple[str, ...] = ("rocket", "tiger", "whale", "koala", "panda", "owl")


def placement_track(age_months: int) -> PlacementTrack:
    """Assign the age-banded entry track.

    Examples:
        >>> placement_track(41)
        <PlacementTrack.STARTER_A: 'starter_a'>
        >>> placement_track(42)
        <PlacementTrack.STARTER_B: 'starter_b'>
        >>> placement_track(54)
        <PlacementTrack.STARTER_C: 'starter_c'>
    """
    if age_months <= 41:
        return PlacementTrack.STARTER_A
    if age_months <= 53:
        return PlacementTrack.STARTER_B
    return PlacementTrack.STARTER_C


def unit_for_session(sessions_completed: int) -> CurriculumUnit:
    """Pick the unit by round-robin over completed sessions, not calendar days."""
    return CURRICULUM_UNITS[sessions_completed % len(CURRICULUM_UNITS)]


def speech_prompt(text: str) -> str:
    """Reference to synthesized speech for ``text``."""
    return f"speech:{text}"
