"""
Milestone Policy

Per-skill competency stage as a pure step function of completed sessions.
"""

from tinysteps.core.enums import MilestoneLevel, SkillArea

# Sessions needed to reach (emerging, developing, established)
MILESTONE_THRESHOLDS: dict[SkillArea, tuple[int, int, int]] = {
    SkillArea.LISTENING: (2, 5, 8),
    SkillArea.PHONICS: (3, 6, 10),
    SkillArea.VOCABULARY: (2, 5, 9),
}


def milestone_for(skill: SkillArea, sessions_completed: int) -> MilestoneLevel:
    """Return the level reached in ``skill`` after ``sessions_completed`` sessions.

    Examples:
        >>> milestone_for(SkillArea.PHONICS, 2)
        <MilestoneLevel.NOT_STARTED: 'not_started'>
        >>> milestone_for(SkillArea.LISTENING, 5)
        <MilestoneLevel.DEVELOPING: 'developing'>
    """
    emerging, developing, established = MILESTONE_THRESHOLDS[skill]
    if sessions_completed >= established:
        return MilestoneLevel.ESTABLISHED
    if sessions_completed >= developing:
        return MilestoneLevel.DEVELOPING
    if sessions_completed >= emerging:
        return MilestoneLevel.EMERGING
    return MilestoneLevel.NOT_STARTED


def compute_milestones(sessions_completed: int) -> dict[str, str]:
    """Full milestone map for every skill area, recomputed from scratch."""
    return {
        skill.value: milestone_for(skill, sessions_completed).value for skill in SkillArea
    }
