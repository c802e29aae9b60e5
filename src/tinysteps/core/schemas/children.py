"""
Child Schemas

Pydantic models for child profiles, progress and rewards.
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from tinysteps.core.enums import DeletionStatus, MilestoneLevel, PlacementTrack, RewardType, SkillArea


class ChildCreate(BaseModel):
    """Schema for creating a child profile.

    Fields are loose. Required-field and range checks run in the ledger
    after the consent check, so a parent without consent gets the same
    error whatever the payload.
    """

    display_name: Any = Field(None, description="Required, 1-100 characters")
    age_months: Any = Field(None, description="Age in months (36-71)")
    home_language: Any = Field(None, description="Required")
    avatar_id: Any = Field(None, description="Unknown ids fall back to the first avatar")

    @classmethod
    def from_body(cls, body: Any) -> "ChildCreate":
        """Build from a raw JSON body; anything but an object counts as empty."""
        return cls.model_validate(body if isinstance(body, dict) else {})


class ChildSchema(BaseModel):
    """Child profile response."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    display_name: str
    age_months: int
    home_language: str
    avatar_id: str
    placement_track: PlacementTrack
    created_at: datetime


class RewardSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    type: RewardType
    label: str
    earned_at: datetime


class ProgressSchema(BaseModel):
    """Progress snapshot response."""

    model_config = ConfigDict(from_attributes=True)

    child_id: str
    sessions_completed: int
    units_completed: int
    milestone_by_skill: dict[SkillArea, MilestoneLevel]
    last_active_at: datetime | None = None


class ProgressDashboardSchema(ProgressSchema):
    """Progress snapshot with the most recent rewards."""

    rewards: list[RewardSchema]


class DeletionRequestSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    child_id: str
    parent_id: str
    status: DeletionStatus
    requested_at: datetime
