"""
Analytics Schemas
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from tinysteps.core.enums import AnalyticsEventName


class AnalyticsEventSchema(BaseModel):
    """Analytics event response."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    name: AnalyticsEventName
    parent_id: str | None = None
    child_id: str | None = None
    metadata: dict[str, Any] | None = Field(None, validation_alias="event_metadata")
    created_at: datetime
