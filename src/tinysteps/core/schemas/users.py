"""
Parent Schemas

Pydantic models for signup, login and consent requests/responses.
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ParentIdentity(BaseModel):
    """Signup/login payload. At least one of email or phone is required."""

    email: Any = Field(None, description="Email address, ignored unless a string")
    phone: Any = Field(None, description="Phone number, ignored unless a string")


class AuthResponse(BaseModel):
    """Bearer token issued for a parent."""

    parent_id: str
    token: str


class ConsentCreate(BaseModel):
    """Schema for recording parental consent."""

    accepted: bool | None = Field(None, strict=True, description="Must be true")
    market: Any = Field(None, description="Market, e.g. Singapore; defaults when not a string")


class ConsentSchema(BaseModel):
    """Consent record response."""

    model_config = ConfigDict(from_attributes=True)

    parent_id: str
    accepted: bool
    market: str
    accepted_at: datetime
