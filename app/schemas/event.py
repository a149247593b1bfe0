"""
Event-related Pydantic schemas
"""

from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, Field, field_validator

from .card_template import CardTemplateSummary
from .common import reject_explicit_null
from .guest import GuestDraft
from .user import UserSummary

class EventCreate(BaseModel):
    """Schema for creating an event"""
    name: str = Field(..., min_length=1, max_length=100)
    date: datetime
    location: str = Field("", max_length=255)
    card_template_id: Optional[int] = None
    user_id: int

class EventWithGuestsCreate(EventCreate):
    """Event plus its initial guest list, created atomically"""
    guests: List[GuestDraft] = []

class EventUpdate(BaseModel):
    """Schema for updating an event"""
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    date: Optional[datetime] = None
    location: Optional[str] = Field(None, max_length=255)
    card_template_id: Optional[int] = None

    @field_validator("name", "date", "location")
    @classmethod
    def required_columns_not_null(cls, value):
        return reject_explicit_null(value)

class EventRead(BaseModel):
    """Event as stored, with read-only listing projections"""
    id: int
    name: str
    date: datetime
    location: str
    scanned_count: int
    card_template_id: Optional[int] = None
    user_id: int
    created_at: datetime
    updated_at: datetime
    user: Optional[UserSummary] = None
    card_template: Optional[CardTemplateSummary] = None

    class Config:
        from_attributes = True
