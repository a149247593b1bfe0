"""
Card-related Pydantic schemas
"""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field, field_validator

from .common import reject_explicit_null

class CardCreate(BaseModel):
    """Schema for creating a card"""
    event_id: int
    image_path: str = Field(..., min_length=1, max_length=500)
    guest_id: Optional[int] = None
    card_template_id: Optional[int] = None

class CardUpdate(BaseModel):
    """Schema for updating a card"""
    image_path: Optional[str] = Field(None, min_length=1, max_length=500)
    # null unassigns
    guest_id: Optional[int] = None
    card_template_id: Optional[int] = None

    @field_validator("image_path")
    @classmethod
    def image_path_not_null(cls, value):
        return reject_explicit_null(value)

class GuestSummary(BaseModel):
    """Guest projection embedded in card listings"""
    name: str
    phone_number: str

class CardRead(BaseModel):
    """Card as stored"""
    id: int
    image_path: str
    event_id: int
    guest_id: Optional[int] = None
    card_template_id: Optional[int] = None
    created_at: datetime
    updated_at: datetime
    guest: Optional[GuestSummary] = None

    class Config:
        from_attributes = True
