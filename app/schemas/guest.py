"""
Guest-related Pydantic schemas
"""

from datetime import datetime
from enum import Enum
from typing import Optional
from pydantic import BaseModel, EmailStr, Field, field_validator

from .common import reject_explicit_null

class GuestStatus(str, Enum):
    INVITED = "invited"
    CONFIRMED = "confirmed"
    DECLINED = "declined"
    CHECKED_IN = "checked_in"

class GuestType(str, Enum):
    REGULAR = "regular"
    VIP = "vip"
    FAMILY = "family"

class GuestDraft(BaseModel):
    """Guest fields supplied by the client, before the event is known"""
    name: str = Field(..., min_length=1, max_length=255)
    email: Optional[EmailStr] = None
    phone_number: str = Field("", max_length=50)
    status: GuestStatus = GuestStatus.INVITED
    type: GuestType = GuestType.REGULAR

    class Config:
        use_enum_values = True

class GuestCreate(GuestDraft):
    """Schema for creating a guest"""
    event_id: int

class GuestUpdate(BaseModel):
    """Schema for updating a guest; event and card link are not editable here"""
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    email: Optional[EmailStr] = None
    phone_number: Optional[str] = Field(None, max_length=50)
    status: Optional[GuestStatus] = None
    type: Optional[GuestType] = None

    @field_validator("name", "phone_number", "status", "type")
    @classmethod
    def required_columns_not_null(cls, value):
        return reject_explicit_null(value)

    class Config:
        use_enum_values = True

class CardSummary(BaseModel):
    """Card projection embedded in guest listings"""
    image_path: str

class GuestRead(BaseModel):
    """Guest as stored"""
    id: int
    name: str
    email: Optional[str] = None
    phone_number: str
    status: GuestStatus
    type: GuestType
    card_id: Optional[int] = None
    event_id: int
    created_at: datetime
    updated_at: datetime
    card: Optional[CardSummary] = None

    class Config:
        from_attributes = True
        use_enum_values = True

class CheckInResult(BaseModel):
    """Outcome of scanning a guest's card at the door"""
    guest: GuestRead
    scanned_count: int
    was_already_checked_in: bool
