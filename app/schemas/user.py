"""
User-related Pydantic schemas
"""

from datetime import datetime
from pydantic import BaseModel, EmailStr, Field

class UserCreate(BaseModel):
    """Schema for creating a user"""
    username: str = Field(..., min_length=1, max_length=100)
    email: EmailStr

class UserRead(BaseModel):
    """User as stored"""
    id: int
    username: str
    email: str
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True

class UserSummary(BaseModel):
    """Owner projection embedded in event listings"""
    username: str

class UserProfile(BaseModel):
    """Cached per-user projection over the events the user owns"""
    user: UserRead
    event_count: int
    scanned_total: int
