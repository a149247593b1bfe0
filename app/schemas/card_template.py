"""
Card template Pydantic schemas
"""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field, field_validator

from .common import reject_explicit_null

class CardTemplateCreate(BaseModel):
    """Schema for creating a card template"""
    image_path: str = Field(..., min_length=1, max_length=500)

class CardTemplateUpdate(BaseModel):
    """Schema for updating a card template"""
    image_path: Optional[str] = Field(None, min_length=1, max_length=500)

    @field_validator("image_path")
    @classmethod
    def image_path_not_null(cls, value):
        return reject_explicit_null(value)

class CardTemplateRead(BaseModel):
    """Card template as stored"""
    id: int
    image_path: str
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True

class CardTemplateSummary(BaseModel):
    """Template projection embedded in event listings"""
    image_path: str
