"""
Common Pydantic schemas
"""

from typing import Any, Literal, Optional
from pydantic import BaseModel, Field

from app.core.config import settings

class StandardResponse(BaseModel):
    """Standard API response"""
    success: bool
    message: str
    data: Optional[Any] = None

class ErrorResponse(BaseModel):
    """Error response schema"""
    success: bool = False
    message: str
    error_code: Optional[str] = None
    details: Optional[Any] = None

class PaginatedQuery(BaseModel):
    """Pagination, ordering and search parameters for one listing request"""
    limit: int = Field(settings.PAGINATION_DEFAULT_LIMIT, ge=0, le=settings.PAGINATION_MAX_LIMIT)
    offset: int = Field(0, ge=0)
    sort: Literal["asc", "desc"] = "desc"
    search: str = ""

    class Config:
        frozen = True

def reject_explicit_null(value: Any) -> Any:
    """Partial updates may omit a required column but never null it"""
    if value is None:
        raise ValueError("must not be null")
    return value
