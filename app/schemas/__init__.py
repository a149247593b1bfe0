"""
Pydantic schemas package
"""

from .common import *
from .user import *
from .card_template import *
from .guest import *
from .event import *
from .card import *

__all__ = [
    "StandardResponse",
    "ErrorResponse",
    "PaginatedQuery",
    "UserCreate",
    "UserRead",
    "UserSummary",
    "UserProfile",
    "CardTemplateCreate",
    "CardTemplateUpdate",
    "CardTemplateRead",
    "CardTemplateSummary",
    "GuestStatus",
    "GuestType",
    "GuestDraft",
    "GuestCreate",
    "GuestUpdate",
    "GuestRead",
    "CardSummary",
    "CheckInResult",
    "EventCreate",
    "EventWithGuestsCreate",
    "EventUpdate",
    "EventRead",
    "CardCreate",
    "CardUpdate",
    "CardRead",
    "GuestSummary",
]
