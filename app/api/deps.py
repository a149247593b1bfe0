"""
FastAPI dependencies wiring handlers to the storage facade and services
"""

from functools import lru_cache
from typing import Optional

from fastapi import Depends, Request

from app.core.cache import UserCache, get_user_cache
from app.core.db import SessionLocal
from app.schemas.common import PaginatedQuery
from app.services.card_service import CardService
from app.services.checkin_service import CheckInService
from app.services.event_service import EventService
from app.services.pagination import parse_paginated_query
from app.services.storage import Storage, new_storage
from app.services.user_service import UserService


@lru_cache(maxsize=1)
def get_storage() -> Storage:
    return new_storage(SessionLocal)


def get_cache() -> Optional[UserCache]:
    return get_user_cache()


def get_paginated_query(request: Request) -> PaginatedQuery:
    """Fresh descriptor per request, parsed from the raw query string."""
    return parse_paginated_query(request.query_params)


def get_event_service(
    storage: Storage = Depends(get_storage),
    cache: Optional[UserCache] = Depends(get_cache),
) -> EventService:
    return EventService(storage, cache)


def get_checkin_service(
    storage: Storage = Depends(get_storage),
    cache: Optional[UserCache] = Depends(get_cache),
) -> CheckInService:
    return CheckInService(storage, cache)


def get_card_service(storage: Storage = Depends(get_storage)) -> CardService:
    return CardService(storage)


def get_user_service(
    storage: Storage = Depends(get_storage),
    cache: Optional[UserCache] = Depends(get_cache),
) -> UserService:
    return UserService(storage, cache)
