"""
Read-through access to cached user profiles
"""

import logging
from typing import Optional

from app.core.cache import CacheError, UserCache
from app.schemas.user import UserProfile
from app.services.storage import Storage

logger = logging.getLogger(__name__)

class UserService:
    """Service for user profile lookups"""

    def __init__(self, storage: Storage, cache: Optional[UserCache] = None):
        self.storage = storage
        self.cache = cache

    def get_profile(self, user_id: int) -> UserProfile:
        """Return the user's profile, from cache when present"""
        if self.cache is not None:
            try:
                cached = self.cache.get(user_id)
            except CacheError as e:
                logger.warning(f"Falling back to database for user {user_id}: {e}")
                cached = None
            if cached is not None:
                return UserProfile.model_validate(cached)

        user = self.storage.users.get_by_id(user_id)
        event_count, scanned_total = self.storage.events.owner_totals(user_id)
        profile = UserProfile(user=user, event_count=event_count, scanned_total=scanned_total)

        if self.cache is not None:
            try:
                self.cache.set(user_id, profile.model_dump(mode="json"))
            except CacheError as e:
                logger.warning(f"Could not cache profile for user {user_id}: {e}")

        return profile
