"""
Redis-backed cache of per-user projections
"""

from __future__ import annotations

import json
import logging
from functools import lru_cache
from typing import Any, Dict, Optional

from redis import Redis
from redis.exceptions import RedisError

from app.core.config import settings

logger = logging.getLogger(__name__)


class CacheError(Exception):
    """Raised when a cache operation fails."""


class UserCache:
    """Caches user projections under ``user-<id>`` keys with a TTL.

    Entries are invalidated when something the projection depends on
    changes. A failed invalidation leaves the entry stale until it
    expires, so the TTL bounds the staleness window.
    """

    def __init__(self, client: Redis, ttl_seconds: Optional[int] = None):
        if ttl_seconds is None:
            ttl_seconds = settings.USER_CACHE_TTL_SECONDS
        # SETEX rejects non-positive expiries
        if ttl_seconds < 1:
            raise ValueError(f"ttl_seconds must be positive, got {ttl_seconds}")
        self.client = client
        self.ttl_seconds = ttl_seconds

    @staticmethod
    def key(user_id: int) -> str:
        return f"user-{user_id}"

    def get(self, user_id: int) -> Optional[Dict[str, Any]]:
        key = self.key(user_id)
        try:
            raw = self.client.get(key)
        except RedisError as e:
            logger.error(f"Redis GET failed for key {key}: {e}")
            raise CacheError(f"Failed to get cache key: {key}") from e
        logger.debug(f"Cache get: {key} hit={raw is not None}")
        return json.loads(raw) if raw is not None else None

    def set(self, user_id: int, value: Dict[str, Any]) -> None:
        key = self.key(user_id)
        try:
            self.client.setex(key, self.ttl_seconds, json.dumps(value, default=str))
        except RedisError as e:
            logger.error(f"Redis SET failed for key {key}: {e}")
            raise CacheError(f"Failed to set cache key: {key}") from e
        logger.debug(f"Cache set: {key} (TTL: {self.ttl_seconds}s)")

    def delete(self, user_id: int) -> None:
        key = self.key(user_id)
        try:
            self.client.delete(key)
        except RedisError as e:
            logger.error(f"Redis DELETE failed for key {key}: {e}")
            raise CacheError(f"Failed to delete cache key: {key}") from e
        logger.debug(f"Cache delete: {key}")


@lru_cache(maxsize=1)
def get_user_cache() -> Optional[UserCache]:
    """Return the process-wide user cache, or None when caching is disabled."""
    if not settings.CACHE_ENABLED:
        return None
    client = Redis.from_url(settings.REDIS_URL, decode_responses=True, socket_timeout=1)
    logger.info("Redis user cache initialized")
    return UserCache(client)


def invalidate_user(cache: Optional[UserCache], user_id: int) -> bool:
    """Best-effort removal of a user's cached projection.

    The write that triggered the invalidation has already committed, so a
    cache failure is logged and reported as False instead of raised.
    """
    if cache is None:
        return True
    try:
        cache.delete(user_id)
    except CacheError as e:
        logger.warning(f"User cache invalidation failed for user {user_id}, entry stays stale until TTL: {e}")
        return False
    return True
