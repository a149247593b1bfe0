"""
Event write paths: owner checks, atomic creation with guests, and cache
invalidation after updates
"""

import logging
from typing import List, Optional, Tuple

from sqlalchemy.orm import Session

from app.core.cache import UserCache, invalidate_user
from app.core.errors import NotFoundError, ValidationError
from app.schemas.event import EventCreate, EventRead, EventWithGuestsCreate
from app.schemas.guest import GuestCreate, GuestRead
from app.services.storage import Storage

logger = logging.getLogger(__name__)

class EventService:
    """Service for creating, updating and deleting events"""

    def __init__(self, storage: Storage, cache: Optional[UserCache] = None):
        self.storage = storage
        self.cache = cache

    def _require_owner(self, user_id: int, session: Session) -> None:
        try:
            self.storage.users.get_by_id(user_id, session=session)
        except NotFoundError as e:
            raise ValidationError(f"User {user_id} does not exist") from e

    def create_event(self, payload: EventCreate) -> EventRead:
        """Create an event owned by an existing user"""

        def work(session: Session) -> EventRead:
            self._require_owner(payload.user_id, session)
            return self.storage.events.create(payload, session=session)

        event = self.storage.run_in_transaction(work)
        logger.info(f"Event {event.id} created for user {event.user_id}")
        return event

    def create_event_with_guests(
        self, payload: EventWithGuestsCreate
    ) -> Tuple[EventRead, List[GuestRead]]:
        """Create an event and its initial guest list; all rows or none"""

        def work(session: Session) -> Tuple[EventRead, List[GuestRead]]:
            self._require_owner(payload.user_id, session)
            event = self.storage.events.create(payload, session=session)
            guests = [
                self.storage.guests.create(
                    GuestCreate(**draft.model_dump(), event_id=event.id), session=session
                )
                for draft in payload.guests
            ]
            return event, guests

        event, guests = self.storage.run_in_transaction(work)
        logger.info(f"Event {event.id} created with {len(guests)} guests")
        return event, guests

    def update_event(self, event: EventRead) -> EventRead:
        """Persist changes, then drop the owner's cached projection.

        The update is committed before invalidation runs; if the cache
        is unreachable the owner sees a stale entry until it expires.
        """
        updated = self.storage.events.update(event)
        invalidate_user(self.cache, updated.user_id)
        return updated

    def delete_event(self, event_id: int) -> None:
        event = self.storage.events.get_by_id(event_id)
        self.storage.events.delete(event_id)
        invalidate_user(self.cache, event.user_id)
        logger.info(f"Event {event_id} deleted")
