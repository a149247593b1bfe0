"""
Guest check-in service
"""

import logging
from typing import Optional

from sqlalchemy.orm import Session

from app.core.cache import UserCache, invalidate_user
from app.schemas.guest import CheckInResult
from app.services.storage import Storage

logger = logging.getLogger(__name__)

class CheckInService:
    """Service for handling guest check-ins when a card is scanned"""

    def __init__(self, storage: Storage, cache: Optional[UserCache] = None):
        self.storage = storage
        self.cache = cache

    def check_in_guest(self, guest_id: int) -> CheckInResult:
        """Mark the guest checked in and count the scan on the event.

        Both writes share one transaction. Scanning a guest who is already
        checked in reports it and leaves the counter alone; only the scan
        whose conditional status update changed the row counts.
        """

        def work(session: Session):
            was_checked_in = not self.storage.guests.mark_checked_in(guest_id, session=session)
            guest = self.storage.guests.get_by_id(guest_id, session=session)

            if not was_checked_in:
                self.storage.events.increment_scanned_count(guest.event_id, session=session)

            event = self.storage.events.get_by_id(guest.event_id, session=session)
            return guest, event, was_checked_in

        guest, event, was_checked_in = self.storage.run_in_transaction(work)

        if not was_checked_in:
            invalidate_user(self.cache, event.user_id)
            logger.info(f"Guest {guest.id} checked in to event {event.id}")

        return CheckInResult(
            guest=guest,
            scanned_count=event.scanned_count,
            was_already_checked_in=was_checked_in,
        )
