"""
Card issuing service

A card and the guest holding it point at each other (``cards.guest_id``
and ``guests.card_id``); every write that touches the assignment goes
through here so both sides change in one transaction.
"""

import logging
from typing import Optional

from sqlalchemy.orm import Session

from app.core.errors import NotFoundError, ValidationError
from app.schemas.card import CardCreate, CardRead
from app.schemas.guest import GuestRead
from app.services.storage import Storage

logger = logging.getLogger(__name__)

class CardService:
    """Service for issuing, reassigning and withdrawing invitation cards"""

    def __init__(self, storage: Storage):
        self.storage = storage

    def _require_guest(self, guest_id: Optional[int], event_id: int, session: Session) -> Optional[GuestRead]:
        if guest_id is None:
            return None
        try:
            guest = self.storage.guests.get_by_id(guest_id, session=session)
        except NotFoundError as e:
            raise ValidationError(f"Guest {guest_id} does not exist") from e
        if guest.event_id != event_id:
            raise ValidationError(
                f"Guest {guest.id} belongs to event {guest.event_id}, not {event_id}"
            )
        return guest

    def _link(self, guest: Optional[GuestRead], card_id: int, session: Session) -> None:
        if guest is not None:
            self.storage.guests.update(guest.model_copy(update={"card_id": card_id}), session=session)

    def issue_card(self, payload: CardCreate) -> CardRead:
        """Create a card and, when it is assigned, point the guest at it.

        The card row and the guest's card reference are written in one
        transaction so neither is visible without the other.
        """

        def work(session: Session) -> CardRead:
            guest = self._require_guest(payload.guest_id, payload.event_id, session)
            card = self.storage.cards.create(payload, session=session)
            self._link(guest, card.id, session)
            return card

        card = self.storage.run_in_transaction(work)
        logger.info(f"Card {card.id} issued for event {card.event_id}")
        return card

    def update_card(self, card: CardRead) -> CardRead:
        """Persist card changes, moving the guest link when the holder changes"""

        def work(session: Session) -> CardRead:
            current = self.storage.cards.get_by_id(card.id, session=session)
            if card.guest_id == current.guest_id:
                return self.storage.cards.update(card, session=session)

            guest = self._require_guest(card.guest_id, current.event_id, session)
            self.storage.guests.clear_card(card.id, session=session)
            updated = self.storage.cards.update(card, session=session)
            self._link(guest, card.id, session)
            return updated

        updated = self.storage.run_in_transaction(work)
        logger.info(f"Card {updated.id} updated, holder {updated.guest_id}")
        return updated

    def delete_card(self, card_id: int) -> None:
        """Delete a card and unassign it from whoever held it"""

        def work(session: Session) -> None:
            self.storage.guests.clear_card(card_id, session=session)
            self.storage.cards.delete(card_id, session=session)

        self.storage.run_in_transaction(work)
        logger.info(f"Card {card_id} deleted")
