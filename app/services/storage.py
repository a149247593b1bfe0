"""
Storage facade handed to services and route handlers.

Callers depend on the protocols below, never on the concrete SQL
repositories, so tests can swap any member for a fake.
"""

from dataclasses import dataclass
from typing import Callable, List, Optional, Protocol, Tuple, TypeVar

from pydantic import BaseModel
from sqlalchemy.orm import Session, sessionmaker

from app.schemas.card import CardRead
from app.schemas.card_template import CardTemplateRead
from app.schemas.common import PaginatedQuery
from app.schemas.event import EventRead
from app.schemas.guest import GuestRead
from app.schemas.user import UserRead
from app.services.repositories import (
    CardRepository,
    CardTemplateRepository,
    EventRepository,
    GuestRepository,
    UserRepository,
)
from app.services.transactions import run_in_transaction

T = TypeVar("T")


class EventStore(Protocol):
    def get_by_id(self, entity_id: int, session: Optional[Session] = None) -> EventRead: ...
    def list(self, query: PaginatedQuery, session: Optional[Session] = None) -> List[EventRead]: ...
    def create(self, data: BaseModel, session: Optional[Session] = None) -> EventRead: ...
    def update(self, entity: EventRead, session: Optional[Session] = None) -> EventRead: ...
    def delete(self, entity_id: int, session: Optional[Session] = None) -> None: ...
    def increment_scanned_count(
        self, event_id: int, by: int = 1, session: Optional[Session] = None
    ) -> int: ...
    def owner_totals(self, user_id: int, session: Optional[Session] = None) -> Tuple[int, int]: ...


class GuestStore(Protocol):
    def get_by_id(self, entity_id: int, session: Optional[Session] = None) -> GuestRead: ...
    def list(
        self, event_id: int, query: PaginatedQuery, session: Optional[Session] = None
    ) -> List[GuestRead]: ...
    def create(self, data: BaseModel, session: Optional[Session] = None) -> GuestRead: ...
    def update(self, entity: GuestRead, session: Optional[Session] = None) -> GuestRead: ...
    def delete(self, entity_id: int, session: Optional[Session] = None) -> None: ...
    def mark_checked_in(self, guest_id: int, session: Optional[Session] = None) -> bool: ...
    def clear_card(self, card_id: int, session: Optional[Session] = None) -> int: ...


class CardStore(Protocol):
    def get_by_id(self, entity_id: int, session: Optional[Session] = None) -> CardRead: ...
    def list(self, query: PaginatedQuery, session: Optional[Session] = None) -> List[CardRead]: ...
    def create(self, data: BaseModel, session: Optional[Session] = None) -> CardRead: ...
    def update(self, entity: CardRead, session: Optional[Session] = None) -> CardRead: ...
    def delete(self, entity_id: int, session: Optional[Session] = None) -> None: ...


class CardTemplateStore(Protocol):
    def get_by_id(self, entity_id: int, session: Optional[Session] = None) -> CardTemplateRead: ...
    def list(
        self, query: PaginatedQuery, session: Optional[Session] = None
    ) -> List[CardTemplateRead]: ...
    def create(self, data: BaseModel, session: Optional[Session] = None) -> CardTemplateRead: ...
    def update(
        self, entity: CardTemplateRead, session: Optional[Session] = None
    ) -> CardTemplateRead: ...
    def delete(self, entity_id: int, session: Optional[Session] = None) -> None: ...


class UserStore(Protocol):
    def get_by_id(self, entity_id: int, session: Optional[Session] = None) -> UserRead: ...
    def get_by_email(self, email: str, session: Optional[Session] = None) -> UserRead: ...
    def create(self, data: BaseModel, session: Optional[Session] = None) -> UserRead: ...
    def delete(self, entity_id: int, session: Optional[Session] = None) -> None: ...


@dataclass
class Storage:
    events: EventStore
    guests: GuestStore
    cards: CardStore
    card_templates: CardTemplateStore
    users: UserStore
    session_factory: sessionmaker

    def run_in_transaction(self, work: Callable[[Session], T]) -> T:
        return run_in_transaction(self.session_factory, work)


def new_storage(session_factory: sessionmaker, timeout: Optional[float] = None) -> Storage:
    """Bind every repository to the shared session factory."""
    return Storage(
        events=EventRepository(session_factory, timeout),
        guests=GuestRepository(session_factory, timeout),
        cards=CardRepository(session_factory, timeout),
        card_templates=CardTemplateRepository(session_factory, timeout),
        users=UserRepository(session_factory, timeout),
        session_factory=session_factory,
    )
