"""
Repository layer abstracting SQL storage.

Every entity store shares one implementation of get/list/create/update/
delete; subclasses only declare their table, writable columns, search
columns and the lookup join used for listing projections.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Any, ClassVar, Generic, Iterator, List, Optional, Sequence, Tuple, Type, TypeVar

from pydantic import BaseModel
from sqlalchemy import asc, delete, desc, func, or_, select, update
from sqlalchemy.engine import Row
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.sql import Select

from app.core.config import settings
from app.core.db import query_deadline
from app.core.errors import NotFoundError, ValidationError, translate_db_errors
from app.models import Card, CardTemplate, Event, Guest, User
from app.schemas.card import CardRead, GuestSummary
from app.schemas.card_template import CardTemplateRead, CardTemplateSummary
from app.schemas.common import PaginatedQuery
from app.schemas.event import EventRead
from app.schemas.guest import CardSummary, GuestRead, GuestStatus
from app.schemas.user import UserRead, UserSummary

logger = logging.getLogger(__name__)

EntityT = TypeVar("EntityT", bound=BaseModel)


class SQLRepository(Generic[EntityT]):
    """CRUD and paginated listing over one table."""

    model: ClassVar[Any]
    entity: ClassVar[Type[BaseModel]]
    resource: ClassVar[str] = "Resource"
    create_fields: ClassVar[Tuple[str, ...]] = ()
    update_fields: ClassVar[Tuple[str, ...]] = ()
    search_columns: ClassVar[Tuple[Any, ...]] = ()

    def __init__(self, session_factory: sessionmaker, timeout: Optional[float] = None):
        self.session_factory = session_factory
        self.timeout = settings.QUERY_TIMEOUT_SECONDS if timeout is None else timeout

    @contextmanager
    def _session(self, operation: str, session: Optional[Session] = None) -> Iterator[Session]:
        """Yield a session whose statements are bounded by ``self.timeout``.

        A session passed in by the caller belongs to an enclosing
        transaction and is neither committed nor closed here. Otherwise a
        connection is checked out for this call only, committed on
        success and returned to the pool.
        """
        with translate_db_errors(f"{self.resource.lower()} {operation}"):
            if session is not None:
                with query_deadline(session, self.timeout):
                    yield session
                return

            with self.session_factory() as own:
                with query_deadline(own, self.timeout):
                    yield own
                own.commit()

    def _select(self) -> Select:
        """Statement shared by get_by_id and list; override to add lookup joins."""
        return select(self.model)

    def _to_entity(self, row: Row) -> EntityT:
        return self.entity.model_validate(row[0])

    def _fetch(self, db: Session, entity_id: int) -> EntityT:
        stmt = (
            self._select()
            .where(self.model.id == entity_id)
            .execution_options(populate_existing=True)
        )
        row = db.execute(stmt).first()
        if row is None:
            raise NotFoundError(self.resource, entity_id)
        return self._to_entity(row)

    def get_by_id(self, entity_id: int, session: Optional[Session] = None) -> EntityT:
        with self._session("get", session) as db:
            return self._fetch(db, entity_id)

    def _list(
        self,
        query: PaginatedQuery,
        filters: Sequence[Any] = (),
        session: Optional[Session] = None,
    ) -> List[EntityT]:
        direction = asc if query.sort == "asc" else desc

        stmt = self._select().where(*filters)
        if query.search and self.search_columns:
            stmt = stmt.where(
                or_(*(column.icontains(query.search, autoescape=True) for column in self.search_columns))
            )
        stmt = (
            stmt.order_by(direction(self.model.created_at), direction(self.model.id))
            .limit(query.limit)
            .offset(query.offset)
        )

        with self._session("list", session) as db:
            rows = db.execute(stmt).all()
            logger.debug(f"{self.resource} list returned {len(rows)} rows")
            return [self._to_entity(row) for row in rows]

    def list(self, query: PaginatedQuery, session: Optional[Session] = None) -> List[EntityT]:
        return self._list(query, session=session)

    def create(self, data: BaseModel, session: Optional[Session] = None) -> EntityT:
        """Insert a row; id and timestamps are assigned by the store."""
        values = data.model_dump(include=set(self.create_fields))
        with self._session("create", session) as db:
            obj = self.model(**values)
            db.add(obj)
            db.flush()
            logger.debug(f"{self.resource} {obj.id} created")
            return self._fetch(db, obj.id)

    def update(self, entity: EntityT, session: Optional[Session] = None) -> EntityT:
        values = {name: getattr(entity, name) for name in self.update_fields}
        stmt = (
            update(self.model)
            .where(self.model.id == entity.id)
            .values(**values)
            .execution_options(synchronize_session=False)
        )
        with self._session("update", session) as db:
            result = db.execute(stmt)
            if result.rowcount == 0:
                raise NotFoundError(self.resource, entity.id)
            return self._fetch(db, entity.id)

    def delete(self, entity_id: int, session: Optional[Session] = None) -> None:
        stmt = (
            delete(self.model)
            .where(self.model.id == entity_id)
            .execution_options(synchronize_session=False)
        )
        with self._session("delete", session) as db:
            result = db.execute(stmt)
            if result.rowcount == 0:
                raise NotFoundError(self.resource, entity_id)
            logger.debug(f"{self.resource} {entity_id} deleted")


# -------- Event repository --------

class EventRepository(SQLRepository[EventRead]):
    model = Event
    entity = EventRead
    resource = "Event"
    create_fields = ("name", "date", "location", "card_template_id", "user_id")
    update_fields = ("name", "date", "location", "card_template_id")
    search_columns = (Event.name, Event.location, User.username)

    def _select(self) -> Select:
        # LEFT joins: events without a template or owner row still list
        return (
            select(Event, CardTemplate.image_path, User.username)
            .outerjoin(CardTemplate, CardTemplate.id == Event.card_template_id)
            .outerjoin(User, User.id == Event.user_id)
        )

    def _to_entity(self, row: Row) -> EventRead:
        event, template_image_path, username = row
        return EventRead.model_validate(event).model_copy(update={
            "user": UserSummary(username=username) if username is not None else None,
            "card_template": (
                CardTemplateSummary(image_path=template_image_path)
                if template_image_path is not None else None
            ),
        })

    def increment_scanned_count(
        self, event_id: int, by: int = 1, session: Optional[Session] = None
    ) -> int:
        """Atomically add ``by`` to the counter and return the new value."""
        if by < 1:
            raise ValidationError("scanned count can only be incremented")
        stmt = (
            update(Event)
            .where(Event.id == event_id)
            .values(scanned_count=Event.scanned_count + by)
            .execution_options(synchronize_session=False)
        )
        with self._session("increment scanned count", session) as db:
            result = db.execute(stmt)
            if result.rowcount == 0:
                raise NotFoundError(self.resource, event_id)
            return db.execute(
                select(Event.scanned_count).where(Event.id == event_id)
            ).scalar_one()

    def owner_totals(self, user_id: int, session: Optional[Session] = None) -> Tuple[int, int]:
        """Number of events a user owns and their combined scanned count."""
        stmt = select(
            func.count(Event.id), func.coalesce(func.sum(Event.scanned_count), 0)
        ).where(Event.user_id == user_id)
        with self._session("owner totals", session) as db:
            event_count, scanned_total = db.execute(stmt).one()
            return int(event_count), int(scanned_total)


# -------- Guest repository --------

class GuestRepository(SQLRepository[GuestRead]):
    model = Guest
    entity = GuestRead
    resource = "Guest"
    create_fields = ("name", "email", "phone_number", "status", "type", "event_id")
    # event_id is fixed at creation
    update_fields = ("name", "email", "phone_number", "status", "type", "card_id")
    search_columns = (Guest.name, Guest.phone_number)

    def _select(self) -> Select:
        return select(Guest, Card.image_path).outerjoin(Card, Card.id == Guest.card_id)

    def _to_entity(self, row: Row) -> GuestRead:
        guest, card_image_path = row
        return GuestRead.model_validate(guest).model_copy(update={
            "card": CardSummary(image_path=card_image_path) if card_image_path is not None else None,
        })

    def list(
        self, event_id: int, query: PaginatedQuery, session: Optional[Session] = None
    ) -> List[GuestRead]:
        """Guests are always listed within one event."""
        return self._list(query, filters=(Guest.event_id == event_id,), session=session)

    def mark_checked_in(self, guest_id: int, session: Optional[Session] = None) -> bool:
        """Flip the guest to checked_in; False if they already were.

        The status test and the write are one conditional UPDATE, so of two
        concurrent scans only one sees a changed row.
        """
        stmt = (
            update(Guest)
            .where(Guest.id == guest_id, Guest.status != GuestStatus.CHECKED_IN.value)
            .values(status=GuestStatus.CHECKED_IN.value)
            .execution_options(synchronize_session=False)
        )
        with self._session("check in", session) as db:
            if db.execute(stmt).rowcount == 1:
                return True
            # Distinguish "already checked in" from a missing guest
            self._fetch(db, guest_id)
            return False

    def clear_card(self, card_id: int, session: Optional[Session] = None) -> int:
        """Drop any guest's reference to ``card_id``; returns how many were cleared."""
        stmt = (
            update(Guest)
            .where(Guest.card_id == card_id)
            .values(card_id=None)
            .execution_options(synchronize_session=False)
        )
        with self._session("clear card", session) as db:
            return db.execute(stmt).rowcount


# -------- Card repository --------

class CardRepository(SQLRepository[CardRead]):
    model = Card
    entity = CardRead
    resource = "Card"
    create_fields = ("event_id", "guest_id", "card_template_id", "image_path")
    update_fields = ("event_id", "guest_id", "card_template_id", "image_path")
    # Cross-event lookup by the holder's name or phone
    search_columns = (Guest.name, Guest.phone_number)

    def _select(self) -> Select:
        return (
            select(Card, Guest.name, Guest.phone_number)
            .outerjoin(Guest, Guest.id == Card.guest_id)
        )

    def _to_entity(self, row: Row) -> CardRead:
        card, guest_name, guest_phone = row
        return CardRead.model_validate(card).model_copy(update={
            "guest": (
                GuestSummary(name=guest_name, phone_number=guest_phone)
                if guest_name is not None else None
            ),
        })


# -------- Card template repository --------

class CardTemplateRepository(SQLRepository[CardTemplateRead]):
    model = CardTemplate
    entity = CardTemplateRead
    resource = "Card template"
    create_fields = ("image_path",)
    update_fields = ("image_path",)
    search_columns = (CardTemplate.image_path,)


# -------- User repository --------

class UserRepository(SQLRepository[UserRead]):
    model = User
    entity = UserRead
    resource = "User"
    create_fields = ("username", "email")
    update_fields = ("username", "email")
    search_columns = (User.username, User.email)

    def get_by_email(self, email: str, session: Optional[Session] = None) -> UserRead:
        with self._session("get by email", session) as db:
            row = db.execute(select(User).where(User.email == email)).first()
            if row is None:
                raise NotFoundError(self.resource, email)
            return self._to_entity(row)
