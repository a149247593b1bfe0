"""
Database engine, session factory and per-call query deadlines
"""

import logging
import sqlite3
import time
from contextlib import contextmanager
from typing import Iterator

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from app.core.config import settings

logger = logging.getLogger(__name__)

Base = declarative_base()

# SQLite progress handler granularity, in VM instructions
_SQLITE_PROGRESS_STEPS = 1000


@event.listens_for(Engine, "connect")
def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    # SQLite ships with foreign key enforcement off, per connection
    if isinstance(dbapi_connection, sqlite3.Connection):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


def build_engine(database_url: str, **kwargs) -> Engine:
    """Create an engine with the options each backend needs."""
    if database_url.startswith("sqlite"):
        kwargs.setdefault("connect_args", {"check_same_thread": False})
    else:
        kwargs.setdefault("pool_size", settings.DB_POOL_SIZE)
        kwargs.setdefault("pool_pre_ping", True)
    return create_engine(database_url, echo=settings.DB_ECHO, **kwargs)


def create_session_factory(bind: Engine) -> sessionmaker:
    return sessionmaker(bind=bind, autocommit=False, autoflush=False, expire_on_commit=False)


engine = build_engine(settings.DATABASE_URL)
SessionLocal = create_session_factory(engine)


@contextmanager
def query_deadline(session: Session, seconds: float) -> Iterator[None]:
    """Bound every statement run inside the block by ``seconds``.

    PostgreSQL cancels the statement server side via ``statement_timeout``;
    SQLite interrupts it from a progress handler. Either way the driver
    raises an ``OperationalError`` that callers map to a transient failure.
    """
    connection = session.connection()
    dialect = connection.dialect.name

    if dialect == "postgresql":
        timeout_ms = max(1, int(seconds * 1000))
        connection.exec_driver_sql(f"SET LOCAL statement_timeout = {timeout_ms}")
        yield
        return

    if dialect != "sqlite":
        yield
        return

    dbapi_connection = connection.connection.driver_connection
    expires_at = time.monotonic() + seconds

    def _interrupt_when_expired() -> int:
        return int(time.monotonic() >= expires_at)

    dbapi_connection.set_progress_handler(_interrupt_when_expired, _SQLITE_PROGRESS_STEPS)
    try:
        yield
    finally:
        dbapi_connection.set_progress_handler(None, 0)
