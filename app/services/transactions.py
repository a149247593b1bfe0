"""
Write coordinator: run a unit of work inside one database transaction
"""

import logging
from typing import Callable, TypeVar

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from app.core.errors import translate_db_errors

logger = logging.getLogger(__name__)

T = TypeVar("T")


def run_in_transaction(session_factory: sessionmaker, work: Callable[[Session], T]) -> T:
    """Invoke ``work`` with a session bound to a fresh transaction.

    On failure the transaction is rolled back and the original exception
    propagates; a rollback failure is logged and dropped so the caller
    sees the error that caused it. On success the transaction commits
    and commit failures propagate.
    """
    session = session_factory()
    try:
        try:
            result = work(session)
        except Exception:
            try:
                session.rollback()
            except SQLAlchemyError:
                logger.exception("Rollback failed; reporting the original error")
            raise

        with translate_db_errors("commit"):
            session.commit()
        return result
    finally:
        session.close()
