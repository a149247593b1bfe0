"""
Tests for per-call statement deadlines on SQLite
"""

import pytest
from sqlalchemy import text

from app.core.db import query_deadline
from app.core.errors import TransientError, translate_db_errors

# Counts to ten million; far longer than any deadline used here
SLOW_QUERY = text(
    "WITH RECURSIVE n(i) AS (SELECT 1 UNION ALL SELECT i + 1 FROM n WHERE i < 10000000) "
    "SELECT count(*) FROM n"
)

def test_expired_deadline_interrupts_statement(session_factory):
    with session_factory() as db:
        with pytest.raises(TransientError):
            with translate_db_errors("slow query"):
                with query_deadline(db, 0):
                    db.execute(SLOW_QUERY).scalar_one()

def test_connection_usable_after_interrupt(session_factory):
    with session_factory() as db:
        with pytest.raises(TransientError):
            with translate_db_errors("slow query"):
                with query_deadline(db, 0):
                    db.execute(SLOW_QUERY).scalar_one()

    with session_factory() as db:
        with query_deadline(db, 5):
            assert db.execute(text("SELECT 1")).scalar_one() == 1

def test_fast_statement_finishes_within_deadline(session_factory):
    with session_factory() as db:
        with query_deadline(db, 5):
            assert db.execute(text("SELECT 42")).scalar_one() == 42
