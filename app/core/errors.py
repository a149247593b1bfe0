"""
Error kinds surfaced by the storage layer

Handlers translate these into responses: ``ValidationError`` is a client
error, ``NotFoundError`` a not-found, everything else a server error
whose details stay in the log.
"""

import logging
from contextlib import contextmanager
from typing import Iterator

from sqlalchemy.exc import IntegrityError, OperationalError, SQLAlchemyError
from sqlalchemy.exc import TimeoutError as PoolTimeoutError

logger = logging.getLogger(__name__)


class StoreError(Exception):
    """Base class for every failure the storage layer reports."""

    status_code = 500
    code = "internal_error"
    public_message = "Internal server error"

    def __init__(self, message: str = None):
        super().__init__(message or self.public_message)
        self.message = message or self.public_message


class ValidationError(StoreError):
    """Malformed or out-of-range request input."""

    status_code = 400
    code = "validation_error"
    public_message = "Invalid request"


class NotFoundError(StoreError):
    """No row matched the given primary key."""

    status_code = 404
    code = "not_found"
    public_message = "Resource not found"

    def __init__(self, resource: str = "Resource", resource_id=None):
        message = f"{resource} not found"
        if resource_id is not None:
            message = f"{resource} {resource_id} not found"
        super().__init__(message)
        self.resource = resource
        self.resource_id = resource_id


class ConflictError(StoreError):
    """Uniqueness violation."""

    status_code = 409
    code = "conflict"
    public_message = "Resource already exists"


class TransientError(StoreError):
    """Timeout or connection failure; safe to retry."""

    status_code = 503
    code = "transient_failure"
    public_message = "Service temporarily unavailable"


class InternalError(StoreError):
    """Anything else, e.g. a malformed query."""


def _is_unique_violation(exc: IntegrityError) -> bool:
    # SQLite: "UNIQUE constraint failed"; PostgreSQL: "duplicate key value violates unique constraint"
    message = str(exc.orig).lower()
    return "unique" in message or "duplicate key" in message


def _is_foreign_key_violation(exc: IntegrityError) -> bool:
    return "foreign key" in str(exc.orig).lower()


@contextmanager
def translate_db_errors(operation: str) -> Iterator[None]:
    """Map SQLAlchemy exceptions raised inside the block to ``StoreError`` kinds.

    Only uniqueness violations are conflicts; foreign key, NOT NULL and
    CHECK violations mean the input itself was invalid.
    """
    try:
        yield
    except StoreError:
        raise
    except IntegrityError as e:
        logger.warning(f"DB integrity error during {operation}: {e.orig}")
        if _is_unique_violation(e):
            raise ConflictError() from e
        if _is_foreign_key_violation(e):
            raise ValidationError("Referenced resource does not exist") from e
        raise ValidationError("A required field is missing or out of range") from e
    except (OperationalError, PoolTimeoutError) as e:
        logger.error(f"DB operational error during {operation}: {e}")
        raise TransientError() from e
    except SQLAlchemyError as e:
        logger.error(f"DB error during {operation}: {e}")
        raise InternalError() from e
