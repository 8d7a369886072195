"""Translate SQLAlchemy failures raised during a write into API errors."""
import logging
from collections.abc import Iterator
from contextlib import contextmanager

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from utils.errors import ApiError, PersistenceError, UniqueConstraintError

LOG = logging.getLogger(__name__)


@contextmanager
def store_errors(db: Session, model: str, action: str) -> Iterator[None]:
    """Roll back and raise UniqueConstraintError or ApiError (400), or PersistenceError (500)."""
    try:
        yield
    except IntegrityError as e:
        db.rollback()
        LOG.error("Constraint violation %s %s: %s", action, model, e.orig)
        message = str(e.orig).lower()
        if "unique" in message or "duplicate" in message:
            raise UniqueConstraintError("Unique constraint violation.") from e
        raise ApiError("Integrity constraint violation.") from e
    except SQLAlchemyError as e:
        db.rollback()
        LOG.exception("Internal error %s %s", action, model)
        raise PersistenceError() from e
