"""Unit tests: store failures and error categories map to the right status codes."""
import pytest
from sqlalchemy.exc import IntegrityError, OperationalError

from api.store_errors import store_errors
from utils.errors import (
    ApiError,
    PersistenceError,
    UniqueConstraintError,
    UnprocessableReferenceError,
)

pytestmark = pytest.mark.unit


class _Session:
    """Stands in for a Session; only rollback is used."""

    def __init__(self):
        self.rollbacks = 0

    def rollback(self):
        self.rollbacks += 1


def _integrity_error(message):
    return IntegrityError("INSERT INTO connector ...", {}, Exception(message))


def test_unique_violation_is_unique_constraint_error():
    db = _Session()
    with pytest.raises(UniqueConstraintError) as exc_info:
        with store_errors(db, "Connector", "creating"):
            raise _integrity_error("UNIQUE constraint failed: connector.id")
    assert exc_info.value.status_code == 400
    assert exc_info.value.message == "Unique constraint violation."
    assert db.rollbacks == 1


def test_foreign_key_violation_is_plain_api_error():
    """A non-unique integrity failure is a 400 but not reported as a uniqueness error."""
    db = _Session()
    with pytest.raises(ApiError) as exc_info:
        with store_errors(db, "Connector", "creating"):
            raise _integrity_error("FOREIGN KEY constraint failed")
    assert not isinstance(exc_info.value, UniqueConstraintError)
    assert exc_info.value.status_code == 400
    assert exc_info.value.message == "Integrity constraint violation."
    assert db.rollbacks == 1


def test_other_store_failure_is_500():
    db = _Session()
    with pytest.raises(PersistenceError) as exc_info:
        with store_errors(db, "Connector", "fetching"):
            raise OperationalError("SELECT 1", {}, Exception("database is locked"))
    assert exc_info.value.status_code == 500
    assert db.rollbacks == 1


def test_api_errors_pass_through_untouched():
    db = _Session()
    with pytest.raises(UnprocessableReferenceError):
        with store_errors(db, "Connector", "creating"):
            raise UnprocessableReferenceError()
    assert db.rollbacks == 0


def test_unprocessable_reference_status_is_422():
    assert UnprocessableReferenceError().status_code == 422
