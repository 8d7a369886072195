"""SQLAlchemy declarative base and models."""
import uuid

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Base class for all DB models."""
    pass


def new_id() -> str:
    """Default primary key: a random UUID in canonical string form."""
    return str(uuid.uuid4())
