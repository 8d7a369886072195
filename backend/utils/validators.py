"""Format checks and update whitelists. No store access."""
import ipaddress
import uuid
from collections.abc import Iterable
from typing import Any

from utils.errors import InvalidFormatError, InvariantViolationError


def is_valid_uuid(value: Any) -> bool:
    """True for a canonical 8-4-4-4-12 hex UUID string (any case)."""
    if not isinstance(value, str):
        return False
    try:
        parsed = uuid.UUID(value)
    except (ValueError, AttributeError):
        return False
    return str(parsed) == value.lower()


def is_valid_ip(value: Any) -> bool:
    """True for an IPv4 or IPv6 address literal."""
    if not isinstance(value, str):
        return False
    try:
        ipaddress.ip_address(value)
    except ValueError:
        return False
    return True


def require_uuid(value: Any, field: str) -> str:
    """Return value normalized to lower case, or raise InvalidFormatError naming the field."""
    if not is_valid_uuid(value):
        raise InvalidFormatError(f"Given {field} is invalid")
    return value.lower()


def require_ip(value: Any, field: str = "ip_address") -> str:
    """Return value unchanged, or raise InvalidFormatError naming the field."""
    if not is_valid_ip(value):
        raise InvalidFormatError(f"Given {field} is invalid")
    return value


def check_field_whitelist(allowed: Iterable[str], provided: Iterable[str]) -> None:
    """Raise InvariantViolationError when provided contains any field not in allowed."""
    disallowed = set(provided) - set(allowed)
    if disallowed:
        raise InvariantViolationError(f"Given fields are invalid: {', '.join(sorted(disallowed))}")


def reject_nulls(changes: dict[str, Any]) -> None:
    """Raise InvalidFormatError when a partial update sets a required column to null."""
    nulls = sorted(k for k, v in changes.items() if v is None)
    if nulls:
        raise InvalidFormatError(f"Fields must not be null: {', '.join(nulls)}")
