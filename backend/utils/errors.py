"""Categorized API errors. main.py turns them into {"error": message} responses."""
from fastapi import status


class ApiError(Exception):
    """Base for errors that map to a fixed HTTP status."""

    status_code: int = status.HTTP_400_BAD_REQUEST
    default_message: str = "Bad request"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class InvalidFormatError(ApiError):
    """Malformed UUID or IP address, wrong value type, null where a value is required."""

    default_message = "Given fields are invalid"


class InvariantViolationError(ApiError):
    """Priority conflict, capacity exceeded, or a field that may not be changed."""

    default_message = "Given fields are invalid"


class UniqueConstraintError(ApiError):
    """Duplicate name or primary key, rejected by the store."""

    default_message = "Unique constraint violation."


class UnprocessableReferenceError(ApiError):
    """Foreign key refers to a row that does not exist."""

    status_code = 422
    default_message = "Given UUID does not exist"


class NotFoundError(ApiError):
    """Primary key lookup miss. Sent with an empty body."""

    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found"


class UnauthorizedError(ApiError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Unauthorized"


class ForbiddenError(ApiError):
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Forbidden"


class PersistenceError(ApiError):
    """Unexpected store failure. The message sent to clients is always generic."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Internal Server Error"
