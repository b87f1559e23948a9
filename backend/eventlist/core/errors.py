"""
Domain errors for the events API.

Services and the search pipeline raise these; the exception handlers in
eventlist.main turn them into HTTP responses. Messages are safe to show to
clients, so they never carry driver or SQL details.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class ErrorCode(str, Enum):
    # query validation
    INVALID_DATE = "InvalidDate"
    INVALID_NUMBER = "InvalidNumber"
    INVALID_PAGE = "InvalidPage"
    INVALID_LIMIT = "InvalidLimit"
    DATE_RANGE_INVERTED = "DateRangeInverted"

    # entity lookups and writes
    EVENT_NOT_FOUND = "EventNotFound"
    INVALID_EVENT_ID = "InvalidEventId"
    EVENT_IN_PAST = "EventInPast"

    STORE_ERROR = "StoreError"


@dataclass(frozen=True)
class FieldError:
    """One validation failure, tagged with the query field it belongs to.

    ``field`` is None for rules spanning several fields.
    """

    field: Optional[str]
    code: ErrorCode
    message: str

    def as_dict(self) -> dict:
        return {"field": self.field, "code": self.code.value, "message": self.message}


class DomainError(Exception):
    """Base domain error with code and user-safe message."""

    def __init__(self, code: ErrorCode, message: str) -> None:
        super().__init__(message)
        self.code = code
        self.message = message

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"


class QueryValidationError(DomainError):
    """Raised when raw query input cannot be normalized.

    Carries every field error found, in field order.
    """

    def __init__(self, errors: tuple[FieldError, ...]) -> None:
        count = len(errors)
        super().__init__(
            code=errors[0].code,
            message=f"Validation failed: {count} error{'s' if count != 1 else ''} found",
        )
        self.errors = errors

    @property
    def codes(self) -> list[ErrorCode]:
        return [error.code for error in self.errors]


class EventNotFoundError(DomainError):
    def __init__(self, event_id: str) -> None:
        super().__init__(code=ErrorCode.EVENT_NOT_FOUND, message="Event not found")
        self.event_id = event_id


class InvalidEventIdError(DomainError):
    def __init__(self, event_id: str) -> None:
        super().__init__(code=ErrorCode.INVALID_EVENT_ID, message="Invalid event ID format")
        self.event_id = event_id


class EventInPastError(DomainError):
    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.EVENT_IN_PAST,
            message="Event datetime cannot be in the past",
        )


class StoreError(DomainError):
    """The event store failed (connectivity, constraint violation, ...).

    ``operation`` names the store method that failed.
    """

    def __init__(self, operation: str) -> None:
        super().__init__(code=ErrorCode.STORE_ERROR, message=f"Event store failed during {operation}")
        self.operation = operation
