"""Exception hierarchy for the customer count screen core."""

from typing import Any, Optional


class CustomerCountsError(Exception):
    """Base class for every error raised by this package."""


class AuthError(CustomerCountsError):
    """The bearer credential is missing or was rejected by the server.

    Callers surface this to the user; it is never retried automatically.
    """

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class TransportError(CustomerCountsError):
    """Network failure, non-2xx response or undecodable body.

    Carries the original status and payload so they can be logged.
    """

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        payload: Any = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.payload = payload

    def __str__(self) -> str:
        base = super().__str__()
        if self.status_code is None:
            return base
        return f"{base} (status {self.status_code})"


class NotFoundError(CustomerCountsError):
    """A record id the UI referred to is not in the current list."""

    def __init__(self, record_id: Any) -> None:
        super().__init__(f"Record {record_id!r} is not in the current list")
        self.record_id = record_id


class SaveInProgressError(CustomerCountsError):
    """A save was requested for a record that already has one in flight."""

    def __init__(self, record_id: Any) -> None:
        super().__init__(f"A save for record {record_id!r} is already in progress")
        self.record_id = record_id


class InvalidCategoryError(CustomerCountsError):
    """The requested category has no backing list endpoint."""


class ReadOnlyRecordError(CustomerCountsError):
    """Feedback and reminders can only be edited on visitor records."""

    def __init__(self, record_id: Any) -> None:
        super().__init__(f"Record {record_id!r} is read-only")
        self.record_id = record_id
