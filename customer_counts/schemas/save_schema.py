"""Save outcome models."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from customer_counts.errors import AuthError
from customer_counts.schemas.customer_schema import CustomerRecord, RecordId

FEEDBACK_FIELD = "description"
REMINDER_FIELD = "reminder_datetime"


class SaveStatus(str, Enum):
    """Terminal outcome of a save."""

    SAVED = "saved"
    PARTIAL = "partial"
    FAILED = "failed"
    NOTHING_TO_SAVE = "nothing_to_save"


@dataclass
class FieldFailure:
    """Why one field of a save did not reach the server."""

    field_name: str
    error: Exception

    @property
    def message(self) -> str:
        return str(self.error)


@dataclass
class SaveResult:
    """What a save wrote, what it failed to write, and the reconciled record."""

    record_id: RecordId
    status: SaveStatus
    saved_fields: list[str] = field(default_factory=list)
    failures: list[FieldFailure] = field(default_factory=list)
    record: Optional[CustomerRecord] = None

    @property
    def ok(self) -> bool:
        return self.status in (SaveStatus.SAVED, SaveStatus.NOTHING_TO_SAVE)

    @property
    def auth_failed(self) -> bool:
        return any(isinstance(f.error, AuthError) for f in self.failures)

    def failure_for(self, field_name: str) -> Optional[FieldFailure]:
        for failure in self.failures:
            if failure.field_name == field_name:
                return failure
        return None
