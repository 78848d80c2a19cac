"""In-process state shared between the screen core and the UI layer."""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from customer_counts.schemas.customer_schema import Category, RecordId


@dataclass(frozen=True)
class CountsSnapshot:
    """Numbers shown on the two summary cards.

    Always replaced as a whole, never field by field.
    """

    visitor_count: int = 0
    shopper_count: int = 0


@dataclass
class ScratchEdit:
    """Unsaved edits for one record."""

    feedback_text: Optional[str] = None
    reminder_datetime: Optional[datetime] = None

    def is_empty(self) -> bool:
        return self.feedback_text is None and self.reminder_datetime is None


@dataclass
class SelectionState:
    """Which card is expanded and which record the picker targets."""

    category: Optional[Category] = None
    picker_target_id: Optional[RecordId] = None

    @property
    def picker_visible(self) -> bool:
        return self.picker_target_id is not None

