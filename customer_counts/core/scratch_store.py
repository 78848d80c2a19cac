"""
Pending, unsaved edits keyed by record id.

The store is independent of the fetched record list: the list holds what
the server last confirmed, the store holds what the user typed or picked
since. Reads hand out copies so nothing outside the store can mutate it.

Usage:
    store = EditScratchStore()
    store.set_feedback(1, "Called back, wants a quote")
    store.set_reminder(1, datetime(2024, 1, 2, 9, 30))
    store.get(1)  # ScratchEdit(feedback_text=..., reminder_datetime=...)
"""

import logging
from dataclasses import replace
from datetime import datetime
from typing import Optional

from customer_counts.schemas.customer_schema import RecordId
from customer_counts.schemas.view_schema import ScratchEdit

logger = logging.getLogger(__name__)


class EditScratchStore:
    """Holds at most one ScratchEdit per record id."""

    def __init__(self) -> None:
        self._edits: dict[RecordId, ScratchEdit] = {}

    def set_feedback(self, record_id: RecordId, text: str) -> None:
        """Record edited feedback; blank text withdraws the feedback edit."""
        existing = self._edits.get(record_id)
        if not text.strip():
            if existing is None:
                return
            existing.feedback_text = None
            if existing.is_empty():
                del self._edits[record_id]
            logger.debug("Feedback edit withdrawn for %s", record_id)
            return

        if existing is None:
            self._edits[record_id] = ScratchEdit(feedback_text=text)
        else:
            existing.feedback_text = text

    def set_reminder(self, record_id: RecordId, reminder: datetime) -> None:
        """Record a picked reminder date/time, keeping any feedback edit."""
        existing = self._edits.get(record_id)
        if existing is None:
            self._edits[record_id] = ScratchEdit(reminder_datetime=reminder)
        else:
            existing.reminder_datetime = reminder
        logger.debug("Reminder edit for %s set to %s", record_id, reminder.isoformat())

    def discard_fields(
        self, record_id: RecordId, feedback: bool = False, reminder: bool = False
    ) -> None:
        """Drop individual confirmed fields, removing the entry once it is empty."""
        existing = self._edits.get(record_id)
        if existing is None:
            return
        if feedback:
            existing.feedback_text = None
        if reminder:
            existing.reminder_datetime = None
        if existing.is_empty():
            del self._edits[record_id]

    def clear(self, record_id: RecordId) -> None:
        self._edits.pop(record_id, None)

    def clear_all(self) -> None:
        if self._edits:
            logger.info("Discarding %d unsaved edit(s)", len(self._edits))
        self._edits.clear()

    def get(self, record_id: RecordId) -> Optional[ScratchEdit]:
        edit = self._edits.get(record_id)
        return replace(edit) if edit is not None else None

    def feedback_for(self, record_id: RecordId) -> Optional[str]:
        edit = self._edits.get(record_id)
        return edit.feedback_text if edit is not None else None

    def reminder_for(self, record_id: RecordId) -> Optional[datetime]:
        edit = self._edits.get(record_id)
        return edit.reminder_datetime if edit is not None else None

    def has_pending(self, record_id: RecordId) -> bool:
        return record_id in self._edits

    def pending_ids(self) -> list[RecordId]:
        return list(self._edits)

    def __len__(self) -> int:
        return len(self._edits)

    def __contains__(self, record_id: object) -> bool:
        return record_id in self._edits
