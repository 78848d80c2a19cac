"""
Presentation boundary for the customer count screen.

The UI layer renders ``ViewState`` and calls only the entry points on
``CustomerCountScreen``. Everything async happens here: summary counts on
activation, enrichment when a card is opened, saves per record. Closing
the detail view cancels an in-flight enrichment and bumps the view
generation so late results are dropped instead of resurrecting old data.

Usage:
    screen = CustomerCountScreen(gateway)
    await screen.activate()                     # summary cards
    await screen.open_category("visitors")      # drill-down list
    screen.set_feedback(1, "Wants a callback on Friday")
    result = await screen.save(1)
    screen.close_detail()
"""

import asyncio
from datetime import datetime
from typing import Callable, Optional, Union

from customer_counts.config import DisplayConfig, settings
from customer_counts.core.counts import CountsAggregator
from customer_counts.core.enricher import ReminderEnricher
from customer_counts.core.save_reconciler import SaveReconciler
from customer_counts.core.view_state import ViewState
from customer_counts.errors import (
    CustomerCountsError,
    InvalidCategoryError,
    NotFoundError,
    ReadOnlyRecordError,
)
from customer_counts.logging_context import get_view_logger, new_view_id, set_view_id
from customer_counts.remote.gateway import RemoteGateway
from customer_counts.schemas.customer_schema import (
    CATEGORY_TITLES,
    LIST_CATEGORIES,
    Category,
    CustomerRecord,
    RecordId,
)
from customer_counts.schemas.save_schema import SaveResult
from customer_counts.schemas.view_schema import ScratchEdit, SelectionState
from customer_counts.utils import format_display_datetime, parse_server_datetime

logger = get_view_logger(__name__)


class CustomerCountScreen:
    """Owns the ViewState and exposes the operations the UI may call."""

    def __init__(
        self,
        gateway: RemoteGateway,
        state: Optional[ViewState] = None,
        display: Optional[DisplayConfig] = None,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self.state = state or ViewState()
        self.counts = CountsAggregator(gateway)
        self.enricher = ReminderEnricher(gateway)
        self.reconciler = SaveReconciler(gateway)
        self._gateway = gateway
        self._display = display or settings.display
        self._clock = clock
        self._detail_task: Optional[asyncio.Task] = None

    # ------------------------------------------------------------------ #
    # Summary cards
    # ------------------------------------------------------------------ #

    async def activate(self) -> ViewState:
        """Populate the summary cards when the screen becomes visible."""
        return await self.refresh_counts()

    async def refresh_counts(self) -> ViewState:
        """Pull-to-refresh for the summary cards; ignored while one is running."""
        if self.counts.busy:
            return self.state
        self.state.counts_busy = True
        try:
            await self.counts.refresh()
        finally:
            self.state.counts = self.counts.snapshot
            self.state.counts_busy = False
        return self.state

    # ------------------------------------------------------------------ #
    # Detail view
    # ------------------------------------------------------------------ #

    async def open_category(self, name: Union[Category, str]) -> ViewState:
        """Fetch and enrich the list behind one summary card."""
        category = self._list_category(name)
        if self.state.detail_open or self._detail_task is not None:
            self.close_detail()

        self.state.generation += 1
        generation = self.state.generation
        set_view_id(new_view_id())
        self.state.selection = SelectionState(category=category)
        self.state.loading = True
        logger.info("Opening %s", category.value)

        task = asyncio.create_task(self._load(category))
        self._detail_task = task
        try:
            records = await task
        except asyncio.CancelledError:
            if generation != self.state.generation:
                logger.info("Detail view closed before %s finished loading", category.value)
                return self.state
            self._reset_detail()
            raise
        except CustomerCountsError as exc:
            if generation == self.state.generation:
                logger.error("Error fetching %s data: %s", category.value, exc)
                self._reset_detail()
            raise
        finally:
            if self._detail_task is task:
                self._detail_task = None

        if generation != self.state.generation:
            logger.info("Discarding stale %s results", category.value)
            return self.state

        self.state.records = records
        self.state.loading = False
        return self.state

    def close_detail(self) -> ViewState:
        """Close the list, dropping unsaved edits and any in-flight enrichment."""
        self.state.generation += 1
        if self._detail_task is not None and not self._detail_task.done():
            self._detail_task.cancel()
        self._detail_task = None
        self._reset_detail()
        return self.state

    async def _load(self, category: Category) -> list[CustomerRecord]:
        base = await self._gateway.list_by_category(category)
        return await self.enricher.enrich(base)

    def _reset_detail(self) -> None:
        self.state.selection = SelectionState()
        self.state.records = []
        self.state.scratch.clear_all()
        self.state.loading = False

    @staticmethod
    def _list_category(name: Union[Category, str]) -> Category:
        try:
            category = Category(name)
        except ValueError:
            raise InvalidCategoryError(f"Invalid card type: {name!r}") from None
        if category not in LIST_CATEGORIES:
            raise InvalidCategoryError(f"Card '{category.value}' has no list to open")
        return category

    # ------------------------------------------------------------------ #
    # Edits
    # ------------------------------------------------------------------ #

    def set_feedback(self, record_id: RecordId, text: str) -> ViewState:
        self._editable_record(record_id)
        self.state.scratch.set_feedback(record_id, text)
        return self.state

    def set_reminder(self, record_id: RecordId, reminder: datetime) -> ViewState:
        self._editable_record(record_id)
        self.state.scratch.set_reminder(record_id, reminder)
        return self.state

    def show_picker(self, record_id: RecordId) -> ViewState:
        self._editable_record(record_id)
        self.state.selection.picker_target_id = record_id
        return self.state

    def hide_picker(self) -> ViewState:
        self.state.selection.picker_target_id = None
        return self.state

    def confirm_picker(self, reminder: datetime) -> ViewState:
        """Store the picked date/time for the picker's target record."""
        target = self.state.selection.picker_target_id
        if target is None:
            raise ValueError("The date/time picker has no target record")
        if reminder < self._now_like(reminder):
            raise ValueError("Reminder must not be in the past")
        self.set_reminder(target, reminder)
        return self.hide_picker()

    def picker_initial_value(self) -> datetime:
        target = self.state.selection.picker_target_id
        pending = self.state.scratch.reminder_for(target) if target is not None else None
        return pending or self._clock()

    def pending_edit(self, record_id: RecordId) -> Optional[ScratchEdit]:
        return self.state.scratch.get(record_id)

    def has_unsaved_edits(self) -> bool:
        return len(self.state.scratch) > 0

    def _editable_record(self, record_id: RecordId) -> CustomerRecord:
        record = self.state.find_record(record_id)
        if record is None:
            raise NotFoundError(record_id)
        if not record.is_editable:
            raise ReadOnlyRecordError(record_id)
        return record

    def _now_like(self, reminder: datetime) -> datetime:
        now = self._clock()
        if reminder.tzinfo is not None and now.tzinfo is None:
            return now.astimezone()
        if reminder.tzinfo is None and now.tzinfo is not None:
            return now.replace(tzinfo=None)
        return now

    # ------------------------------------------------------------------ #
    # Save
    # ------------------------------------------------------------------ #

    async def save(self, record_id: RecordId) -> SaveResult:
        """Write the record's pending edits; see SaveReconciler for outcomes."""
        return await self.reconciler.save(self.state, record_id)

    def is_saving(self, record_id: RecordId) -> bool:
        return self.state.is_saving(record_id)

    # ------------------------------------------------------------------ #
    # Display helpers
    # ------------------------------------------------------------------ #

    def category_title(self) -> str:
        category = self.state.selection.category
        return CATEGORY_TITLES.get(category, "") if category is not None else ""

    def display_records(self) -> list[CustomerRecord]:
        records = [record for record in self.state.records if record.has_id]
        if self._display.newest_first:
            records.reverse()
        return records

    def feedback_display_value(self, record: CustomerRecord) -> str:
        pending = self.state.scratch.feedback_for(record.id)
        if pending:
            return pending
        return record.description or ""

    def reminder_display_value(self, record: CustomerRecord) -> str:
        fmt = self._display.reminder_display_format
        pending = self.state.scratch.reminder_for(record.id)
        if pending is not None:
            return format_display_datetime(pending, fmt)
        if not record.reminder_datetime:
            return ""
        parsed = parse_server_datetime(record.reminder_datetime)
        if parsed is None:
            return record.reminder_datetime
        return format_display_datetime(parsed, fmt)
