"""
Writes one record's pending edits and folds the confirmed values back in.

Flow for ``save(state, record_id)``:
    1. Locate the record in the current list (NotFoundError if absent).
    2. Pending feedback -> PUT /customers/{id}/update/.
    3. Pending reminder -> POST /reminders/{id}/ in wire format.
    4. Nothing pending -> NOTHING_TO_SAVE, no remote calls.
    5. Confirmed fields replace the record in place and leave the scratch store.
    6. A field that failed stays pending; the other one is still committed.
"""

from typing import Any, Optional

from customer_counts.core.view_state import ViewState
from customer_counts.errors import (
    AuthError,
    CustomerCountsError,
    NotFoundError,
    SaveInProgressError,
)
from customer_counts.logging_context import get_view_logger
from customer_counts.remote.gateway import RemoteGateway
from customer_counts.schemas.customer_schema import CustomerRecord, RecordId
from customer_counts.schemas.save_schema import (
    FEEDBACK_FIELD,
    REMINDER_FIELD,
    FieldFailure,
    SaveResult,
    SaveStatus,
)
from customer_counts.utils import format_wire_datetime

logger = get_view_logger(__name__)


class SaveReconciler:
    """Saves pending edits for a single record at a time per id."""

    def __init__(self, gateway: RemoteGateway) -> None:
        self._gateway = gateway

    async def save(self, state: ViewState, record_id: RecordId) -> SaveResult:
        if state.is_saving(record_id):
            raise SaveInProgressError(record_id)

        record = state.find_record(record_id)
        if record is None:
            logger.error("Item not found for editing: %r", record_id)
            raise NotFoundError(record_id)

        edit = state.scratch.get(record_id)
        if edit is None or edit.is_empty():
            logger.info("No updates made for %s", record_id)
            return SaveResult(
                record_id=record_id, status=SaveStatus.NOTHING_TO_SAVE, record=record
            )

        confirmed: dict[str, Optional[str]] = {}
        failures: list[FieldFailure] = []
        sent_feedback = edit.feedback_text
        sent_reminder = edit.reminder_datetime

        state.saving_ids.add(record_id)
        try:
            if sent_feedback is not None:
                try:
                    payload = await self._gateway.update_feedback(record_id, sent_feedback)
                except CustomerCountsError as exc:
                    failures.append(FieldFailure(FEEDBACK_FIELD, exc))
                else:
                    confirmed[FEEDBACK_FIELD] = _authoritative(payload.description, sent_feedback)

            if sent_reminder is not None:
                wire_value = format_wire_datetime(sent_reminder)
                auth_failure = _auth_failure(failures)
                if auth_failure is not None:
                    # Same credential, same answer
                    failures.append(FieldFailure(REMINDER_FIELD, auth_failure))
                else:
                    try:
                        payload = await self._gateway.upsert_reminder(record_id, wire_value)
                    except CustomerCountsError as exc:
                        failures.append(FieldFailure(REMINDER_FIELD, exc))
                    else:
                        confirmed[REMINDER_FIELD] = _authoritative(
                            payload.reminder_datetime, wire_value
                        )
        finally:
            state.saving_ids.discard(record_id)

        for failure in failures:
            logger.error("Error saving %s for %s: %s", failure.field_name, record_id, failure.error)

        if not confirmed:
            return SaveResult(
                record_id=record_id,
                status=SaveStatus.FAILED,
                failures=failures,
                record=state.find_record(record_id),
            )

        reconciled = self._reconcile(state, record_id, confirmed)

        # Only drop scratch values that are still the ones we sent; the user
        # may have typed again while the request was in flight.
        state.scratch.discard_fields(
            record_id,
            feedback=FEEDBACK_FIELD in confirmed
            and state.scratch.feedback_for(record_id) == sent_feedback,
            reminder=REMINDER_FIELD in confirmed
            and state.scratch.reminder_for(record_id) == sent_reminder,
        )

        status = SaveStatus.PARTIAL if failures else SaveStatus.SAVED
        logger.info("Details saved for %s (%s): %s", record_id, status.value, sorted(confirmed))
        return SaveResult(
            record_id=record_id,
            status=status,
            saved_fields=sorted(confirmed),
            failures=failures,
            record=reconciled,
        )

    @staticmethod
    def _reconcile(
        state: ViewState, record_id: RecordId, confirmed: dict[str, Any]
    ) -> Optional[CustomerRecord]:
        # Re-read the list: other saves may have replaced their own entries
        # while this one was awaiting the server.
        current = state.find_record(record_id)
        if current is None:
            logger.info("Record %s left the list before its save completed", record_id)
            return None
        reconciled = current.merged(**confirmed)
        state.replace_record(reconciled)
        return reconciled


def _authoritative(confirmed: Optional[str], sent: str) -> str:
    """The server's echo wins; fall back to what was sent only if it echoed nothing."""
    return confirmed if confirmed is not None else sent


def _auth_failure(failures: list[FieldFailure]) -> Optional[AuthError]:
    for failure in failures:
        if isinstance(failure.error, AuthError):
            return failure.error
    return None
