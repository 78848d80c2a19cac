"""Merges each record's reminder sub-resource into the base list."""

import asyncio
import logging
from typing import Iterable, Union

from customer_counts.errors import CustomerCountsError
from customer_counts.remote.gateway import RemoteGateway
from customer_counts.schemas.customer_schema import CustomerRecord, ReminderPayload

logger = logging.getLogger(__name__)


class ReminderEnricher:
    """
    Fans out one reminder lookup per record and joins them all.

    Output order always matches input order. A failed lookup leaves that
    record without ``reminder_datetime``; it never affects the others.
    Records without an id are dropped.
    """

    def __init__(self, gateway: RemoteGateway) -> None:
        self._gateway = gateway

    async def enrich(self, records: Iterable[CustomerRecord]) -> list[CustomerRecord]:
        records = list(records)
        base = [record for record in records if record.has_id]
        if len(base) < len(records):
            logger.warning("Dropped %d record(s) without an id", len(records) - len(base))
        if not base:
            return []

        results = await asyncio.gather(
            *(self._gateway.get_reminder(record.id) for record in base),
            return_exceptions=True,
        )

        enriched = [self._merge(record, result) for record, result in zip(base, results)]
        failures = sum(1 for result in results if isinstance(result, BaseException))
        if failures:
            logger.info(
                "Reminder enrichment finished with %d/%d lookup failure(s)",
                failures, len(base),
            )
        return enriched

    @staticmethod
    def _merge(
        record: CustomerRecord, result: Union[ReminderPayload, BaseException]
    ) -> CustomerRecord:
        if isinstance(result, CustomerCountsError):
            logger.warning("Reminder for %s unavailable: %s", record.id, result)
            return record
        if isinstance(result, Exception):
            logger.error("Unexpected error fetching reminder for %s: %r", record.id, result)
            return record
        if isinstance(result, BaseException):
            # Cancellation and interpreter exits are not per-record failures
            raise result
        if result.reminder_datetime is None:
            return record
        return record.merged(reminder_datetime=result.reminder_datetime)
