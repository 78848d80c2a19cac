"""Summary card counts for visitors and shoppers."""

import asyncio
import logging

from customer_counts.errors import AuthError
from customer_counts.remote.gateway import RemoteGateway
from customer_counts.schemas.customer_schema import Category
from customer_counts.schemas.view_schema import CountsSnapshot

logger = logging.getLogger(__name__)


class CountsAggregator:
    """
    Fetches both category lists and exposes their sizes.

    Both counts change together: if either fetch fails, both reset to zero
    rather than showing one real number next to a stale or missing one.
    """

    def __init__(self, gateway: RemoteGateway) -> None:
        self._gateway = gateway
        self._snapshot = CountsSnapshot()
        self._busy = False

    @property
    def snapshot(self) -> CountsSnapshot:
        return self._snapshot

    @property
    def busy(self) -> bool:
        return self._busy

    async def refresh(self) -> CountsSnapshot:
        """Refetch both counts; a refresh already in flight makes this a no-op.

        Transport failures are logged and leave the counts at zero. A
        rejected credential also zeroes the counts but is re-raised so the
        caller can send the user back to sign in.
        """
        if self._busy:
            logger.debug("Counts refresh already in progress, ignoring request")
            return self._snapshot

        self._busy = True
        try:
            results = await asyncio.gather(
                self._gateway.list_by_category(Category.VISITORS),
                self._gateway.list_by_category(Category.SHOPPERS),
                return_exceptions=True,
            )
        finally:
            self._busy = False

        errors = [r for r in results if isinstance(r, BaseException)]
        if not errors:
            visitors, shoppers = results
            self._snapshot = CountsSnapshot(
                visitor_count=len(visitors), shopper_count=len(shoppers)
            )
            logger.info(
                "Counts refreshed: %d visitors, %d shoppers",
                self._snapshot.visitor_count, self._snapshot.shopper_count,
            )
            return self._snapshot

        self._snapshot = CountsSnapshot()
        for error in errors:
            if not isinstance(error, Exception):
                raise error
        for error in errors:
            logger.error("Error fetching customer counts: %s", error)
        auth_error = next((e for e in errors if isinstance(e, AuthError)), None)
        if auth_error is not None:
            raise auth_error
        return self._snapshot
