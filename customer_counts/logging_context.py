"""View-session correlation logging for the drill-down screen.

Every time a category list is opened a fresh view id is set, and loggers
obtained through ``get_view_logger`` attach it to each record. That makes
it easy to tell which drill-down session a late reminder fetch or a save
belongs to.

Usage:
    from customer_counts.logging_context import get_view_logger, set_view_id

    set_view_id("VIEW-3f2a1c")
    logger = get_view_logger(__name__)
    logger.info("Saving record")  # record.view_id == "VIEW-3f2a1c"
"""

import logging
import uuid
from contextvars import ContextVar

_view_id: ContextVar[str] = ContextVar("view_id", default="NO_VIEW")


def new_view_id() -> str:
    """Generate a short id for a drill-down session."""
    return f"VIEW-{uuid.uuid4().hex[:6]}"


def set_view_id(view_id: str) -> None:
    """Set the correlation id for the current async context."""
    _view_id.set(view_id)


def get_view_id() -> str:
    """Retrieve the current correlation id."""
    return _view_id.get()


class ViewIdFilter(logging.Filter):
    """Injects view_id into every log record."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.view_id = _view_id.get()  # type: ignore[attr-defined]
        return True


def get_view_logger(name: str) -> logging.Logger:
    """Return a logger with the ViewIdFilter attached.

    The filter adds ``view_id`` to each record so formatters can
    include ``%(view_id)s`` in their format string.
    """
    logger = logging.getLogger(name)
    if not any(isinstance(f, ViewIdFilter) for f in logger.filters):
        logger.addFilter(ViewIdFilter())
    return logger
