"""Shared date/time helpers used across the customer count screen."""

from datetime import datetime
from typing import Optional

# yyyy-MM-dd'T'HH:mm:ss, local wall-clock time, no offset
WIRE_DATETIME_FORMAT = "%Y-%m-%dT%H:%M:%S"


def format_wire_datetime(value: datetime) -> str:
    """Format a reminder for the remote service.

    Aware datetimes are converted to local time first; the offset itself
    is never sent.

    Examples:
        >>> format_wire_datetime(datetime(2024, 1, 1, 10, 0, 0, 123456))
        '2024-01-01T10:00:00'
    """
    if value.tzinfo is not None:
        value = value.astimezone().replace(tzinfo=None)
    return value.strftime(WIRE_DATETIME_FORMAT)


def parse_server_datetime(value: Optional[str]) -> Optional[datetime]:
    """Parse a server timestamp, returning None for empty or unparseable values.

    The server echoes ISO-8601 strings, sometimes with fractional seconds
    or a trailing ``Z``.
    """
    if not value:
        return None
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        return None


def format_display_datetime(value: Optional[datetime], fmt: str) -> str:
    """Render a datetime for the list, or an empty string when unset."""
    if value is None:
        return ""
    return value.strftime(fmt)
