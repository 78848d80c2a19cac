"""Tests for shared date/time helpers."""

from datetime import datetime, timedelta, timezone

from customer_counts.utils import (
    format_display_datetime,
    format_wire_datetime,
    parse_server_datetime,
)


class TestFormatWireDatetime:
    def test_naive_datetime(self):
        assert format_wire_datetime(datetime(2024, 1, 1, 10, 0)) == "2024-01-01T10:00:00"

    def test_drops_microseconds(self):
        assert format_wire_datetime(datetime(2024, 12, 31, 23, 59, 58, 999999)) == "2024-12-31T23:59:58"

    def test_zero_padding(self):
        assert format_wire_datetime(datetime(2024, 3, 5, 7, 8, 9)) == "2024-03-05T07:08:09"

    def test_aware_datetime_sent_as_local_without_offset(self):
        aware = datetime(2024, 6, 1, 12, 0, tzinfo=timezone(timedelta(hours=5)))
        expected = aware.astimezone().strftime("%Y-%m-%dT%H:%M:%S")
        result = format_wire_datetime(aware)
        assert result == expected
        assert "+" not in result


class TestParseServerDatetime:
    def test_plain_iso(self):
        assert parse_server_datetime("2024-01-01T10:00:00") == datetime(2024, 1, 1, 10, 0)

    def test_fractional_seconds(self):
        parsed = parse_server_datetime("2024-01-01T10:00:00.250000")
        assert parsed.microsecond == 250000

    def test_trailing_z_is_utc(self):
        parsed = parse_server_datetime("2024-01-01T10:00:00Z")
        assert parsed.tzinfo is not None
        assert parsed.utcoffset() == timedelta(0)

    def test_empty_and_none(self):
        assert parse_server_datetime(None) is None
        assert parse_server_datetime("") is None

    def test_garbage_returns_none(self):
        assert parse_server_datetime("next tuesday") is None


class TestFormatDisplayDatetime:
    def test_none_renders_empty(self):
        assert format_display_datetime(None, "%Y") == ""

    def test_uses_given_format(self):
        value = datetime(2024, 1, 5, 14, 30)
        assert format_display_datetime(value, "%m/%d/%Y, %I:%M %p") == "01/05/2024, 02:30 PM"
