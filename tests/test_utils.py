"""Tests for store timestamp parsing and formatting."""

from datetime import datetime, timedelta, timezone

from infrastructure.utils import format_display_date, parse_store_datetime


class TestParseStoreDatetime:
    def test_offset_timestamp(self):
        dt = parse_store_datetime("2024-05-01T10:20:30.123456+02:00")
        assert dt.utcoffset() == timedelta(hours=2)
        assert dt.microsecond == 123456

    def test_zulu_suffix(self):
        assert parse_store_datetime("2024-05-01T10:20:30Z").tzinfo is not None

    def test_naive_is_utc(self):
        assert parse_store_datetime("2024-05-01T10:20:30").tzinfo == timezone.utc

    def test_datetime_passthrough(self):
        value = datetime(2024, 1, 1)
        assert parse_store_datetime(value) == value.replace(tzinfo=timezone.utc)

    def test_invalid_values(self):
        assert parse_store_datetime(None) is None
        assert parse_store_datetime("") is None
        assert parse_store_datetime("yesterday") is None


class TestFormatDisplayDate:
    def test_none(self):
        assert format_display_date(None) == ""

    def test_date_format(self):
        text = format_display_date(datetime(2024, 6, 15, 12, 0, tzinfo=timezone.utc))
        assert len(text) == 10
        assert text.startswith("2024-06-1")
