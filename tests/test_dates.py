"""Tests for timestamp formatting and parsing."""

from datetime import datetime, timedelta, timezone

from radar_verified_location.dates import format_timestamp, parse_timestamp


class TestFormatTimestamp:
    """Tests for format_timestamp."""

    def test_whole_seconds(self):
        """Whole seconds render without a fraction."""
        value = datetime(2024, 1, 1, tzinfo=timezone.utc)
        assert format_timestamp(value) == "2024-01-01T00:00:00Z"

    def test_milliseconds(self):
        """Sub-second values render to the millisecond."""
        value = datetime(2024, 1, 1, 0, 0, 1, 123456, tzinfo=timezone.utc)
        assert format_timestamp(value) == "2024-01-01T00:00:01.123Z"

    def test_offset_converted_to_utc(self):
        """Aware datetimes in other zones are converted."""
        value = datetime(2023, 12, 31, 19, 0, tzinfo=timezone(timedelta(hours=-5)))
        assert format_timestamp(value) == "2024-01-01T00:00:00Z"

    def test_out_of_range_after_utc_shift_is_clamped(self):
        """Instants past datetime.max in UTC clamp instead of raising."""
        late = datetime.max.replace(tzinfo=timezone(timedelta(hours=-5)))
        assert format_timestamp(late) == "9999-12-31T23:59:59.999Z"

        early = datetime.min.replace(tzinfo=timezone(timedelta(hours=5)))
        assert format_timestamp(early) == "0001-01-01T00:00:00Z"

    def test_naive_taken_as_utc(self):
        """Naive datetimes are treated as UTC."""
        assert format_timestamp(datetime(2024, 1, 1)) == "2024-01-01T00:00:00Z"


class TestParseTimestamp:
    """Tests for parse_timestamp."""

    def test_zulu(self):
        """Trailing Z means UTC."""
        assert parse_timestamp("2024-01-01T00:00:00Z") == datetime(
            2024, 1, 1, tzinfo=timezone.utc
        )

    def test_zulu_with_milliseconds(self):
        """The API's millisecond format is accepted."""
        assert parse_timestamp("2024-01-01T00:00:00.250Z") == datetime(
            2024, 1, 1, 0, 0, 0, 250000, tzinfo=timezone.utc
        )

    def test_numeric_offset(self):
        """Offsets are normalized to UTC."""
        parsed = parse_timestamp("2024-01-01T02:00:00+02:00")
        assert parsed == datetime(2024, 1, 1, tzinfo=timezone.utc)
        assert parsed.tzinfo == timezone.utc

    def test_fraction_of_any_length(self):
        """Short and long fractions are accepted."""
        assert parse_timestamp("2024-01-01T00:00:00.5Z") == datetime(
            2024, 1, 1, 0, 0, 0, 500000, tzinfo=timezone.utc
        )
        assert parse_timestamp("2024-01-01T00:00:00.12Z") == datetime(
            2024, 1, 1, 0, 0, 0, 120000, tzinfo=timezone.utc
        )
        assert parse_timestamp("2024-01-01T00:00:00.123456789+00:00") == datetime(
            2024, 1, 1, 0, 0, 0, 123456, tzinfo=timezone.utc
        )

    def test_out_of_range_offset(self):
        """Text past datetime.max once shifted to UTC returns None."""
        assert parse_timestamp("9999-12-31T23:59:59-05:00") is None

    def test_no_offset_taken_as_utc(self):
        """Text without an offset is taken to be UTC."""
        parsed = parse_timestamp("2024-01-01T00:00:00")
        assert parsed == datetime(2024, 1, 1, tzinfo=timezone.utc)

    def test_invalid(self):
        """Unparseable text returns None."""
        assert parse_timestamp("tomorrow") is None
        assert parse_timestamp("") is None

    def test_format_then_parse(self):
        """Formatted text parses back to the same instant."""
        value = datetime(2024, 6, 15, 8, 30, 45, 123000, tzinfo=timezone.utc)
        assert parse_timestamp(format_timestamp(value)) == value
