"""Tests for date formats, the formatter registry and pattern translation."""

from datetime import datetime, timedelta, timezone

import pytest
from json_codable.date_format import (
    DateFormat,
    DateFormatKind,
    DateFormatRegistry,
    ISO8601,
    MILLISECONDS_SINCE_1970,
    SECONDS_SINCE_1970,
    date_format,
    epoch_milliseconds,
)
from json_codable.utils.date_patterns import compile_pattern


REFERENCE_SECONDS = 719971200  # 1992-10-25T00:00:00Z


class TestDateFormat:
    """Tests for DateFormat values."""

    def test_equality(self):
        """Test that formats compare by kind and pattern."""
        assert SECONDS_SINCE_1970 == DateFormat(DateFormatKind.SECONDS_SINCE_1970)
        assert MILLISECONDS_SINCE_1970 == DateFormat(DateFormatKind.MILLISECONDS_SINCE_1970)
        assert ISO8601 == DateFormat(DateFormatKind.ISO8601)
        assert date_format("ok kewl") == date_format("ok kewl")
        assert date_format("MM") != date_format("dd")
        assert ISO8601 != SECONDS_SINCE_1970

    def test_hashable(self):
        """Test use as a dictionary key."""
        assert len({date_format("MM"), date_format("MM"), ISO8601}) == 2

    def test_pattern_rules(self):
        """Test that only custom formats carry a pattern."""
        with pytest.raises(ValueError):
            DateFormat(DateFormatKind.CUSTOM)
        with pytest.raises(ValueError):
            DateFormat(DateFormatKind.ISO8601, "yyyy")

    def test_is_timestamp(self):
        """Test the timestamp property."""
        assert SECONDS_SINCE_1970.is_timestamp
        assert MILLISECONDS_SINCE_1970.is_timestamp
        assert not ISO8601.is_timestamp
        assert not date_format("yyyy").is_timestamp


@pytest.mark.parametrize("from_format, date_string", [
    (SECONDS_SINCE_1970, str(REFERENCE_SECONDS)),
    (MILLISECONDS_SINCE_1970, str(REFERENCE_SECONDS * 1000)),
    (date_format("EEEE, MMM d, yyyy"), "Sunday, Oct 25, 1992"),
    (ISO8601, "1992-10-25T00:00:00+0000"),
])
class TestDateFormatRegistryConvert:
    """Conversions between every pair of formats, from each source format."""

    def setup_method(self):
        """Set up test fixtures."""
        self.registry = DateFormatRegistry()

    def test_to_seconds(self, from_format, date_string):
        """Test conversion to a seconds timestamp."""
        assert self.registry.convert(date_string, from_format, SECONDS_SINCE_1970) == str(REFERENCE_SECONDS)

    def test_to_milliseconds(self, from_format, date_string):
        """Test conversion to a milliseconds timestamp."""
        assert self.registry.convert(date_string, from_format, MILLISECONDS_SINCE_1970) == str(REFERENCE_SECONDS * 1000)

    def test_to_custom_format(self, from_format, date_string):
        """Test conversion to a custom pattern."""
        assert self.registry.convert(date_string, from_format, date_format("MMM-dd yy")) == "Oct-25 92"

    def test_to_iso8601(self, from_format, date_string):
        """Test conversion to ISO-8601."""
        assert self.registry.convert(date_string, from_format, ISO8601) == "1992-10-25T00:00:00+0000"


class TestDateFormatRegistry:
    """Tests for DateFormatRegistry."""

    def setup_method(self):
        """Set up test fixtures."""
        self.registry = DateFormatRegistry()

    def test_formatters_are_cached(self):
        """Test that each format is compiled once."""
        fmt = date_format("MM-dd-yyyy")
        assert self.registry.formatter(fmt) is self.registry.formatter(fmt)

    def test_parse_returns_aware_datetimes(self):
        """Test that parsed values always carry a zone."""
        moment = self.registry.parse("10-25-1992", date_format("MM-dd-yyyy"))
        assert moment == datetime(1992, 10, 25, tzinfo=timezone.utc)
        assert moment.tzinfo is not None

    def test_parse_failure_returns_none(self):
        """Test unparseable input."""
        assert self.registry.parse("yesterday", ISO8601) is None
        assert self.registry.parse("yesterday", SECONDS_SINCE_1970) is None
        assert self.registry.parse("25-10-1992x", date_format("dd-MM-yyyy")) is None
        assert self.registry.convert("yesterday", ISO8601, SECONDS_SINCE_1970) is None

    def test_configured_timezone(self):
        """Test that patterns without an offset are read in the registry's zone."""
        registry = DateFormatRegistry(timezone=timezone(timedelta(hours=-7)))
        moment = registry.parse("10-25-1992", date_format("MM-dd-yyyy"))
        assert registry.to_milliseconds(moment) == (REFERENCE_SECONDS + 7 * 3600) * 1000
        assert registry.format(moment, date_format("MM-dd-yyyy HH:mm")) == "10-25-1992 00:00"

    def test_iso8601_without_offset_uses_registry_zone(self):
        """Test naive ISO-8601 strings."""
        moment = self.registry.parse("1992-10-25T07:00:00", ISO8601)
        assert self.registry.to_milliseconds(moment) == 719996400000

    def test_milliseconds_round_trip_before_epoch(self):
        """Test negative timestamps."""
        moment = datetime(1896, 7, 4, tzinfo=timezone.utc)
        milliseconds = self.registry.to_milliseconds(moment)
        assert milliseconds < 0
        assert self.registry.from_milliseconds(milliseconds) == moment

    def test_naive_datetimes_use_registry_zone(self):
        """Test to_milliseconds with a naive datetime."""
        assert self.registry.to_milliseconds(datetime(1992, 10, 25)) == REFERENCE_SECONDS * 1000

    def test_epoch_milliseconds_truncates(self):
        """Test sub-millisecond precision is dropped toward zero."""
        moment = datetime(1970, 1, 1, 0, 0, 1, 999, tzinfo=timezone.utc)
        assert epoch_milliseconds(moment) == 1000
        assert epoch_milliseconds(datetime(1969, 12, 31, 23, 59, 59, 999500, tzinfo=timezone.utc)) == 0

    @pytest.mark.parametrize("text", ["nan", "inf", "-inf", "1e20"])
    def test_unrepresentable_timestamps_return_none(self, text):
        """Test timestamps outside the datetime range."""
        assert self.registry.parse(text, SECONDS_SINCE_1970) is None
        assert self.registry.parse(text, MILLISECONDS_SINCE_1970) is None
        assert self.registry.convert(text, SECONDS_SINCE_1970, ISO8601) is None

    @pytest.mark.parametrize("text", ["1000", "20201025", "1992-10-25", "19921025T070000Z"])
    def test_iso8601_requires_extended_date_and_time(self, text):
        """Test that reduced and basic ISO-8601 forms are rejected."""
        assert self.registry.parse(text, ISO8601) is None

    def test_pattern_with_offset_keeps_parsed_zone(self):
        """Test that an explicit offset wins over the registry zone."""
        registry = DateFormatRegistry(timezone=timezone(timedelta(hours=-7)))
        moment = registry.parse("1992-10-25 07:00 +0000", date_format("yyyy-MM-dd HH:mm Z"))
        assert registry.to_milliseconds(moment) == 719996400000

        raw = registry.parse("25/10/1992 07:00 +0000", date_format("%d/%m/%Y %H:%M %z"))
        assert registry.to_milliseconds(raw) == 719996400000

    def test_invalid_pattern_raises(self):
        """Test that unsupported pattern letters are configuration errors."""
        with pytest.raises(ValueError, match="Unsupported date pattern field"):
            self.registry.parse("AD 1992", date_format("G yyyy"))


class TestDatePatterns:
    """Tests for Unicode pattern translation."""

    @pytest.mark.parametrize("pattern, expected", [
        ("MM-dd-yyyy", "%m-%d-%Y"),
        ("EEEE, MMM d, yyyy", "%A, %b %d, %Y"),
        ("yyyy-MM-dd'T'HH:mm:ss", "%Y-%m-%dT%H:%M:%S"),
        ("h 'o''clock' a", "%I o'clock %p"),
        ("dd MMMM yy", "%d %B %y"),
        ("yyyy-MM-dd HH:mm:ss.SSSZ", "%Y-%m-%d %H:%M:%S.%f%z"),
        ("100% MM", "100% MM"),
    ])
    def test_strptime_pattern(self, pattern, expected):
        """Test the translated strptime directives."""
        assert compile_pattern(pattern).strptime_pattern == expected

    def test_quoted_literals(self):
        """Test quoted text and escaped quotes."""
        moment = datetime(1992, 10, 25, 7)
        assert compile_pattern("yyyy'T'HH").format(moment) == "1992T07"
        assert compile_pattern("''yy''").format(moment) == "'92'"
        assert compile_pattern("h 'o''clock' a").format(moment) == "7 o'clock AM"

    def test_single_letter_fields_are_unpadded(self):
        """Test formatting of short numeric fields."""
        moment = datetime(1896, 7, 4, 9, 5, tzinfo=timezone.utc)
        assert compile_pattern("M/d/yyyy").format(moment) == "7/4/1896"
        assert compile_pattern("MM/dd/yyyy h:mm a").format(moment) == "07/04/1896 9:05 AM"

    def test_single_digit_values_parse(self):
        """Test that unpadded input is accepted."""
        assert compile_pattern("MM-dd-yyyy").parse("7-4-1896") == datetime(1896, 7, 4)

    def test_fraction_of_second(self):
        """Test millisecond fields."""
        compiled = compile_pattern("HH:mm:ss.SSS")
        moment = datetime(1992, 10, 25, 7, 0, 0, 123456)
        assert compiled.format(moment) == "07:00:00.123"
        assert compiled.parse("07:00:00.123").microsecond == 123000

    def test_offset_formatting(self):
        """Test the offset field variants."""
        moment = datetime(1992, 10, 25, 7, tzinfo=timezone.utc)
        assert compile_pattern("HHZ").format(moment) == "07+0000"
        assert compile_pattern("HHXXXXX").format(moment) == "07Z"
        assert compile_pattern("HHxxx").format(moment) == "07+00:00"
        assert compile_pattern("HHZ").has_offset
        assert compile_pattern("%Y %z").has_offset
        assert not compile_pattern("MM-dd-yyyy").has_offset

    def test_unterminated_quote(self):
        """Test malformed quoting."""
        with pytest.raises(ValueError, match="Unterminated quote"):
            compile_pattern("yyyy 'T")

    def test_raw_strftime_pattern(self):
        """Test patterns that are already strftime directives."""
        compiled = compile_pattern("%d/%m/%Y")
        assert compiled.parse("25/10/1992") == datetime(1992, 10, 25)
        assert compiled.format(datetime(1992, 10, 25)) == "25/10/1992"
