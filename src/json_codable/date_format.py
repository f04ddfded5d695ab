"""Date formats and the formatter registry used by date transformers."""

import logging
import math
import re
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone, tzinfo
from enum import Enum
from typing import Dict, Optional, Union

from dateutil.parser import isoparse

from .utils.date_patterns import CompiledPattern, compile_pattern


EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

# Extended calendar date and time; reduced and basic forms are not dates here.
_ISO8601_DATETIME = re.compile(r"\d{4}-\d{2}-\d{2}T\d{2}:\d{2}")


class DateFormatKind(Enum):
    """Enumeration of the date representations found in JSON documents."""
    SECONDS_SINCE_1970 = "secondsSince1970"
    MILLISECONDS_SINCE_1970 = "millisecondsSince1970"
    ISO8601 = "iso8601"
    CUSTOM = "custom"


@dataclass(frozen=True)
class DateFormat:
    """How a date is written in JSON: a UNIX timestamp, ISO-8601 or a custom pattern."""
    kind: DateFormatKind
    pattern: Optional[str] = None

    def __post_init__(self):
        if (self.kind is DateFormatKind.CUSTOM) != (self.pattern is not None):
            raise ValueError("A pattern is required for, and only for, custom date formats")

    @property
    def is_timestamp(self) -> bool:
        return self.kind in (DateFormatKind.SECONDS_SINCE_1970, DateFormatKind.MILLISECONDS_SINCE_1970)

    def __repr__(self) -> str:
        if self.kind is DateFormatKind.CUSTOM:
            return f"DateFormat.custom({self.pattern!r})"
        return f"DateFormat.{self.kind.value}"


SECONDS_SINCE_1970 = DateFormat(DateFormatKind.SECONDS_SINCE_1970)
MILLISECONDS_SINCE_1970 = DateFormat(DateFormatKind.MILLISECONDS_SINCE_1970)
ISO8601 = DateFormat(DateFormatKind.ISO8601)


def date_format(pattern: str) -> DateFormat:
    """Build a custom date format from a Unicode pattern such as ``"MM-dd-yyyy"``."""
    return DateFormat(DateFormatKind.CUSTOM, pattern)


def epoch_milliseconds(moment: datetime, tz: tzinfo = timezone.utc) -> int:
    """Milliseconds since the UNIX epoch, truncated toward zero; naive values are read in ``tz``."""
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=tz)
    delta = moment - EPOCH
    micros = (delta.days * 86400 + delta.seconds) * 10**6 + delta.microseconds
    milliseconds = abs(micros) // 1000
    return milliseconds if micros >= 0 else -milliseconds


class _TimestampFormatter:

    def __init__(self, scale: int):
        self.scale = scale

    def parse(self, text: str, default_tz: tzinfo) -> Optional[datetime]:
        try:
            value = float(text)
        except ValueError:
            return None
        if not math.isfinite(value):
            return None
        try:
            return EPOCH + timedelta(seconds=value / self.scale)
        except OverflowError:
            return None

    def format(self, moment: datetime) -> str:
        delta = moment - EPOCH
        micros = (delta.days * 86400 + delta.seconds) * 10**6 + delta.microseconds
        # Truncate toward zero.
        units = abs(micros) * self.scale // 10**6
        return str(units if micros >= 0 else -units)


class _ISO8601Formatter:

    def parse(self, text: str, default_tz: tzinfo) -> Optional[datetime]:
        if not _ISO8601_DATETIME.match(text):
            return None
        try:
            moment = isoparse(text)
        except (ValueError, OverflowError):
            return None
        if moment.tzinfo is None:
            moment = moment.replace(tzinfo=default_tz)
        return moment

    def format(self, moment: datetime) -> str:
        return moment.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%S%z")


class _PatternFormatter:

    def __init__(self, compiled: CompiledPattern, tz: tzinfo):
        self.compiled = compiled
        self.tz = tz

    def parse(self, text: str, default_tz: tzinfo) -> Optional[datetime]:
        try:
            moment = self.compiled.parse(text)
        except ValueError:
            return None
        if not self.compiled.has_offset:
            moment = moment.replace(tzinfo=default_tz)
        return moment

    def format(self, moment: datetime) -> str:
        return self.compiled.format(moment.astimezone(self.tz))


DateFormatter = Union[_TimestampFormatter, _ISO8601Formatter, _PatternFormatter]


class DateFormatRegistry:
    """
    Builds and caches one formatter per date format.

    A registry is owned by a CodableAdapter and handed to date transformers
    through the transform context; nothing here is process-global.
    """

    def __init__(self, timezone: tzinfo = timezone.utc, logger: Optional[logging.Logger] = None):
        """
        Initialize the registry.

        Args:
            timezone: Zone assumed for parsed dates without an offset and used
                when formatting custom patterns
            logger: Optional logger instance
        """
        self.timezone = timezone
        self.logger = logger or logging.getLogger(__name__)
        self._storage: Dict[DateFormat, DateFormatter] = {}

    def formatter(self, fmt: DateFormat) -> DateFormatter:
        """
        Return the cached formatter for ``fmt``, building it on first use.

        Raises:
            ValueError: If a custom pattern cannot be compiled
        """
        formatter = self._storage.get(fmt)
        if formatter is None:
            formatter = self._build(fmt)
            self._storage[fmt] = formatter
            self.logger.debug(f"Compiled date formatter for {fmt!r}")
        return formatter

    def _build(self, fmt: DateFormat) -> DateFormatter:
        if fmt.kind is DateFormatKind.SECONDS_SINCE_1970:
            return _TimestampFormatter(1)
        if fmt.kind is DateFormatKind.MILLISECONDS_SINCE_1970:
            return _TimestampFormatter(1000)
        if fmt.kind is DateFormatKind.ISO8601:
            return _ISO8601Formatter()
        return _PatternFormatter(compile_pattern(fmt.pattern), self.timezone)

    def parse(self, text: str, fmt: DateFormat) -> Optional[datetime]:
        """Parse ``text`` written in ``fmt``; returns None when it does not match."""
        return self.formatter(fmt).parse(text, self.timezone)

    def format(self, moment: datetime, fmt: DateFormat) -> str:
        return self.formatter(fmt).format(self._aware(moment))

    def convert(self, text: str, from_format: DateFormat, to_format: DateFormat) -> Optional[str]:
        """
        Rewrite a date string from one format to another.

        Args:
            text: Date as written in ``from_format``
            from_format: Source format
            to_format: Target format

        Returns:
            The date written in ``to_format``, or None if ``text`` could not be parsed
        """
        moment = self.parse(text, from_format)
        if moment is None:
            return None
        return self.format(moment, to_format)

    def to_milliseconds(self, moment: datetime) -> int:
        """Milliseconds since the UNIX epoch, truncated toward zero."""
        return epoch_milliseconds(moment, self.timezone)

    @staticmethod
    def from_milliseconds(milliseconds: Union[int, float]) -> datetime:
        return EPOCH + timedelta(milliseconds=milliseconds)

    def _aware(self, moment: datetime) -> datetime:
        if moment.tzinfo is None:
            return moment.replace(tzinfo=self.timezone)
        return moment
