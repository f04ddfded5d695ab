"""Transformer normalizing dates to milliseconds since the UNIX epoch."""

import math
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Any, Callable, Optional, Union

from ..date_format import DateFormat, DateFormatKind, DateFormatRegistry
from ..key_path import KeyPath
from ..types import JSONObject, PropertyKey
from .base import Transformer

if TYPE_CHECKING:
    from ..adapter import TransformContext


DateAdapter = Callable[[Any], Optional[datetime]]


class DateTransform(Transformer):
    """
    Convert the date at ``key_path`` to an epoch-milliseconds integer.

    The structural codec decodes every date from milliseconds since 1970, so
    each date field in the source document, whatever its shape, is rewritten
    to that one representation. Either ``date_format`` or ``adapter`` must be
    given. An ``adapter`` receives the raw value (``MISSING`` when absent) and
    returns a datetime or None; None leaves the field untouched so a required
    date fails to decode.
    """

    def __init__(self, date_format: Optional[DateFormat] = None,
                 key_path: Optional[Any] = None,
                 adapter: Optional[DateAdapter] = None):
        if (date_format is None) == (adapter is None):
            raise ValueError("DateTransform needs exactly one of date_format or adapter")
        self.date_format = date_format
        self.adapter = adapter
        self.key_path = None if key_path is None else KeyPath.coerce(key_path)

    def transform(self, json: JSONObject, key: PropertyKey, context: "TransformContext") -> None:
        raw = self.resolved_key_path(key).get(json)
        registry = context.date_formats

        if self.adapter is not None:
            moment = self.adapter(raw)
            if moment is None:
                context.logger.debug(f"Date adapter produced no date for '{key}'")
                return
            json[key] = registry.to_milliseconds(moment)
            return

        milliseconds = self._milliseconds(raw, registry)
        if milliseconds is None:
            context.logger.debug(f"Could not read {raw!r} as {self.date_format!r} for '{key}'")
            return
        json[key] = milliseconds

    def reverse_transform(self, json: JSONObject, key: PropertyKey, context: "TransformContext") -> None:
        if self.adapter is not None:
            return
        milliseconds = _number(json.get(key))
        if milliseconds is None:
            return
        registry = context.date_formats
        text = registry.format(registry.from_milliseconds(milliseconds), self.date_format)
        self._write_back(json, key, int(text) if self.date_format.is_timestamp else text)

    def _milliseconds(self, raw: Any, registry: DateFormatRegistry) -> Optional[int]:
        if isinstance(raw, bool) or not isinstance(raw, (str, int, float)):
            return None
        kind = self.date_format.kind
        if kind is DateFormatKind.MILLISECONDS_SINCE_1970:
            number = _number(raw)
            return None if number is None else int(number)
        if kind is DateFormatKind.SECONDS_SINCE_1970:
            number = _number(raw)
            return None if number is None else int(number * 1000)
        if not isinstance(raw, str):
            return None
        moment = registry.parse(raw, self.date_format)
        if moment is None:
            return None
        return registry.to_milliseconds(moment)

    def __repr__(self) -> str:
        source = self.adapter if self.adapter is not None else self.date_format
        return f"DateTransform({source!r}, key_path={self.key_path!r})"


def _number(value: Any) -> Optional[Union[int, float]]:
    if isinstance(value, bool):
        return None
    if isinstance(value, str):
        try:
            value = int(value)
        except ValueError:
            try:
                value = float(value)
            except ValueError:
                return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and math.isfinite(value):
        return value
    return None


def current_date(key_path: Optional[Any] = None) -> DateTransform:
    """A date transformer that always yields the time of decoding."""
    return DateTransform(key_path=key_path, adapter=lambda _: datetime.now(timezone.utc))
