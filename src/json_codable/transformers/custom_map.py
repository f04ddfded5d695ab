"""Transformer applying a user function to a raw JSON value."""

from typing import TYPE_CHECKING, Any, Callable, Optional

from ..key_path import KeyPath
from ..types import JSONObject, PropertyKey
from .base import Transformer

if TYPE_CHECKING:
    from ..adapter import TransformContext


class CustomMap(Transformer):
    """
    Store ``function(raw)`` under the property key.

    ``function`` receives the value at ``key_path`` (``MISSING`` when absent)
    and returns the schema-ready value, or None to leave the field alone.
    The optional ``reverse`` maps the encoded value back for the source
    document.
    """

    def __init__(self, function: Callable[[Any], Any],
                 key_path: Optional[Any] = None,
                 reverse: Optional[Callable[[Any], Any]] = None):
        self.function = function
        self.reverse = reverse
        self.key_path = None if key_path is None else KeyPath.coerce(key_path)

    def transform(self, json: JSONObject, key: PropertyKey, context: "TransformContext") -> None:
        value = self.function(self.resolved_key_path(key).get(json))
        if value is None:
            context.logger.debug(f"Custom map produced no value for '{key}'")
            return
        json[key] = value

    def reverse_transform(self, json: JSONObject, key: PropertyKey, context: "TransformContext") -> None:
        if self.reverse is None or key not in json:
            return
        value = self.reverse(json[key])
        if value is None:
            return
        self._write_back(json, key, value)
