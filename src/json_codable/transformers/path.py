"""Transformer that reads a property from another location in the document."""

from typing import TYPE_CHECKING, Any

from ..key_path import KeyPath
from ..types import MISSING, JSONObject, PropertyKey
from .base import Transformer

if TYPE_CHECKING:
    from ..adapter import TransformContext


class PathRemap(Transformer):
    """Copy the value found at ``key_path`` to the property key."""

    def __init__(self, key_path: Any):
        self.key_path = KeyPath.coerce(key_path)

    def transform(self, json: JSONObject, key: PropertyKey, context: "TransformContext") -> None:
        value = self.key_path.get(json)
        if value is MISSING:
            context.logger.debug(f"No value at {self.key_path} for '{key}'")
            return
        json[key] = value

    def reverse_transform(self, json: JSONObject, key: PropertyKey, context: "TransformContext") -> None:
        if key not in json:
            return
        self._write_back(json, key, json[key])
