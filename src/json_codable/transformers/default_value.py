"""Transformer supplying a literal value for a property."""

import copy
from typing import TYPE_CHECKING, Any

from ..types import JSONObject, PropertyKey
from .base import Transformer

if TYPE_CHECKING:
    from ..adapter import TransformContext


class DefaultValue(Transformer):
    """
    Store ``value`` under the property key.

    An existing entry, including an explicit JSON null, is kept unless
    ``override`` is set.
    """

    def __init__(self, value: Any, override: bool = False):
        self.value = value
        self.override = override

    def transform(self, json: JSONObject, key: PropertyKey, context: "TransformContext") -> None:
        if key in json and not self.override:
            return
        json[key] = copy.deepcopy(self.value)

    def __repr__(self) -> str:
        return f"DefaultValue({self.value!r}, override={self.override})"
