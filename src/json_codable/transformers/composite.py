"""Composition of transformers and coercion of table shorthands."""

from typing import TYPE_CHECKING, Any, Optional, Tuple

from ..date_format import DateFormat
from ..key_path import KeyPath
from ..types import JSONObject, PropertyKey
from .base import Transformer
from .date import DateTransform
from .path import PathRemap

if TYPE_CHECKING:
    from ..adapter import TransformContext


class CompositeTransformer(Transformer):
    """
    Several transformers applied to the same property, left to right.

    Each child sees the effects of the ones before it. ``reverse_transform``
    walks the children in the same declared order, not in reverse.
    """

    def __init__(self, *transformers: Transformer):
        self.transformers: Tuple[Transformer, ...] = tuple(transformers)

    @property
    def key_path(self) -> Optional[KeyPath]:
        for transformer in self.transformers:
            if transformer.key_path is not None:
                return transformer.key_path
        return None

    def transform(self, json: JSONObject, key: PropertyKey, context: "TransformContext") -> None:
        for transformer in self.transformers:
            transformer.transform(json, key, context)

    def reverse_transform(self, json: JSONObject, key: PropertyKey, context: "TransformContext") -> None:
        for transformer in self.transformers:
            transformer.reverse_transform(json, key, context)

    def __repr__(self) -> str:
        return f"CompositeTransformer({', '.join(repr(t) for t in self.transformers)})"


def as_transformer(value: Any) -> Transformer:
    """
    Accept the shorthands allowed in a transformer table.

    A ``str``, ``int`` or ``KeyPath`` becomes a PathRemap; a DateFormat
    becomes a DateTransform reading the property's own key.

    Raises:
        TypeError: If ``value`` is none of the accepted kinds
    """
    if isinstance(value, Transformer):
        return value
    if isinstance(value, DateFormat):
        return DateTransform(value)
    if isinstance(value, (KeyPath, str)) or (isinstance(value, int) and not isinstance(value, bool)):
        return PathRemap(value)
    raise TypeError(f"Cannot use {type(value).__name__} as a transformer")


def compose(*transformers: Any) -> CompositeTransformer:
    """Chain transformers so they run left to right on one property."""
    flattened = []
    for value in transformers:
        transformer = as_transformer(value)
        if isinstance(transformer, CompositeTransformer):
            flattened.extend(transformer.transformers)
        else:
            flattened.append(transformer)
    return CompositeTransformer(*flattened)
