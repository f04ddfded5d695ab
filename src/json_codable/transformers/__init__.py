"""Field transformers applied before decoding and after encoding."""

from .base import Transformer
from .composite import CompositeTransformer, as_transformer, compose
from .custom_map import CustomMap
from .date import DateTransform, current_date
from .default_value import DefaultValue
from .nested import NestedList, NestedObject
from .path import PathRemap

__all__ = [
    "Transformer",
    "CompositeTransformer",
    "as_transformer",
    "compose",
    "CustomMap",
    "DateTransform",
    "current_date",
    "DefaultValue",
    "NestedList",
    "NestedObject",
    "PathRemap",
]
