"""
JSON Codable - declarative JSON-to-object mapping.

Schemas are pydantic models with a table of field transformers that reshape
source JSON (remapped paths, nested schemas, dates, defaults, custom
mappings) before structural decoding, and restore that shape when encoding.
"""

__version__ = "1.0.0"

from .adapter import CodableAdapter, TransformContext, default_adapter
from .codec import JSONCodable, StructuralCodec
from .date_format import (
    DateFormat,
    DateFormatKind,
    DateFormatRegistry,
    ISO8601,
    MILLISECONDS_SINCE_1970,
    SECONDS_SINCE_1970,
    date_format,
)
from .key_path import KeyPath, get_value, set_value
from .parser import JSONParser
from .transformers import (
    CompositeTransformer,
    CustomMap,
    DateTransform,
    DefaultValue,
    NestedList,
    NestedObject,
    PathRemap,
    Transformer,
    as_transformer,
    compose,
    current_date,
)
from .types import (
    MISSING,
    DataType,
    ErrorType,
    ProcessingError,
    SchemaDepthError,
    SchemaError,
    ShapeMismatchError,
)

__all__ = [
    "CodableAdapter",
    "TransformContext",
    "default_adapter",
    "JSONCodable",
    "StructuralCodec",
    "DateFormat",
    "DateFormatKind",
    "DateFormatRegistry",
    "ISO8601",
    "MILLISECONDS_SINCE_1970",
    "SECONDS_SINCE_1970",
    "date_format",
    "KeyPath",
    "get_value",
    "set_value",
    "JSONParser",
    "CompositeTransformer",
    "CustomMap",
    "DateTransform",
    "DefaultValue",
    "NestedList",
    "NestedObject",
    "PathRemap",
    "Transformer",
    "as_transformer",
    "compose",
    "current_date",
    "MISSING",
    "DataType",
    "ErrorType",
    "ProcessingError",
    "SchemaDepthError",
    "SchemaError",
    "ShapeMismatchError",
]
