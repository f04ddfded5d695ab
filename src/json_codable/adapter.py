"""Codable adapter: transformer rewriting around the structural codec."""

import copy
import logging
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional

from .codec import JSONCodable, StructuralCodec
from .date_format import DateFormatRegistry
from .parser import JSONParser
from .transformers import Transformer, as_transformer
from .types import (
    DataType,
    JSONObject,
    SchemaDepthError,
    SchemaError,
    ShapeMismatchError,
    StructuralCodecInterface,
)


@dataclass(frozen=True)
class TransformContext:
    """State shared by the transformers of one rewrite level."""
    adapter: "CodableAdapter"
    depth: int = 0

    @property
    def date_formats(self) -> DateFormatRegistry:
        return self.adapter.date_formats

    @property
    def logger(self) -> logging.Logger:
        return self.adapter.logger

    def alter(self, schema: type, obj: JSONObject) -> JSONObject:
        """Rewrite a nested object with ``schema``'s transformers, one level deeper."""
        return self.adapter._rewrite(schema, obj, self.depth + 1, reverse=False)

    def restore(self, schema: type, obj: JSONObject) -> JSONObject:
        """Reverse-rewrite a nested object with ``schema``'s transformers, one level deeper."""
        return self.adapter._rewrite(schema, obj, self.depth + 1, reverse=True)


class CodableAdapter:
    """
    Decodes JSON into JSONCodable instances and encodes them back.

    Decoding rewrites the source object with the schema's transformer table
    (recursing into nested schemas, innermost levels finished first) and then
    hands the schema-shaped object to the structural codec. Encoding runs the
    structural codec first and then applies every reverse transformer.
    A decode or encode either fully succeeds or raises; the input is never
    modified.
    """

    def __init__(self, date_formats: Optional[DateFormatRegistry] = None,
                 codec: Optional[StructuralCodecInterface] = None,
                 parser: Optional[JSONParser] = None,
                 max_depth: int = 32,
                 logger: Optional[logging.Logger] = None):
        """
        Initialize the adapter.

        Args:
            date_formats: Formatter registry used by date transformers
            codec: Structural codec binding schema-shaped objects to instances
            parser: JSON text parser and serializer
            max_depth: Maximum nesting depth of nested schema rewrites
            logger: Optional logger instance
        """
        if max_depth < 0:
            raise ValueError("max_depth must not be negative")
        self.logger = logger or logging.getLogger(__name__)
        self.date_formats = date_formats or DateFormatRegistry(logger=self.logger)
        self.codec = codec or StructuralCodec()
        self.parser = parser or JSONParser(logger=self.logger)
        self.max_depth = max_depth

    def transformer_table(self, schema: type) -> Dict[str, Transformer]:
        """
        Return ``schema``'s transformer table with shorthands coerced.

        Raises:
            SchemaError: If ``schema`` is not a JSONCodable subclass or an entry
                is not usable as a transformer
        """
        if not (isinstance(schema, type) and issubclass(schema, JSONCodable)):
            raise SchemaError(f"{schema!r} is not a JSONCodable schema")
        table = {}
        for key, value in schema.transformers.items():
            try:
                table[key] = as_transformer(value)
            except TypeError as e:
                raise SchemaError(f"{schema.__name__}.transformers['{key}']: {e}") from e
        return table

    def alter(self, schema: type, obj: JSONObject) -> JSONObject:
        """
        Apply ``schema``'s transformers to a copy of ``obj``.

        Args:
            schema: JSONCodable subclass
            obj: Source-shaped JSON object

        Returns:
            Schema-shaped JSON object
        """
        self._require(obj, DataType.DICT)
        return self._rewrite(schema, obj, 0, reverse=False)

    def restore(self, schema: type, obj: JSONObject) -> JSONObject:
        """Apply ``schema``'s reverse transformers to a copy of a schema-shaped ``obj``."""
        self._require(obj, DataType.DICT)
        return self._rewrite(schema, obj, 0, reverse=True)

    def decode(self, schema: type, data: Any) -> Any:
        """
        Decode one instance of ``schema``.

        Args:
            schema: JSONCodable subclass
            data: JSON text, UTF-8 bytes or an already parsed JSON object

        Returns:
            The decoded instance

        Raises:
            ShapeMismatchError: If the JSON value is not an object
            ProcessingError: If JSON text cannot be parsed
            pydantic.ValidationError: If the rewritten object does not fit the schema
        """
        value = self._load(data)
        self._require(value, DataType.DICT)
        self.logger.debug(f"Decoding {schema.__name__}")
        return self.codec.decode(schema, self._rewrite(schema, value, 0, reverse=False))

    def decode_list(self, schema: type, data: Any) -> List[Any]:
        """
        Decode an array of ``schema`` instances, preserving order.

        Raises:
            ShapeMismatchError: If the JSON value is not an array of objects
        """
        value = self._load(data)
        self._require(value, DataType.LIST)
        for index, item in enumerate(value):
            self._require(item, DataType.DICT, f"[{index}]")
        self.logger.debug(f"Decoding {len(value)} {schema.__name__} objects")
        return [self.codec.decode(schema, self._rewrite(schema, item, 0, reverse=False)) for item in value]

    def encode_to_value(self, value: Any) -> JSONObject:
        """Encode an instance to a source-shaped JSON object."""
        schema = type(value)
        self.transformer_table(schema)
        self.logger.debug(f"Encoding {schema.__name__}")
        return self._rewrite(schema, self.codec.encode(value), 0, reverse=True)

    def encode(self, value: Any) -> bytes:
        """Encode an instance to UTF-8 JSON text."""
        return self.parser.serialize(self.encode_to_value(value))

    def encode_list_to_value(self, values: Iterable[Any]) -> List[JSONObject]:
        return [self.encode_to_value(value) for value in values]

    def encode_list(self, values: Iterable[Any]) -> bytes:
        """Encode instances to a UTF-8 JSON array."""
        return self.parser.serialize(self.encode_list_to_value(values))

    def _rewrite(self, schema: type, obj: JSONObject, depth: int, reverse: bool) -> JSONObject:
        if depth > self.max_depth:
            self.logger.warning(f"Refusing to rewrite {schema.__name__} deeper than {self.max_depth} levels")
            raise SchemaDepthError(schema.__name__, self.max_depth)
        table = self.transformer_table(schema)
        working = copy.deepcopy(obj)
        context = TransformContext(self, depth)
        for key, transformer in table.items():
            if reverse:
                transformer.reverse_transform(working, key, context)
            else:
                transformer.transform(working, key, context)
        return working

    def _load(self, data: Any) -> Any:
        if isinstance(data, (str, bytes, bytearray)):
            return self.parser.parse(data)
        return data

    @staticmethod
    def _require(value: Any, expected: DataType, location: str = "root") -> None:
        received = DataType.of(value)
        if received is not expected:
            raise ShapeMismatchError(expected, received, location)


default_adapter = CodableAdapter()
