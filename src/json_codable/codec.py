"""Structural codec: schema-shaped JSON objects to and from pydantic models."""

from datetime import datetime
from types import UnionType
from typing import (
    TYPE_CHECKING, Any, ClassVar, List, Mapping, Optional, Union,
    get_args, get_origin,
)

from pydantic import BaseModel, ConfigDict, ValidationInfo, field_serializer, field_validator

from .date_format import DateFormatRegistry, epoch_milliseconds
from .types import JSONObject, StructuralCodecInterface

if TYPE_CHECKING:
    from .adapter import CodableAdapter
    from .transformers import NestedList, NestedObject


def _accepts_datetime(annotation: Any) -> bool:
    if annotation is datetime:
        return True
    return get_origin(annotation) in (Union, UnionType) and datetime in get_args(annotation)


class JSONCodable(BaseModel):
    """
    Base class for schemas decoded from and encoded to JSON.

    Subclasses declare pydantic fields and, optionally, a ``transformers``
    table mapping property names to transformers (or to the shorthands
    accepted by ``as_transformer``)::

        class Tree(JSONCodable):
            transformers = {"name": "tree_name"}

            name: str
            age: int

    ``datetime`` fields are exchanged with the structural codec as
    milliseconds since the UNIX epoch.
    """

    model_config = ConfigDict(extra="ignore")

    transformers: ClassVar[Mapping[str, Any]] = {}

    @field_validator("*", mode="before")
    @classmethod
    def decode_epoch_milliseconds(cls, value: Any, info: ValidationInfo) -> Any:
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            return value
        field = cls.model_fields.get(info.field_name)
        if field is not None and _accepts_datetime(field.annotation):
            try:
                return DateFormatRegistry.from_milliseconds(value)
            except OverflowError as e:
                raise ValueError(f"{value} milliseconds is outside the supported date range") from e
        return value

    @field_serializer("*", mode="wrap")
    def encode_epoch_milliseconds(self, value: Any, handler: Any) -> Any:
        if isinstance(value, datetime):
            return epoch_milliseconds(value)
        return handler(value)

    @classmethod
    def decode(cls, data: Any, adapter: Optional["CodableAdapter"] = None) -> "JSONCodable":
        """Decode JSON text, UTF-8 bytes or a parsed object into an instance."""
        return _adapter(adapter).decode(cls, data)

    @classmethod
    def decode_list(cls, data: Any, adapter: Optional["CodableAdapter"] = None) -> List["JSONCodable"]:
        """Decode a JSON array of objects into a list of instances."""
        return _adapter(adapter).decode_list(cls, data)

    def encode(self, adapter: Optional["CodableAdapter"] = None) -> bytes:
        return _adapter(adapter).encode(self)

    def encode_to_value(self, adapter: Optional["CodableAdapter"] = None) -> JSONObject:
        return _adapter(adapter).encode_to_value(self)

    @classmethod
    def nested(cls, key_path: Optional[Any] = None) -> "NestedObject":
        """Transformer decoding an object of this schema inside a parent schema."""
        from .transformers import NestedObject
        return NestedObject(cls, key_path)

    @classmethod
    def nested_list(cls, key_path: Optional[Any] = None) -> "NestedList":
        """Transformer decoding an array of this schema inside a parent schema."""
        from .transformers import NestedList
        return NestedList(cls, key_path)


def _adapter(adapter: Optional["CodableAdapter"]) -> "CodableAdapter":
    if adapter is not None:
        return adapter
    from .adapter import default_adapter
    return default_adapter


class StructuralCodec(StructuralCodecInterface):
    """
    Binds schema-shaped objects to JSONCodable models through pydantic.

    pydantic's ValidationError is raised unchanged for missing fields,
    wrong primitive types and unknown enum values.
    """

    def decode(self, schema: type, obj: JSONObject) -> Any:
        return schema.model_validate(obj)

    def encode(self, instance: Any) -> JSONObject:
        return instance.model_dump(mode="json")

