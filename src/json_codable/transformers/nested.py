"""Transformers applying a nested schema's own transformer table."""

from typing import TYPE_CHECKING, Any, Callable, Optional, Union

from ..key_path import KeyPath
from ..types import JSONObject, PropertyKey
from .base import Transformer

if TYPE_CHECKING:
    from ..adapter import TransformContext


class NestedObject(Transformer):
    """
    Rewrite the object at ``key_path`` with ``schema``'s transformers.

    The nested object is copied before it is rewritten, so other fields still
    see the source document unchanged. Anything other than an object at the
    path is left alone.

    ``schema`` may also be a zero-argument callable returning the class, for
    schemas that nest themselves (``NestedList(lambda: Person)``).
    """

    def __init__(self, schema: Union[type, Callable[[], type]], key_path: Optional[Any] = None):
        self._schema = schema
        self.key_path = None if key_path is None else KeyPath.coerce(key_path)

    @property
    def schema(self) -> type:
        if isinstance(self._schema, type):
            return self._schema
        return self._schema()

    def transform(self, json: JSONObject, key: PropertyKey, context: "TransformContext") -> None:
        source = self.resolved_key_path(key).get(json)
        if not isinstance(source, dict):
            context.logger.debug(f"No object at {self.resolved_key_path(key)} for '{key}'")
            return
        json[key] = context.alter(self.schema, source)

    def reverse_transform(self, json: JSONObject, key: PropertyKey, context: "TransformContext") -> None:
        value = json.get(key)
        if not isinstance(value, dict):
            return
        self._write_back(json, key, context.restore(self.schema, value))

    def __repr__(self) -> str:
        name = self._schema.__name__ if isinstance(self._schema, type) else "<deferred>"
        return f"{type(self).__name__}({name}, key_path={self.key_path!r})"


class NestedList(NestedObject):
    """
    Rewrite every object of the array at ``key_path`` with ``schema``'s transformers.

    Order and length are preserved. The field is left alone unless the path
    holds an array whose elements are all objects.
    """

    def transform(self, json: JSONObject, key: PropertyKey, context: "TransformContext") -> None:
        source = self.resolved_key_path(key).get(json)
        if not _is_object_list(source):
            context.logger.debug(f"No list of objects at {self.resolved_key_path(key)} for '{key}'")
            return
        json[key] = [context.alter(self.schema, item) for item in source]

    def reverse_transform(self, json: JSONObject, key: PropertyKey, context: "TransformContext") -> None:
        value = json.get(key)
        if not _is_object_list(value):
            return
        self._write_back(json, key, [context.restore(self.schema, item) for item in value])


def _is_object_list(value: Any) -> bool:
    return isinstance(value, list) and all(isinstance(item, dict) for item in value)
