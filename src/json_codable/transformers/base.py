"""Base class shared by every field transformer."""

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Optional

from ..key_path import KeyPath
from ..types import JSONObject, PropertyKey

if TYPE_CHECKING:
    from ..adapter import TransformContext
    from .composite import CompositeTransformer


class Transformer(ABC):
    """
    Rewrites one schema field of a JSON object.

    ``transform`` runs before structural decoding and leaves the value the
    schema expects under the property key. ``reverse_transform`` runs after
    structural encoding and puts the value back where the source document
    keeps it. Transformers hold no mutable state and never raise for bad
    data: anything they cannot resolve is left as found, and a still-missing
    required field is reported by the structural decoder.
    """

    key_path: Optional[KeyPath] = None

    def resolved_key_path(self, key: PropertyKey) -> KeyPath:
        """Return the explicit source path, or the path named by the property key."""
        if self.key_path is not None:
            return self.key_path
        return KeyPath(key)

    @abstractmethod
    def transform(self, json: JSONObject, key: PropertyKey, context: "TransformContext") -> None:
        """Rewrite ``json`` so that ``json[key]`` holds the schema-ready value."""
        pass

    def reverse_transform(self, json: JSONObject, key: PropertyKey, context: "TransformContext") -> None:
        """Undo ``transform`` on schema-shaped ``json``; no-op unless overridden."""
        pass

    def then(self, other: Any) -> "CompositeTransformer":
        """Chain ``other`` after this transformer."""
        from .composite import compose
        return compose(self, other)

    def _write_back(self, json: JSONObject, key: PropertyKey, value: Any) -> None:
        # Move the value to the source location. When the path cannot be
        # reached the schema-shaped value stays under the property key.
        path = self.resolved_key_path(key)
        if path == KeyPath(key):
            json[key] = value
            return
        path.set(json, value)
        if path.get(json) is value:
            del json[key]

    def __repr__(self) -> str:
        return f"{type(self).__name__}(key_path={self.key_path!r})"
