"""Key paths addressing locations inside parsed JSON documents."""

from typing import Any, Iterable, Iterator, Tuple, Union

from .types import MISSING


Segment = Union[str, int]


class KeyPath:
    """
    An immutable route of object keys and array indices.

    String components are split on ``.`` so ``KeyPath("a.b", 0)`` has the
    segments ``("a", "b", 0)``. Integer components stay integers and are never
    produced by splitting, so ``KeyPath("a", "b", 1)`` differs from
    ``KeyPath("a", "b.1")``. A literal dot inside a key cannot be expressed.
    """

    __slots__ = ("_segments",)

    def __init__(self, *components: Any):
        segments = []
        for component in components:
            if isinstance(component, KeyPath):
                segments.extend(component.segments)
            elif isinstance(component, bool):
                raise TypeError(f"Key path components cannot be bool: {component!r}")
            elif isinstance(component, int):
                segments.append(component)
            elif isinstance(component, str):
                segments.extend(component.split("."))
            else:
                raise TypeError(
                    f"Key path components must be str or int, got {type(component).__name__}"
                )
        self._segments: Tuple[Segment, ...] = tuple(segments)

    @classmethod
    def coerce(cls, value: Any) -> "KeyPath":
        """Build a key path from a KeyPath, a component or a sequence of components."""
        if isinstance(value, KeyPath):
            return value
        if isinstance(value, (list, tuple)):
            return cls(*value)
        return cls(value)

    @property
    def segments(self) -> Tuple[Segment, ...]:
        return self._segments

    @property
    def is_empty(self) -> bool:
        return not self._segments

    def get(self, root: Any) -> Any:
        """
        Read the value this path points at.

        Args:
            root: Parsed JSON object to read from

        Returns:
            The value found (``None`` for JSON null) or ``MISSING`` when any
            segment does not match the container it meets. An empty path
            always yields ``MISSING``.
        """
        if self.is_empty:
            return MISSING
        node = root
        for segment in self._segments:
            node = _child(node, segment)
            if node is MISSING:
                return MISSING
        return node

    def set(self, root: Any, value: Any) -> None:
        """
        Write ``value`` at this path inside ``root``.

        Only existing containers are traversed; nothing is created on the way.
        A final object key is assigned (or deleted when ``value`` is
        ``MISSING``). A final array index is assigned only when it is in
        bounds. Any mismatch makes the call a no-op.

        Args:
            root: Parsed JSON object to modify in place
            value: Value to store, or ``MISSING`` to delete an object key
        """
        if self.is_empty:
            return
        parent = root
        for segment in self._segments[:-1]:
            parent = _child(parent, segment)
            if parent is MISSING:
                return

        last = self._segments[-1]
        if isinstance(last, str):
            if not isinstance(parent, dict):
                return
            if value is MISSING:
                parent.pop(last, None)
            else:
                parent[last] = value
        else:
            if not isinstance(parent, list) or value is MISSING:
                return
            if 0 <= last < len(parent):
                parent[last] = value

    def __len__(self) -> int:
        return len(self._segments)

    def __iter__(self) -> Iterator[Segment]:
        return iter(self._segments)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, KeyPath):
            return NotImplemented
        return self._segments == other._segments

    def __hash__(self) -> int:
        return hash(self._segments)

    def __repr__(self) -> str:
        return f"KeyPath({', '.join(repr(s) for s in self._segments)})"

    def __str__(self) -> str:
        return "".join(
            f"[{s}]" if isinstance(s, int) else (f".{s}" if i else s)
            for i, s in enumerate(self._segments)
        )


def _child(node: Any, segment: Segment) -> Any:
    # Integer segments index lists, string segments index dicts; nothing else matches.
    if isinstance(segment, int):
        if isinstance(node, list) and 0 <= segment < len(node):
            return node[segment]
        return MISSING
    if isinstance(node, dict) and segment in node:
        return node[segment]
    return MISSING


def get_value(root: Any, path: Union[KeyPath, Segment, Iterable[Segment]]) -> Any:
    """Read ``path`` from ``root``; see :meth:`KeyPath.get`."""
    return KeyPath.coerce(path).get(root)


def set_value(root: Any, path: Union[KeyPath, Segment, Iterable[Segment]], value: Any) -> None:
    """Write ``value`` at ``path`` inside ``root``; see :meth:`KeyPath.set`."""
    KeyPath.coerce(path).set(root, value)
