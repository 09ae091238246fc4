"""Generic tree value for decoded gateway JSON.

Every document the gateway returns is decoded once into an explicit
variant tree (:class:`TreeNull`, :class:`TreeBool`, :class:`TreeInteger`,
:class:`TreeFloat`, :class:`TreeString`, :class:`TreeArray`,
:class:`TreeObject`). Readers never coerce between variants: each
``as_*`` accessor returns ``None`` unless the node is of the matching
kind, so a boolean is never mistaken for an integer and a string is
never mistaken for a number.
"""

from __future__ import annotations

import json
from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any, ClassVar

from pyrazberry.exceptions import RazberryParseError

_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1


class TreeKind(StrEnum):
    NULL = "null"
    BOOL = "bool"
    INTEGER = "integer"
    FLOAT = "float"
    STRING = "string"
    ARRAY = "array"
    OBJECT = "object"


class TreeValue:
    """Base of all tree variants."""

    __slots__ = ()

    kind: ClassVar[TreeKind]

    def as_bool(self) -> bool | None:
        return None

    def as_int(self) -> int | None:
        return None

    def as_float(self) -> float | None:
        return None

    def as_str(self) -> str | None:
        return None

    def as_array(self) -> list[TreeValue] | None:
        return None

    def as_object(self) -> dict[str, TreeValue] | None:
        return None

    @property
    def is_null(self) -> bool:
        return self.kind is TreeKind.NULL

    def find(self, key: str) -> TreeValue | None:
        """Return the field *key* of an object node, else ``None``."""
        fields = self.as_object()
        if fields is None:
            return None
        return fields.get(key)

    def find_path(self, path: Iterable[str]) -> TreeValue | None:
        """Follow object fields along *path*; ``None`` if any step fails."""
        node: TreeValue | None = self
        for segment in path:
            if node is None:
                return None
            node = node.find(segment)
        return node

    def to_python(self) -> Any:
        raise NotImplementedError


@dataclass(slots=True)
class TreeNull(TreeValue):
    kind: ClassVar[TreeKind] = TreeKind.NULL

    def to_python(self) -> None:
        return None


@dataclass(slots=True)
class TreeBool(TreeValue):
    value: bool
    kind: ClassVar[TreeKind] = TreeKind.BOOL

    def as_bool(self) -> bool:
        return self.value

    def to_python(self) -> bool:
        return self.value


@dataclass(slots=True)
class TreeInteger(TreeValue):
    value: int
    kind: ClassVar[TreeKind] = TreeKind.INTEGER

    def as_int(self) -> int | None:
        # Timestamps and ids are signed 64-bit on the gateway side.
        if _INT64_MIN <= self.value <= _INT64_MAX:
            return self.value
        return None

    def as_float(self) -> float:
        return float(self.value)

    def to_python(self) -> int:
        return self.value


@dataclass(slots=True)
class TreeFloat(TreeValue):
    value: float
    kind: ClassVar[TreeKind] = TreeKind.FLOAT

    def as_float(self) -> float:
        return self.value

    def to_python(self) -> float:
        return self.value


@dataclass(slots=True)
class TreeString(TreeValue):
    value: str
    kind: ClassVar[TreeKind] = TreeKind.STRING

    def as_str(self) -> str:
        return self.value

    def to_python(self) -> str:
        return self.value


@dataclass(slots=True)
class TreeArray(TreeValue):
    items: list[TreeValue] = field(default_factory=list)
    kind: ClassVar[TreeKind] = TreeKind.ARRAY

    def as_array(self) -> list[TreeValue]:
        return self.items

    def to_python(self) -> list[Any]:
        return [item.to_python() for item in self.items]


@dataclass(slots=True)
class TreeObject(TreeValue):
    fields: dict[str, TreeValue] = field(default_factory=dict)
    kind: ClassVar[TreeKind] = TreeKind.OBJECT

    def as_object(self) -> dict[str, TreeValue]:
        return self.fields

    def to_python(self) -> dict[str, Any]:
        return {key: value.to_python() for key, value in self.fields.items()}


def tree_from_python(value: Any) -> TreeValue:
    """Convert decoded JSON (``json.loads`` output) into a tree.

    Raises :class:`TypeError` for values JSON cannot produce.
    """
    if value is None:
        return TreeNull()
    # bool is a subclass of int; test it first.
    if isinstance(value, bool):
        return TreeBool(value)
    if isinstance(value, int):
        return TreeInteger(value)
    if isinstance(value, float):
        return TreeFloat(value)
    if isinstance(value, str):
        return TreeString(value)
    if isinstance(value, list):
        return TreeArray([tree_from_python(item) for item in value])
    if isinstance(value, dict):
        return TreeObject({str(key): tree_from_python(item) for key, item in value.items()})
    raise TypeError(f"cannot convert {type(value).__name__} to a tree value")


def parse_json(text: str | bytes) -> TreeValue:
    """Decode JSON text into a tree.

    Raises
    ------
    RazberryParseError
        If *text* is not valid JSON.
    """
    try:
        decoded = json.loads(text)
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        preview = text[:64] if isinstance(text, str) else repr(text[:64])
        raise RazberryParseError(f"Invalid JSON: {preview}") from exc
    return tree_from_python(decoded)
