"""Base model and field readers for decoded gateway records.

Every typed record inherits from :class:`RazberryBaseModel`. The
``require_*`` helpers read one field out of a tree node and raise
:class:`~pyrazberry.exceptions.RazberryBadResponseError` when it is
missing or of the wrong variant, which is the failure mode for every
required field of a device or command-class subtree.
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import UTC, datetime

from pydantic import BaseModel, ConfigDict

from pyrazberry.exceptions import RazberryBadResponseError
from pyrazberry.tree import TreeValue

Timestamp = int
"""Gateway timestamp: seconds since epoch as reported by the gateway."""


def timestamp_to_datetime(value: Timestamp) -> datetime:
    """Convert a gateway timestamp to an aware UTC datetime."""
    return datetime.fromtimestamp(value, tz=UTC)


class RazberryBaseModel(BaseModel):
    """Base for mutable decoded records."""

    model_config = ConfigDict(
        extra="forbid",
        strict=True,
        validate_assignment=True,
    )


def _describe(path: Sequence[str]) -> str:
    return ".".join(path)


def _find(node: TreeValue, path: Sequence[str]) -> TreeValue:
    found = node.find_path(path)
    if found is None:
        raise RazberryBadResponseError(f"Missing required field {_describe(path)!r}")
    return found


def require_bool(node: TreeValue, path: Sequence[str]) -> bool:
    value = _find(node, path).as_bool()
    if value is None:
        raise RazberryBadResponseError(f"Field {_describe(path)!r} is not a boolean")
    return value


def require_int(node: TreeValue, path: Sequence[str]) -> int:
    value = _find(node, path).as_int()
    if value is None:
        raise RazberryBadResponseError(f"Field {_describe(path)!r} is not an integer")
    return value


def require_float(node: TreeValue, path: Sequence[str]) -> float:
    value = _find(node, path).as_float()
    if value is None:
        raise RazberryBadResponseError(f"Field {_describe(path)!r} is not a number")
    return value


def nullable_float(node: TreeValue, path: Sequence[str]) -> float | None:
    """Like :func:`require_float`, but an explicit ``null`` reads as ``None``."""
    found = _find(node, path)
    if found.is_null:
        return None
    value = found.as_float()
    if value is None:
        raise RazberryBadResponseError(f"Field {_describe(path)!r} is not a number")
    return value


def require_str(node: TreeValue, path: Sequence[str]) -> str:
    value = _find(node, path).as_str()
    if value is None:
        raise RazberryBadResponseError(f"Field {_describe(path)!r} is not a string")
    return value


def require_object(node: TreeValue, path: Sequence[str]) -> dict[str, TreeValue]:
    value = _find(node, path).as_object()
    if value is None:
        raise RazberryBadResponseError(f"Field {_describe(path)!r} is not an object")
    return value


def optional_str(node: TreeValue, path: Sequence[str]) -> str | None:
    found = node.find_path(path)
    return found.as_str() if found is not None else None
