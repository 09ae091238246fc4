"""Field-level merge of delta leaves into a snapshot tree."""

from __future__ import annotations

import copy
from collections.abc import Sequence

from pyrazberry.tree import TreeValue


def walk_object(root: TreeValue, path: Sequence[str]) -> dict[str, TreeValue] | None:
    """Return the fields of the object node at *path*.

    ``None`` when a segment is missing or any node on the way (including
    the last one) is not an object.
    """
    node = root.find_path(path)
    if node is None:
        return None
    return node.as_object()


def merge_fields(target: dict[str, TreeValue], leaf: dict[str, TreeValue]) -> None:
    """Shallow merge: fields of *leaf* overwrite the same keys in *target*.

    Sibling fields absent from *leaf* are left untouched.
    """
    for key, value in leaf.items():
        target[key] = copy.deepcopy(value)
