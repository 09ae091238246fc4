"""Read-only sensor projections over raw tree nodes.

These wrap a single payload node of a full or partial snapshot and
expose typed accessors. They never mutate the tree; an accessor whose
field is missing or of the wrong type returns ``None``.
"""

from __future__ import annotations

import copy

from pyrazberry.models._base import Timestamp
from pyrazberry.tree import TreeValue

# Event mask values reported by the two known alarm sensor generations.
_EVENT_MASK_GEN5 = 128
_EVENT_MASK_GEN6 = 264
# Gen6 event value meaning "unknown".
_EVENT_UNKNOWN = 254


class _SensorProjection:
    __slots__ = ("_tree",)

    def __init__(self, tree: TreeValue) -> None:
        self._tree = copy.deepcopy(tree)

    @property
    def tree(self) -> TreeValue:
        """The projected node."""
        return self._tree

    def _int(self, *path: str) -> int | None:
        node = self._tree.find_path(path)
        return node.as_int() if node is not None else None

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._tree.to_python()!r})"


class BurglarAlarmData(_SensorProjection):
    """Command class 0x71 (113), payload ``7``."""

    __slots__ = ()

    def activated(self) -> bool | None:
        """Heuristic for whether the alarm has been activated.

        Aeotec Gen5 and Gen6 multisensors report activation differently:
        Gen5 (event mask 128) uses ``status``, Gen6 (event mask 264) uses
        ``event``. Other hardware yields ``None``.
        """
        mask = self.event_mask
        if mask is None:
            return None
        if mask == _EVENT_MASK_GEN5:
            return self.status
        if mask == _EVENT_MASK_GEN6:
            event = self.event
            if event is None:
                return None
            return event not in (0, _EVENT_UNKNOWN)
        return None

    @property
    def status(self) -> bool | None:
        """Whether the alarm is triggered.

        Only meaningful for Gen5 sensors; Gen6 reports through ``event``.
        """
        status = self._int("status", "value")
        return status != 0 if status is not None else None

    @property
    def status_updated(self) -> Timestamp | None:
        return self._int("status", "updateTime")

    @property
    def event(self) -> int | None:
        return self._int("event", "value")

    @property
    def event_updated(self) -> Timestamp | None:
        return self._int("event", "updateTime")

    @property
    def event_mask(self) -> int | None:
        return self._int("eventMask", "value")

    @property
    def event_string(self) -> str | None:
        node = self._tree.find_path(("eventString", "value"))
        return node.as_str() if node is not None else None


class GeneralPurposeBinaryData(_SensorProjection):
    """Command class 0x30 (48), payload ``1``."""

    __slots__ = ()

    @property
    def status(self) -> bool | None:
        """Whether the sensor is triggered."""
        node = self._tree.find_path(("level", "value"))
        return node.as_bool() if node is not None else None

    @property
    def status_updated(self) -> Timestamp | None:
        return self._int("level", "updateTime")
