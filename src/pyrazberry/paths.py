"""Delta key parsing.

Delta documents are flat: every changed leaf is stored under a
dot-separated key such as::

    devices.14.instances.0.commandClasses.32.data.srcNodeId

which is parsed once into

* device id ``"14"``
* path ``("instances", "0", "commandClasses", "32", "data", "srcNodeId")``
* the tree value stored under that key.
"""

from __future__ import annotations

from dataclasses import dataclass

from pyrazberry._constants import DEVICES_PREFIX
from pyrazberry.exceptions import RazberryBadResponseError
from pyrazberry.tree import TreeValue


def split_key(key: str) -> tuple[str, ...]:
    """Split a dot-path key into its segments."""
    return tuple(key.split("."))


@dataclass(frozen=True, slots=True)
class DeviceUpdate:
    """A single update for a single device. There may be many per delta.

    ``path`` holds every segment after the device id; ``data`` is the
    leaf value stored under the full key.
    """

    path: tuple[str, ...]
    data: TreeValue

    def segment(self, index: int) -> str | None:
        """Return path segment *index*, or ``None`` when the path is shorter."""
        if 0 <= index < len(self.path):
            return self.path[index]
        return None


def parse_updates(root: TreeValue) -> dict[str, list[DeviceUpdate]]:
    """Group the device entries of a delta payload by device id.

    Keys that do not start with ``devices.`` (the document's own
    ``updateTime`` and other top-level metadata) are ignored. Updates keep
    the order they had in the document.

    Raises
    ------
    RazberryBadResponseError
        If *root* is not an object, or a device key does not carry a
        device id.
    """
    fields = root.as_object()
    if fields is None:
        raise RazberryBadResponseError("Delta payload is not an object")

    all_updates: dict[str, list[DeviceUpdate]] = {}
    for update_key, update_value in fields.items():
        if not update_key.startswith(DEVICES_PREFIX):
            # Everything is dumped into the top-level keyspace; only device
            # updates are of interest here.
            continue

        segments = split_key(update_key)
        if len(segments) < 2 or not segments[1]:
            raise RazberryBadResponseError(f"Delta key without device id: {update_key!r}")

        device_id = segments[1]
        update = DeviceUpdate(path=segments[2:], data=update_value)
        all_updates.setdefault(device_id, []).append(update)

    return all_updates
