"""Command-class decoders.

Each decoder follows the same two-method contract:

* :meth:`CommandClassBase.from_tree` builds the instance from the
  command-class subtree of a full snapshot
  (``devices.<id>.instances.0.commandClasses.<cc>``).
* :meth:`CommandClassBase.process_update` applies one
  :class:`~pyrazberry.paths.DeviceUpdate` in place.

Update paths are relative to the device, so index 3 is the command class
id and index 4 is normally ``"data"``::

    ("instances", "0", "commandClasses", "48", "data", "1")

Recognized ids without a decoder decode to :class:`Unsupported`.
"""

from __future__ import annotations

from datetime import datetime
from typing import ClassVar, Self

from pydantic import BaseModel, ConfigDict, Field

from pyrazberry.exceptions import RazberryBadResponseError
from pyrazberry.models._base import (
    RazberryBaseModel,
    Timestamp,
    nullable_float,
    optional_str,
    require_bool,
    require_int,
    require_object,
    timestamp_to_datetime,
)
from pyrazberry.models.command_class import CommandClassId
from pyrazberry.paths import DeviceUpdate
from pyrazberry.tree import TreeKind, TreeValue

_DATA_SEGMENT_INDEX = 4


class CommandClassBase(RazberryBaseModel):
    """Base for decoded command-class instances."""

    command_class: ClassVar[CommandClassId]

    @classmethod
    def from_tree(cls, tree: TreeValue) -> Self:
        raise NotImplementedError

    def process_update(self, update: DeviceUpdate) -> None:
        raise NotImplementedError


class Unsupported(BaseModel):
    """Tombstone for a recognized command class that has no decoder."""

    model_config = ConfigDict(frozen=True)

    command_class: CommandClassId


class SensorBinary(CommandClassBase):
    """Command class 0x30, general purpose sensor type ``1``."""

    command_class: ClassVar[CommandClassId] = CommandClassId.SENSOR_BINARY

    level: bool
    level_updated: Timestamp

    @property
    def level_updated_utc(self) -> datetime:
        return timestamp_to_datetime(self.level_updated)

    @classmethod
    def from_tree(cls, tree: TreeValue) -> Self:
        return cls(
            level=require_bool(tree, ("data", "1", "level", "value")),
            level_updated=require_int(tree, ("data", "1", "level", "updateTime")),
        )

    def process_update(self, update: DeviceUpdate) -> None:
        if update.segment(_DATA_SEGMENT_INDEX) != "data":
            return
        level = require_bool(update.data, ("level", "value"))
        level_updated = require_int(update.data, ("level", "updateTime"))
        self.level = level
        self.level_updated = level_updated


class _SingleValueCommandClass(CommandClassBase):
    """Command classes reporting one ``{value, updateTime}`` field under ``data``.

    An update addressed at ``...data`` carries the field object inside its
    leaf; one addressed at ``...data.<field>`` carries it directly. Updates
    to any other field are ignored.
    """

    source_field: ClassVar[str] = "level"
    value_kind: ClassVar[TreeKind] = TreeKind.INTEGER

    @classmethod
    def _read_field(cls, node: TreeValue, path: tuple[str, ...]) -> tuple[bool | int, Timestamp]:
        reader = require_bool if cls.value_kind is TreeKind.BOOL else require_int
        return reader(node, (*path, "value")), require_int(node, (*path, "updateTime"))

    @classmethod
    def from_tree(cls, tree: TreeValue) -> Self:
        level, level_updated = cls._read_field(tree, ("data", cls.source_field))
        return cls(level=level, level_updated=level_updated)

    def process_update(self, update: DeviceUpdate) -> None:
        if update.segment(_DATA_SEGMENT_INDEX) != "data":
            return
        tail = update.path[_DATA_SEGMENT_INDEX + 1 :]
        if not tail:
            path: tuple[str, ...] = (self.source_field,)
        elif tail == (self.source_field,):
            path = ()
        else:
            return
        level, level_updated = self._read_field(update.data, path)
        self.level = level
        self.level_updated = level_updated


class Basic(_SingleValueCommandClass):
    """Command class 0x20."""

    command_class: ClassVar[CommandClassId] = CommandClassId.BASIC

    level: int
    level_updated: Timestamp


class SwitchBinary(_SingleValueCommandClass):
    """Command class 0x25."""

    command_class: ClassVar[CommandClassId] = CommandClassId.SWITCH_BINARY
    value_kind: ClassVar[TreeKind] = TreeKind.BOOL

    level: bool
    level_updated: Timestamp


class SwitchMultilevel(_SingleValueCommandClass):
    """Command class 0x26."""

    command_class: ClassVar[CommandClassId] = CommandClassId.SWITCH_MULTILEVEL

    level: int
    level_updated: Timestamp


class Battery(_SingleValueCommandClass):
    """Command class 0x80. ``level`` is the charge in percent."""

    command_class: ClassVar[CommandClassId] = CommandClassId.BATTERY
    source_field: ClassVar[str] = "last"

    level: int
    level_updated: Timestamp


class SensorReading(RazberryBaseModel):
    """One multilevel sensor channel (temperature, luminance, ...)."""

    sensor_type: str | None = None
    value: float | None = None
    """``None`` until the channel has reported a value."""
    scale: str | None = None
    updated: Timestamp

    @property
    def updated_utc(self) -> datetime:
        return timestamp_to_datetime(self.updated)

    @classmethod
    def from_tree(cls, node: TreeValue) -> SensorReading:
        return cls(
            sensor_type=optional_str(node, ("sensorTypeString", "value")),
            value=nullable_float(node, ("val", "value")),
            scale=optional_str(node, ("scaleString", "value")),
            updated=require_int(node, ("val", "updateTime")),
        )


def _sensor_type(key: str) -> int | None:
    # str.isdigit also accepts non-ASCII digits such as "²".
    if key.isascii() and key.isdigit():
        return int(key)
    return None


class SensorMultilevel(CommandClassBase):
    """Command class 0x31, keyed by sensor type number."""

    command_class: ClassVar[CommandClassId] = CommandClassId.SENSOR_MULTILEVEL

    readings: dict[int, SensorReading] = Field(default_factory=dict)

    @staticmethod
    def _read_readings(fields: dict[str, TreeValue]) -> dict[int, SensorReading]:
        readings: dict[int, SensorReading] = {}
        for key, node in fields.items():
            sensor_type = _sensor_type(key)
            if sensor_type is not None and node.find("val") is not None:
                readings[sensor_type] = SensorReading.from_tree(node)
        return readings

    @classmethod
    def from_tree(cls, tree: TreeValue) -> Self:
        return cls(readings=cls._read_readings(require_object(tree, ("data",))))

    def process_update(self, update: DeviceUpdate) -> None:
        if update.segment(_DATA_SEGMENT_INDEX) != "data":
            return
        tail = update.path[_DATA_SEGMENT_INDEX + 1 :]
        if not tail:
            fields = update.data.as_object()
            if fields is None:
                raise RazberryBadResponseError("Multilevel sensor data update is not an object")
            self.readings = self._read_readings(fields)
            return
        sensor_type = _sensor_type(tail[0])
        if sensor_type is None:
            return
        if len(tail) == 1:
            self.readings[sensor_type] = SensorReading.from_tree(update.data)
        elif tail[1:] == ("val",):
            reading = self.readings.get(sensor_type)
            if reading is None:
                # Channel not present at load time.
                return
            value = nullable_float(update.data, ("value",))
            updated = require_int(update.data, ("updateTime",))
            reading.value = value
            reading.updated = updated


CommandClass = Basic | SwitchBinary | SwitchMultilevel | SensorBinary | SensorMultilevel | Battery

_DECODERS: dict[CommandClassId, type[CommandClassBase]] = {
    decoder.command_class: decoder
    for decoder in (Basic, SwitchBinary, SwitchMultilevel, SensorBinary, SensorMultilevel, Battery)
}


def decode_command_class(command_class: CommandClassId, tree: TreeValue) -> CommandClass | Unsupported:
    """Dispatch *tree* to the decoder registered for *command_class*.

    Raises
    ------
    RazberryBadResponseError
        If a required field of the subtree is missing or mistyped.
    """
    decoder = _DECODERS.get(command_class)
    if decoder is None:
        return Unsupported(command_class=command_class)
    return decoder.from_tree(tree)  # type: ignore[return-value]
