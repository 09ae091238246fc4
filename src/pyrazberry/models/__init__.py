"""Typed records decoded from gateway payloads."""

from pyrazberry.models._base import Timestamp, timestamp_to_datetime
from pyrazberry.models.command_class import CommandClassId
from pyrazberry.models.command_classes import (
    Basic,
    Battery,
    CommandClass,
    CommandClassBase,
    SensorBinary,
    SensorMultilevel,
    SensorReading,
    SwitchBinary,
    SwitchMultilevel,
    Unsupported,
    decode_command_class,
)
from pyrazberry.models.device import Device, apply_updates, build_device
from pyrazberry.models.sensors import BurglarAlarmData, GeneralPurposeBinaryData

__all__ = [
    "Basic",
    "Battery",
    "BurglarAlarmData",
    "CommandClass",
    "CommandClassBase",
    "CommandClassId",
    "Device",
    "GeneralPurposeBinaryData",
    "SensorBinary",
    "SensorMultilevel",
    "SensorReading",
    "SwitchBinary",
    "SwitchMultilevel",
    "Timestamp",
    "Unsupported",
    "apply_updates",
    "build_device",
    "decode_command_class",
    "timestamp_to_datetime",
]
