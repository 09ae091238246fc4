"""Z-Wave command class identifiers known to the gateway decoder."""

from __future__ import annotations

import enum


class CommandClassId(enum.IntEnum):
    """The different Z-Wave command classes supported by various devices.

    Unlike the gateway's state enums there is no ``UNKNOWN`` member: an id
    outside this table is *unrecognized* and the caller drops it, which is
    distinct from a recognized id that has no decoder.
    """

    NO_OPERATION = 0x00
    BASIC = 0x20
    SWITCH_BINARY = 0x25
    SWITCH_MULTILEVEL = 0x26
    SENSOR_BINARY = 0x30
    SENSOR_MULTILEVEL = 0x31
    MULTI_CHANNEL = 0x60
    CONFIGURATION = 0x70
    ALARM = 0x71
    POWER_LEVEL = 0x73
    NODE_NAMING = 0x77
    FIRMWARE_UPDATE = 0x7A
    BATTERY = 0x80
    CLOCK = 0x81
    WAKEUP = 0x84
    ASSOCIATION = 0x85
    VERSION = 0x86
    MULTI_CHANNEL_ASSOCIATION = 0x8E
    ALARM_SENSOR = 0x9C
    ALARM_SILENCE = 0x9D
    SENSOR_CONFIGURATION = 0x9E

    @classmethod
    def from_byte(cls, command_class_id: int) -> CommandClassId | None:
        """Convert a command class byte into an identifier, if recognized."""
        try:
            return cls(command_class_id)
        except ValueError:
            return None

    @classmethod
    def from_key(cls, key: str) -> CommandClassId | None:
        """Parse a decimal ``commandClasses`` key such as ``"48"``.

        Keys that are not an unsigned byte, or bytes outside the table,
        are unrecognized.
        """
        if not key.isascii() or not key.isdigit():
            return None
        value = int(key)
        if value > 0xFF:
            return None
        return cls.from_byte(value)
