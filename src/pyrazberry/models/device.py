"""Z-Wave device records."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from datetime import datetime

from pydantic import Field

from pyrazberry._constants import PRIMARY_INSTANCE
from pyrazberry.exceptions import RazberryBadResponseError
from pyrazberry.models._base import (
    RazberryBaseModel,
    Timestamp,
    require_int,
    require_object,
    require_str,
    timestamp_to_datetime,
)
from pyrazberry.models.command_class import CommandClassId
from pyrazberry.models.command_classes import CommandClass, Unsupported, decode_command_class
from pyrazberry.paths import DeviceUpdate
from pyrazberry.tree import TreeValue

_logger = logging.getLogger(__name__)


class Device(RazberryBaseModel):
    """A Z-Wave device as reported by the gateway.

    Built from the full ``/ZWaveAPI/Data`` payload (not the delta
    endpoint) and mutated in place by :meth:`process_updates`. Command
    classes are never removed once loaded.
    """

    id: str
    """The device id in Z-Way (a numeric string)."""
    name: str
    """User-defined name, reported as ``data.givenName``."""
    last_contacted: Timestamp
    """Value of ``data.lastReceived.updateTime``."""
    command_classes: dict[CommandClassId, CommandClass] = Field(default_factory=dict)
    """Decoded command classes of instance ``0``."""

    @property
    def last_contacted_utc(self) -> datetime:
        return timestamp_to_datetime(self.last_contacted)

    def __str__(self) -> str:
        return f"Device({self.id}, {self.name})"

    def get_command_class(self, command_class: CommandClassId) -> CommandClass | None:
        return self.command_classes.get(command_class)

    def process_updates(self, updates: Iterable[DeviceUpdate]) -> None:
        """Apply delta updates for this device, in order.

        Updates already applied are kept when a later one fails.

        Raises
        ------
        RazberryBadResponseError
            If an update leaf lacks a required field; processing of the
            remaining updates stops.
        """
        for update in updates:
            category = update.segment(0)
            if category == "data":
                if update.segment(1) == "lastReceived":
                    self.last_contacted = require_int(update.data, ("updateTime",))
            elif category == "instances":
                if update.segment(2) == "commandClasses":
                    self._process_command_class_update(update)
            else:
                _logger.debug("Ignoring %s update for device %s", category, self.id)

    def _process_command_class_update(self, update: DeviceUpdate) -> None:
        key = update.segment(3)
        if key is None:
            raise RazberryBadResponseError(f"Command class update without id for device {self.id}")

        if update.segment(1) != PRIMARY_INSTANCE:
            # Only instance 0 is decoded.
            return

        command_class_id = CommandClassId.from_key(key)
        if command_class_id is None:
            return

        instance = self.command_classes.get(command_class_id)
        if instance is None:
            # Not loaded at initialization.
            _logger.debug("Device %s has no %s loaded; update ignored", self.id, command_class_id.name)
            return
        instance.process_update(update)


def build_device(device_id: str, tree: TreeValue) -> Device:
    """Construct a device from its subtree of the full snapshot.

    Unrecognized command class ids are skipped, and recognized ids
    without a decoder are not stored.

    Raises
    ------
    RazberryBadResponseError
        If the name, last contact time or instance ``0`` command classes
        are missing, or a supported command class fails to decode.
    """
    name = require_str(tree, ("data", "givenName", "value"))
    last_contacted = require_int(tree, ("data", "lastReceived", "updateTime"))

    # TODO: decode instances other than 0 once multi-channel devices are modelled.
    cc_fields = require_object(tree, ("instances", PRIMARY_INSTANCE, "commandClasses"))

    command_classes: dict[CommandClassId, CommandClass] = {}
    for key, cc_tree in cc_fields.items():
        command_class_id = CommandClassId.from_key(key)
        if command_class_id is None:
            continue
        instance = decode_command_class(command_class_id, cc_tree)
        if isinstance(instance, Unsupported):
            continue
        command_classes[command_class_id] = instance

    return Device(
        id=device_id,
        name=name,
        last_contacted=last_contacted,
        command_classes=command_classes,
    )


def apply_updates(device: Device, updates: Iterable[DeviceUpdate]) -> None:
    """Apply *updates* to *device*; see :meth:`Device.process_updates`."""
    device.process_updates(updates)
